"""Integration tests for lifetime guarantees of the registry."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from lifetime_demo import LifetimeRegistry, MissingScopeError
from lifetime_demo.application import LifetimeManager, RecordFactory


class TestLifetimeGuarantees:
    """Test the reuse rules of each lifetime across scopes."""

    def test_per_process_same_id_across_scopes(self):
        """Test that per-process ids match across scopes and without scope."""
        registry = LifetimeRegistry()
        registry.register_per_process("config")

        with registry.scope() as scope_a:
            from_a = registry.resolve("config", scope=scope_a)
        with registry.scope() as scope_b:
            from_b = registry.resolve("config", scope=scope_b)
        without_scope = registry.resolve("config")

        assert from_a.instance_id == from_b.instance_id == without_scope.instance_id

    def test_per_scope_example(self):
        """Test the scope A / scope B walkthrough."""
        registry = LifetimeRegistry()
        registry.register_per_scope("svc")

        scope_a = registry.begin_scope()
        first = registry.resolve("svc", scope=scope_a)
        second = registry.resolve("svc", scope=scope_a)

        scope_b = registry.begin_scope()
        other = registry.resolve("svc", scope=scope_b)

        assert first.instance_id == second.instance_id
        assert other.instance_id != first.instance_id

    def test_per_request_different_everywhere(self):
        """Test that per-request ids never repeat, in or out of scopes."""
        registry = LifetimeRegistry()
        registry.register_per_request("token")
        ids = []

        with registry.scope() as scope:
            ids.append(registry.resolve("token", scope=scope).instance_id)
            ids.append(registry.resolve("token", scope=scope).instance_id)
        ids.append(registry.resolve("token").instance_id)

        assert len(set(ids)) == 3

    def test_per_scope_without_scope_fails(self):
        """Test that resolving per-scope with no active scope fails."""
        registry = LifetimeRegistry()
        registry.register_per_scope("svc")

        with pytest.raises(MissingScopeError):
            registry.resolve("svc")

    def test_new_scope_after_end_gets_new_record(self):
        """Test that ending a scope forgets its per-scope records."""
        registry = LifetimeRegistry()
        registry.register_per_scope("svc")

        scope = registry.begin_scope()
        ended_id = registry.resolve("svc", scope=scope).instance_id
        registry.end_scope(scope)

        with registry.scope() as fresh:
            assert registry.resolve("svc", scope=fresh).instance_id != ended_id

    def test_same_type_bound_to_several_lifetimes(self):
        """Test that the lifetime is attached to the key, not the record type."""
        registry = LifetimeRegistry()
        registry.register_per_request("op.transient")
        registry.register_per_scope("op.scoped")
        registry.register_per_process("op.singleton")

        with registry.scope() as scope:
            records = {key: registry.resolve(key, scope=scope) for key in registry.registrations()}
            again = {key: registry.resolve(key, scope=scope) for key in registry.registrations()}

        assert records["op.transient"] != again["op.transient"]
        assert records["op.scoped"] == again["op.scoped"]
        assert records["op.singleton"] == again["op.singleton"]

    def test_sequence_numbers_follow_creation_order(self):
        """Test that only created records consume sequence numbers."""
        registry = LifetimeRegistry()
        registry.register_per_process("config")
        registry.register_per_request("token")

        assert registry.resolve("config").sequence == 1
        assert registry.resolve("config").sequence == 1
        assert registry.resolve("token").sequence == 2
        assert registry.resolve("token").sequence == 3


class TestConcurrentResolution:
    """Test per-process creation under concurrent first access."""

    @pytest.mark.parametrize("thread_count", [2, 16, 64])
    def test_concurrent_first_resolution_creates_one_record(self, thread_count):
        """Test that N racing threads observe one record and one sequence step."""
        factory = RecordFactory()
        registry = LifetimeRegistry(LifetimeManager(factory))
        registry.register_per_process("shared")
        barrier = threading.Barrier(thread_count)

        def resolve():
            barrier.wait()
            return registry.resolve("shared")

        with ThreadPoolExecutor(max_workers=thread_count) as executor:
            records = list(executor.map(lambda _: resolve(), range(thread_count)))

        assert len({record.instance_id for record in records}) == 1
        assert factory.created_count == 1

    def test_concurrent_scopes_are_isolated(self):
        """Test that each thread's scope keeps its own per-scope record."""
        registry = LifetimeRegistry()
        registry.register_per_scope("svc")
        registry.register_per_process("config")
        thread_count = 8
        barrier = threading.Barrier(thread_count)

        def work():
            with registry.scope() as scope:
                barrier.wait()
                first = registry.resolve("svc", scope=scope)
                second = registry.resolve("svc", scope=scope)
                assert first == second
                return first.instance_id, registry.resolve("config").instance_id

        with ThreadPoolExecutor(max_workers=thread_count) as executor:
            results = list(executor.map(lambda _: work(), range(thread_count)))

        scoped_ids = {scoped for scoped, _ in results}
        config_ids = {config for _, config in results}
        assert len(scoped_ids) == thread_count
        assert len(config_ids) == 1
