import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from lifetime_demo.application import (
    OPERATION_SCOPED,
    OPERATION_SINGLETON,
    OPERATION_TRANSIENT,
    LifetimeRegistry,
    OperationService,
)
from lifetime_demo.config import DemoSettings
from lifetime_demo.domain import InstanceRecord, Lifetime
from lifetime_demo.infrastructure.api.schemas import (
    ComparisonResponse,
    HealthResponse,
    LifetimeAnalysis,
    LifetimeIds,
    LifetimeSummary,
    MultipleResponse,
    OperationView,
    SimpleResponse,
)
from lifetime_demo.infrastructure.fastapi_integration import create_record_dependency, get_request_scope

logger = logging.getLogger(__name__)

OK = "✅"
WRONG = "❌"


def _ids(transient: InstanceRecord, scoped: InstanceRecord, singleton: InstanceRecord) -> LifetimeIds:
    return LifetimeIds(
        transient=transient.instance_id,
        scoped=scoped.instance_id,
        singleton=singleton.instance_id,
    )


def _verdict(expected_same: bool, actual_same: bool, good: str, bad: str) -> str:
    return f"{OK} {good}" if expected_same == actual_same else f"{WRONG} {bad}"


def create_operations_router(registry: LifetimeRegistry, settings: DemoSettings) -> APIRouter:
    """Build the router exposing operation ids for each lifetime.

    Args:
        registry: Registry holding the operation capabilities.
        settings: Settings controlling id formatting.

    Returns:
        Router with the ``/api/operations`` endpoints and ``/health``.
    """
    router = APIRouter()

    get_transient = create_record_dependency(registry, OPERATION_TRANSIENT)
    get_scoped = create_record_dependency(registry, OPERATION_SCOPED)
    get_singleton = create_record_dependency(registry, OPERATION_SINGLETON)

    def get_operation_service(request: Request) -> OperationService:
        return OperationService(registry, get_request_scope(request))

    @router.get("/api/operations", response_model=ComparisonResponse, tags=["operations"])
    def compare_operations(
        transient: InstanceRecord = Depends(get_transient),
        scoped: InstanceRecord = Depends(get_scoped),
        singleton: InstanceRecord = Depends(get_singleton),
        service: OperationService = Depends(get_operation_service),
    ) -> ComparisonResponse:
        """Show the ids resolved by the handler and by a dependent service."""
        logger.info("Getting operation IDs")
        return ComparisonResponse(
            from_handler=_ids(transient, scoped, singleton),
            from_service=_ids(service.transient, service.scoped, service.singleton),
            analysis=LifetimeAnalysis(
                transient=_verdict(
                    False,
                    transient.instance_id == service.transient.instance_id,
                    "Different IDs - Each injection gets a new instance",
                    "Same IDs - This should not happen!",
                ),
                scoped=_verdict(
                    True,
                    scoped.instance_id == service.scoped.instance_id,
                    "Same IDs - Same instance within this request",
                    "Different IDs - This should not happen!",
                ),
                singleton=_verdict(
                    True,
                    singleton.instance_id == service.singleton.instance_id,
                    "Same IDs - Same instance for entire app lifetime",
                    "Different IDs - This should not happen!",
                ),
            ),
            summary=LifetimeSummary(
                transient=Lifetime.PER_REQUEST.behavior,
                scoped=Lifetime.PER_SCOPE.behavior,
                singleton=Lifetime.PER_PROCESS.behavior,
            ),
            timestamp=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S.%f")[:-3] + " UTC",
        )

    @router.get("/api/operations/simple", response_model=SimpleResponse, tags=["operations"])
    def simple_operations(
        transient: InstanceRecord = Depends(get_transient),
        scoped: InstanceRecord = Depends(get_scoped),
        singleton: InstanceRecord = Depends(get_singleton),
    ) -> SimpleResponse:
        """Show the current ids; call repeatedly to see which ones change."""

        def view(record: InstanceRecord, behavior: str) -> OperationView:
            return OperationView(
                short_id=record.short(settings.short_id_length),
                full_id=record.instance_id,
                sequence=record.sequence,
                behavior=behavior,
            )

        return SimpleResponse(
            operations={
                "transient": view(transient, "Changes every call"),
                "scoped": view(scoped, "Changes per request"),
                "singleton": view(singleton, "Never changes"),
            },
            request_time=datetime.now(timezone.utc).strftime("%H:%M:%S.%f")[:-3],
        )

    @router.get("/api/operations/multiple", response_model=MultipleResponse, tags=["operations"])
    def multiple_operations(
        transient: InstanceRecord = Depends(get_transient),
        scoped: InstanceRecord = Depends(get_scoped),
        singleton: InstanceRecord = Depends(get_singleton),
        another_transient: InstanceRecord = Depends(get_transient, use_cache=False),
        another_scoped: InstanceRecord = Depends(get_scoped, use_cache=False),
        another_singleton: InstanceRecord = Depends(get_singleton, use_cache=False),
    ) -> MultipleResponse:
        """Resolve every lifetime twice within the same request."""
        return MultipleResponse(
            first_resolution=_ids(transient, scoped, singleton),
            second_resolution=_ids(another_transient, another_scoped, another_singleton),
            analysis=LifetimeAnalysis(
                transient=_verdict(
                    False,
                    transient.instance_id == another_transient.instance_id,
                    "Different (as expected for per-request)",
                    "ERROR: Should be different!",
                ),
                scoped=_verdict(
                    True,
                    scoped.instance_id == another_scoped.instance_id,
                    "Same (as expected for per-scope)",
                    "ERROR: Should be same!",
                ),
                singleton=_verdict(
                    True,
                    singleton.instance_id == another_singleton.instance_id,
                    "Same (as expected for per-process)",
                    "ERROR: Should be same!",
                ),
            ),
        )

    @router.get("/health", response_model=HealthResponse, tags=["health"])
    def health() -> HealthResponse:
        return HealthResponse(
            capabilities={key: reg.lifetime.value for key, reg in registry.registrations().items()},
        )

    return router
