import uvicorn

from lifetime_demo.config import get_settings
from lifetime_demo.infrastructure.api import create_app
from lifetime_demo.logging_config import configure_logging


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
