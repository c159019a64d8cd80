"""Entry point for the standalone storage service."""

import uvicorn

from nessy_storage.config import settings
from nessy_storage.main import configure_logging, create_app


def main() -> None:
    configure_logging()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="info",
    )


if __name__ == "__main__":
    main()
