"""Run the relay with uvicorn."""

import uvicorn

from .infrastructure.config import get_settings
from .infrastructure.logging_config import configure_logging


def main() -> None:
    """Serve the relay on the configured host and port."""
    settings = get_settings()
    configure_logging(settings)

    uvicorn.run(
        "sludge.api.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
        access_log=False,
        proxy_headers=True,
    )


if __name__ == "__main__":
    main()
