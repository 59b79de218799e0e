"""Run the service: ``python -m transaction_api``."""
import sys

import structlog
import uvicorn

from transaction_api.core.config import get_settings
from transaction_api.main import create_application


def main() -> int:
    """Serve until shutdown. Returns 1 when the server never started.

    Logging is configured by the application lifespan. A port that cannot be
    bound makes uvicorn raise SystemExit(1) itself.
    """
    settings = get_settings()

    app = create_application(settings)
    server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=settings.HOST,
            port=settings.PORT,
            log_level=settings.LOG_LEVEL.lower(),
            lifespan="on",
        )
    )
    server.run()

    if not server.started:
        structlog.get_logger().critical("Server failed to start")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
