"""Server entry point"""

import uvicorn

from switchdesk.app import create_app
from switchdesk.core.config import get_settings


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
        # Protocol-level ping; a peer that misses the pong is disconnected
        ws_ping_interval=settings.liveness_interval,
        ws_ping_timeout=settings.liveness_interval,
        # Forced exit if shutdown hangs past the grace period
        timeout_graceful_shutdown=int(settings.shutdown_timeout),
    )


if __name__ == "__main__":
    run()
