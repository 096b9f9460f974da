"""
Screenshot Relay entrypoint - runs uvicorn server.
"""

import uvicorn

from screenshot_relay.app import build_app
from screenshot_relay.config import get_settings


def main() -> None:
    """Run the Screenshot Relay server."""
    settings = get_settings()
    app = build_app(settings)

    print(f"Starting Screenshot Relay on http://{settings.host}:{settings.port}")
    print(f"Docs: http://{settings.host}:{settings.port}/docs")

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
