"""Uvicorn entry point for the relay."""

import uvicorn

from .config import get_settings


def main():
    """Run the relay server."""
    settings = get_settings()

    uvicorn.run(
        "loreal_chat.relay.app:app",
        host=settings.relay_host,
        port=settings.relay_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
