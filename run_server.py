#!/usr/bin/env python3
"""Run the relay server directly."""

import uvicorn
import sys
from pathlib import Path

# Add the current directory to Python path
sys.path.insert(0, str(Path(__file__).parent))

from loreal_chat.config import get_settings

def main():
    """Run the FastAPI relay server."""
    settings = get_settings()

    uvicorn.run(
        "loreal_chat.relay.app:app",
        host=settings.relay_host,
        port=settings.relay_port,
        reload=True,
        log_level="info"
    )

if __name__ == "__main__":
    main()
