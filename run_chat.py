#!/usr/bin/env python3
"""Start the terminal chat client."""

import sys
from pathlib import Path

# Add the current directory to Python path
sys.path.insert(0, str(Path(__file__).parent))

from loreal_chat.cli import main

if __name__ == "__main__":
    main()
