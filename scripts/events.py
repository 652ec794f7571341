#!/usr/bin/env python3

"""Maintenance CLI for the events database, see event_service/cli.py."""

import sys
from pathlib import Path

# Add project root to Python path
sys.path.append(str(Path(__file__).parent.parent))

from event_service.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
