#!/usr/bin/env python3
"""
Collage Generator

Main entry point: arranges all images of a directory on a canvas of fixed
size using a genetic search over slicing tree layouts.

Usage:
    python3 main.py photos/
    python3 main.py photos/ sunny_day.jpg:5 --config config.yaml
    python3 main.py --help
"""

import sys
from pathlib import Path

# Add project root to path if needed
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from collage.cli import main


if __name__ == "__main__":
    sys.exit(main())
