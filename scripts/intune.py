#!/usr/bin/env python3
"""
Intune CLI - development entry point.

Thin router; all logic lives in intune.cli command classes.
"""

import sys
from pathlib import Path

# Add src to path for development
src_path = Path(__file__).parent.parent / "src"
if src_path.exists():
    sys.path.insert(0, str(src_path))

from intune.cli.main import main


if __name__ == "__main__":
    sys.exit(main())
