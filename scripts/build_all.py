#!/usr/bin/env python3
"""
Assemble the site into build/ next to this script's parent directory.

Takes no arguments: the project root is the parent of scripts/. Exits 0 on
success and 1 on any fatal error.
"""

import sys
from pathlib import Path

from sitebuild.cli.main import run_build, setup_logging
from sitebuild.config import BuildConfig


def main() -> int:
    setup_logging()
    root = Path(__file__).resolve().parent.parent
    return run_build(BuildConfig.from_env(root))


if __name__ == "__main__":
    sys.exit(main())
