"""
Main entry point for the CDL CLI when run as a module.

This allows the CLI to be executed using:
    python -m cdl.cli
"""

import sys

from . import main

if __name__ == '__main__':
    sys.exit(main())
