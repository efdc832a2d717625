"""
Module execution entry point.

Allows running with: python -m ethdigest_cli
"""

import sys
from ethdigest_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
