"""
Module execution entry point.

Allows running with: python -m dynamerkle_cli
"""

import sys
from dynamerkle_cli.main import main

if __name__ == "__main__":
    sys.exit(main())
