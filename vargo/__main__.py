"""
Entry point for running vargo as a module.

This allows the package to be executed with: python -m vargo
"""

import sys

from .main import main

if __name__ == "__main__":
    sys.exit(main())
