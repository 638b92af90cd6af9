"""
Korrupt - Command Line Interface

Convenience launcher for running the CLI from a source checkout.
"""

import sys

from korrupt.cli.main import main

if __name__ == "__main__":
    sys.exit(main())
