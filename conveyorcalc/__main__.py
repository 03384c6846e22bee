"""
Entry point for running conveyorcalc as a module.

Usage:
    python -m conveyorcalc calculate --input example.json
    python -m conveyorcalc make-example
    python -m conveyorcalc serve --port 8000
"""

import sys

from conveyorcalc.cli.main import cli

if __name__ == "__main__":
    sys.exit(cli())
