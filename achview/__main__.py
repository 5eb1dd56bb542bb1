"""CLI entry point for achview.

Enables invocation via `python -m achview` or the `achview` script.
"""

import sys

from achview.cli.app import app


def main() -> None:
    exit_code = app()
    sys.exit(exit_code if exit_code is not None else 0)


if __name__ == "__main__":
    main()
