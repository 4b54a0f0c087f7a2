"""Entry point for ``python -m netplanctl`` and the ``netplanctl`` console script."""

from __future__ import annotations

import sys

from netplanctl import configure_logging


def main() -> None:
    """Main entry point: configure logging and run the CLI."""
    configure_logging()

    from netplanctl.cli import main as cli_main

    cli_main(sys.argv[1:])


if __name__ == "__main__":
    main()
