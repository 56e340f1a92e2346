"""Entry-point for launching the CLI application."""
from __future__ import annotations

import logging
import os
import sys

from .presentation.cli.app import main as cli_main

LOG_LEVEL_ENV_VAR = "SPACE_DYSTOPIA_LOG_LEVEL"


def configure_logging() -> None:
    """Configure root logging once from the environment."""
    level_name = os.getenv(LOG_LEVEL_ENV_VAR, "WARNING").strip().upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main() -> None:
    """Run the CLI presentation layer."""
    configure_logging()
    sys.exit(cli_main())


if __name__ == "__main__":
    main()
