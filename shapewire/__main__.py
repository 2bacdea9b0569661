"""
__main__ provides the console-script entrypoint for the shapewire package.
"""
from __future__ import annotations

import sys

from shapewire.cli import main as cli_main


def main(argv: list[str] | None = None) -> None:
    """
    main is the entrypoint for the `shapewire` console script.
    """
    sys.exit(cli_main(argv))


if __name__ == "__main__":
    main()
