"""Launch the assistant TUI: ``python -m assistbot`` or ``assistbot``."""

import asyncio

from .ui import run_textual_tui


def main() -> None:
    asyncio.run(run_textual_tui())


if __name__ == "__main__":
    main()
