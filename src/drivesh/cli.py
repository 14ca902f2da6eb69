"""Command line entry point: `drivesh`."""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Optional, Sequence

from drivesh.config import Settings
from drivesh.logging_setup import configure_logging
from drivesh.session import Session
from drivesh.shell import ShellApp

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="drivesh",
        description="Browse, copy and paste files across all your drives from one prompt.",
    )
    parser.add_argument("--home", help="State directory (default: $DRIVESH_HOME or ~/.config/drivesh)")
    parser.add_argument("--server", help="Default files API server address")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


async def run_shell(settings: Settings) -> None:
    async with Session.open(settings) as session:
        await ShellApp(session).run()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings = Settings.from_env().with_overrides(
        home=args.home,
        server=args.server,
        log_level="DEBUG" if args.verbose else None,
    )
    configure_logging(settings.log_level)
    logger.debug("Using state file %s", settings.state_file)

    try:
        asyncio.run(run_shell(settings))
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
