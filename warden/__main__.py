"""Command-line entry point.

Usage:
    python -m warden init-db        # create tables (dev/test; use Alembic in prod)
    python -m warden purge          # run one purge sweep now
    python -m warden reconcile      # audit inactive rows missing a ledger entry
    python -m warden reap-tokens    # delete expired stored tokens
    python -m warden scheduler      # run the daily purge loop until interrupted

Exit code is 1 when the command fails.
"""

import argparse
import asyncio
import json
import sys
from collections.abc import Sequence

from warden.core.config import get_settings
from warden.core.container import Container, build_container
from warden.core.result import Failure, Success


async def _init_db(container: Container) -> int:
    await container.database.create_all()
    container.logger.info("Database tables created")
    return 0


async def _purge(container: Container) -> int:
    match await container.purge_scheduler.trigger():
        case Success(value=report):
            print(json.dumps(report.to_dict(), indent=2))
            return 0
        case Failure(error=error):
            print(f"Purge failed: {error}", file=sys.stderr)
            return 1


async def _reconcile(container: Container) -> int:
    match await container.purge_service.reconcile():
        case Success(value=appended):
            print(json.dumps(appended, indent=2))
            return 0
        case Failure(error=error):
            print(f"Reconcile failed: {error}", file=sys.stderr)
            return 1


async def _reap_tokens(container: Container) -> int:
    match await container.token_reaper.reap():
        case Success(value=deleted):
            print(f"Deleted {deleted} expired token(s)")
            return 0
        case Failure(error=error):
            print(f"Token reaping failed: {error}", file=sys.stderr)
            return 1


async def _scheduler(container: Container) -> int:
    await container.purge_scheduler.run_forever()
    return 0


COMMANDS = {
    "init-db": _init_db,
    "purge": _purge,
    "reconcile": _reconcile,
    "reap-tokens": _reap_tokens,
    "scheduler": _scheduler,
}


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="warden",
        description="Soft-delete purge and token maintenance.",
    )
    parser.add_argument("command", choices=sorted(COMMANDS))
    return parser.parse_args(argv)


async def _run(command: str) -> int:
    container = build_container(get_settings())
    try:
        return await COMMANDS[command](container)
    finally:
        await container.close()


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    try:
        return asyncio.run(_run(args.command))
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())
