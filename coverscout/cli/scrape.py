"""CLI for one-shot cover lookups through the FlareSolverr proxy.

Usage::

    # Songs Johnny Cash covered (first page)
    python -m coverscout.cli.scrape covers "Johnny Cash"

    # Songs of Nine Inch Nails covered by others, page 2
    python -m coverscout.cli.scrape covered "Nine Inch Nails" --page 2

    # Point at a different proxy, fail fast
    FLARESOLVERR_URL=http://localhost:8191/v1 \\
        python -m coverscout.cli.scrape covers "Portishead" --max-attempts 1

Prints the same JSON envelope the HTTP API returns.  Logs go to stderr.
Exit status is 0 on success and 1 when the lookup fails.
"""

from __future__ import annotations

import argparse
import asyncio
import sys

import httpx

from coverscout.config import Settings, settings
from coverscout.models.covers import RelationKind
from coverscout.utils.errors import CoverScoutError

_KIND_BY_COMMAND = {
    "covers": RelationKind.COVERS_BY,
    "covered": RelationKind.COVERED_BY_OTHERS,
}


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with ``covers`` and ``covered`` subcommands."""
    parser = argparse.ArgumentParser(
        prog="coverscout",
        description="Look up cover-song relationships for an artist on WhoSampled.",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        default="WARNING",
        help="Log level for stderr output (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for command, kind in _KIND_BY_COMMAND.items():
        help_text = (
            "Songs the artist covered"
            if kind is RelationKind.COVERS_BY
            else "Songs of the artist covered by others"
        )
        sub = subparsers.add_parser(command, help=help_text)
        sub.add_argument("artist", help="Artist name as it appears on WhoSampled")
        sub.add_argument("--page", type=_positive_int, default=1, help="Listing page (default: 1)")
        sub.add_argument(
            "--max-attempts",
            type=_positive_int,
            default=None,
            help="Proxy attempt budget (default: FETCH_MAX_ATTEMPTS)",
        )

    return parser


async def _run(args: argparse.Namespace, app_settings: Settings) -> int:
    from coverscout.api.schemas import CoversResponse
    from coverscout.providers.fetcher.flaresolverr_provider import FlareSolverrFetcher
    from coverscout.services.covers_service import CoversService

    if args.max_attempts is not None:
        app_settings = app_settings.model_copy(update={"fetch_max_attempts": args.max_attempts})

    async with httpx.AsyncClient() as client:
        fetcher = FlareSolverrFetcher.from_settings(client, app_settings)
        service = CoversService(fetcher=fetcher, base_url=app_settings.site_base_url)
        try:
            app_settings.validate_fetch_budget()
            result = await service.scrape(args.artist, _KIND_BY_COMMAND[args.command], args.page)
        except CoverScoutError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    print(CoversResponse.from_result(result).model_dump_json(by_alias=True, indent=2))
    return 0


def main(argv: list[str] | None = None, app_settings: Settings | None = None) -> int:
    """Parse *argv* and run the lookup; returns the process exit code."""
    from coverscout.utils.logging import configure_logging

    args = build_parser().parse_args(argv)
    configure_logging(log_level=args.log_level, stream=sys.stderr)
    return asyncio.run(_run(args, app_settings or settings))


if __name__ == "__main__":
    sys.exit(main())
