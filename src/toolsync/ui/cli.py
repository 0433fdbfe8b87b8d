# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from toolsync.app import (
    check_product_hunt_connection,
    get_sync_statistics,
    seed_default_categories,
    sync_product_hunt,
)
from toolsync.config import configure_logging, get_sync_config
from toolsync.domain.data_integration import SyncRequest, parse_order
from toolsync.domain.ports.fetching import RankingOrder
from toolsync.domain.time_windows import DateWindow

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

DEFAULT_SUBMITTER = "toolsync-cli"


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    sync_config = get_sync_config()
    parser = argparse.ArgumentParser(
        description="Synchronise Product Hunt listings into the catalog"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync", help="Import Product Hunt products")
    sync.add_argument(
        "--limit",
        type=int,
        default=sync_config.default_limit,
        help=f"Number of products to fetch, 1-{sync_config.max_limit} (default: %(default)s)",
    )
    sync.add_argument(
        "--order",
        type=str,
        default=RankingOrder.VOTES.value,
        help="Ranking order: VOTES, NEWEST, RANKING or FEATURED_AT (default: %(default)s)",
    )
    policy = sync.add_mutually_exclusive_group()
    policy.add_argument(
        "--force",
        action="store_true",
        help="Create submissions even when the product already exists",
    )
    policy.add_argument(
        "--update-existing",
        action="store_true",
        help="Overwrite matching published tools instead of skipping them",
    )
    mode = sync.add_mutually_exclusive_group()
    mode.add_argument("--url", type=str, help="Sync a single product by URL or slug")
    mode.add_argument(
        "--stale-categories",
        action="store_true",
        help="Backfill categories for tools that have none",
    )
    mode.add_argument(
        "--start",
        type=str,
        help="ISO-8601 date or timestamp: only products launched after it",
    )
    mode.add_argument(
        "--lookback-days",
        type=int,
        help="Only products launched in the last N days",
    )
    sync.add_argument(
        "--end",
        type=str,
        help="ISO-8601 date or timestamp: only products launched before it",
    )
    sync.add_argument(
        "--submitted-by",
        type=str,
        default=os.getenv("TOOLSYNC_SUBMITTED_BY", DEFAULT_SUBMITTER),
        help="Identity recorded on created submissions (default: %(default)s)",
    )

    subparsers.add_parser("stats", help="Show sync statistics")
    subparsers.add_parser("check-connection", help="Check that the Product Hunt API is reachable")
    subparsers.add_parser("seed-categories", help="Insert the built-in category set")

    return parser.parse_args(list(argv))


def _build_sync_request(args: argparse.Namespace) -> SyncRequest:
    start_date = args.start
    if args.lookback_days is not None:
        start_date = DateWindow.last_days(args.lookback_days).start.isoformat()
    if args.end and not start_date:
        raise ValueError("--end requires --start or --lookback-days")

    request = SyncRequest(
        limit=args.limit,
        force_sync=args.force,
        update_existing=args.update_existing,
        sync_old_data=args.stale_categories,
        sync_by_date=start_date is not None,
        sync_single_product=args.url is not None,
        product_url=args.url,
        start_date=start_date,
        end_date=args.end,
        order=parse_order(args.order),
    )
    request.validate()
    if request.start_date:
        DateWindow.from_iso(request.start_date, request.end_date)
    return request


def _print_json(payload: object) -> None:
    print(json.dumps(payload, indent=2, default=str))


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    parsed_args: argparse.Namespace
    request: SyncRequest | None = None
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.command == "sync":
            request = _build_sync_request(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    if parsed_args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        if parsed_args.command == "sync" and request is not None:
            result = sync_product_hunt(request, submitted_by=parsed_args.submitted_by)
            _print_json(result.to_dict())
        elif parsed_args.command == "stats":
            stats = get_sync_statistics()
            _print_json(
                {
                    "totalSubmissions": stats.total_submissions,
                    "productHuntSubmissions": stats.product_hunt_submissions,
                    "lastSyncDate": stats.last_sync_date.isoformat()
                    if stats.last_sync_date
                    else None,
                }
            )
        elif parsed_args.command == "check-connection":
            check = check_product_hunt_connection()
            _print_json(
                {
                    "ok": check.ok,
                    "apiUrl": check.api_url,
                    "status": check.status_code,
                    "postsCount": check.posts_count,
                    "firstPost": check.first_post,
                    "error": check.error,
                }
            )
            if not check.ok:
                sys.exit(1)
        elif parsed_args.command == "seed-categories":
            _print_json({"inserted": seed_default_categories()})
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
