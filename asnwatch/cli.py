"""
Command-line digest trigger for cron-like callers.

Usage:
    asnwatch-digest --recipient 123456789
    asnwatch-digest --roster data/roster.json --locale en --dry-run

Exit codes:
    0  delivered (or printed, with --dry-run)
    2  rejected by the gateway; retrying will not help
    3  upstream failure; safe to retry later
    4  configuration error (no bot token, no recipient, unreadable roster,
       unsupported ASNWATCH_DIGEST_LOCALE)
"""

from __future__ import annotations

import argparse
import sys

from asnwatch.config import DIGEST_LOCALE, ROSTER_PATH, default_recipient
from asnwatch.delivery.outcomes import Delivered, GatewayNotConfiguredError, Rejected
from asnwatch.digest.formatter import WORDINGS, UnsupportedLocaleError
from asnwatch.digest.service import DigestService
from asnwatch.observability.logging import configure_logging, get_logger
from asnwatch.roster.store import JsonRosterStore, RosterUnavailableError

logger = get_logger(__name__)

EXIT_DELIVERED = 0
EXIT_REJECTED = 2
EXIT_UPSTREAM_FAILURE = 3
EXIT_CONFIGURATION = 4


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="asnwatch-digest",
        description="Compile the salary/rank increment digest and send it via Telegram",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--recipient",
        help="Telegram chat id (default: ASNWATCH_DEFAULT_RECIPIENT)",
    )
    parser.add_argument(
        "--roster",
        default=str(ROSTER_PATH),
        help="Roster export (JSON array of subject records)",
    )
    parser.add_argument("--locale", default=DIGEST_LOCALE, choices=sorted(WORDINGS))
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the digest instead of sending it",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging("DEBUG" if args.verbose else None)

    try:
        service = DigestService(JsonRosterStore(args.roster), locale=args.locale)
        if args.dry_run:
            print(service.build().text)
            return EXIT_DELIVERED

        recipient = args.recipient or default_recipient()
        if not recipient:
            print("error: no recipient (use --recipient or ASNWATCH_DEFAULT_RECIPIENT)", file=sys.stderr)
            return EXIT_CONFIGURATION

        run = service.send(recipient)
    except (GatewayNotConfiguredError, RosterUnavailableError, UnsupportedLocaleError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_CONFIGURATION

    outcome = run.outcome
    if isinstance(outcome, Delivered):
        print(
            f"Digest delivered ({len(run.overview.soon)} soon, "
            f"{len(run.overview.overdue)} overdue)"
        )
        return EXIT_DELIVERED
    if isinstance(outcome, Rejected):
        print(f"rejected: {outcome.reason}", file=sys.stderr)
        return EXIT_REJECTED
    assert outcome is not None
    print(f"upstream failure: {outcome.reason}", file=sys.stderr)
    return EXIT_UPSTREAM_FAILURE


if __name__ == "__main__":
    sys.exit(main())
