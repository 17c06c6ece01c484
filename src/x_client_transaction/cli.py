"""
Command-line transaction ID generator.

Usage:
    x-client-transaction GET /i/api/graphql/abc123/UserByScreenName
    x-client-transaction GET /i/api/1.1/jot/client_event.json --html home.html --js ondemand.js
    x-client-transaction GET / --inspect -v
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from .client import ClientTransaction
from .config import HEADER_NAME, TransactionConfig
from .errors import TransactionError
from .synthesizer import current_timestamp


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="x-client-transaction",
        description="Generate an x-client-transaction-id for an API request.",
    )
    parser.add_argument("method", help="HTTP method, e.g. GET")
    parser.add_argument("path", help="request path, e.g. /i/api/graphql/<id>/UserByScreenName")
    parser.add_argument("--html", type=Path, help="saved homepage HTML (skips fetching)")
    parser.add_argument("--js", type=Path, help="saved ondemand bundle (requires --html)")
    parser.add_argument("--time", type=float, help="pin the wall clock (unix seconds)")
    parser.add_argument("--random", type=int, help="pin the random byte (0-255)")
    parser.add_argument("--header", action="store_true", help="print as 'name: value'")
    parser.add_argument("--inspect", action="store_true", help="print extracted key material summary")
    parser.add_argument("-v", "--verbose", action="count", default=0)
    return parser


def load_client(args, config: TransactionConfig) -> ClientTransaction:
    if args.html and args.js:
        html = args.html.read_text(encoding="utf-8")
        js = args.js.read_text(encoding="utf-8")
        return ClientTransaction(html, js, config=config)
    return ClientTransaction.fetch(config=config)


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if bool(args.html) != bool(args.js):
        parser.error("--html and --js must be given together")
    if args.random is not None and not 0 <= args.random <= 255:
        parser.error("--random must be in 0..255")

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        client = load_client(args, TransactionConfig.from_env())
    except TransactionError as e:
        print(f"❌ Could not build transaction client: {e}", file=sys.stderr)
        return 1

    if args.inspect:
        print(json.dumps(client.describe(), indent=2))

    timestamp = current_timestamp(args.time) if args.time is not None else None
    tid = client.generate_transaction_id(
        args.method, args.path, timestamp=timestamp, random_byte=args.random
    )
    if args.header:
        print(f"{HEADER_NAME}: {tid}")
    else:
        print(tid)
    return 0


if __name__ == "__main__":
    sys.exit(main())
