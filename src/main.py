import argparse
import logging
import sys
from typing import List, Optional

from errors import MalformedRecordError
from payments_engine import PaymentsEngine

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="payments-ledger",
        description="Replay a CSV stream of transactions and print the resulting client accounts.",
    )
    parser.add_argument("path", help="CSV file with type, client, tx, amount columns")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log each parsed command and the outcome of applying it to stderr",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    engine = PaymentsEngine()
    try:
        engine.process_file(args.path)
    except OSError as e:
        logger.error(f"Failed opening input file {args.path}: {e}")
        return 1
    except MalformedRecordError as e:
        logger.error(f"Malformed record in {args.path}: {e}")
        return 1

    engine.write_accounts(sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
