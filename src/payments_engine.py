import csv
import logging
import re
from typing import Dict, Iterable, Optional, TextIO

from errors import LedgerError, MalformedRecordError
from models import ClientAccount, Command, ProcessingStats, TransactionType
from transaction_processor import LedgerProcessor

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("type", "client", "tx")
OUTPUT_COLUMNS = ("client", "available", "held", "total", "locked")

MAX_CLIENT_ID = 2 ** 16 - 1
MAX_TRANSACTION_ID = 2 ** 32 - 1

# Plain float literal: no digit separators, no surrounding junk
AMOUNT_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?|[+-]?(inf|infinity|nan)", re.IGNORECASE | re.ASCII)


class PaymentsEngine:
    """
    Feeds CSV command records through a LedgerProcessor in stream order.
    Rejected commands are logged and skipped; a malformed record aborts the run.
    """

    def __init__(self, processor: Optional[LedgerProcessor] = None):
        self._processor = processor if processor is not None else LedgerProcessor()
        self._stats = ProcessingStats()

    @property
    def processor(self) -> LedgerProcessor:
        return self._processor

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_file(self, filepath: str) -> Dict[int, ClientAccount]:
        """Process CSV file and return final account states."""
        with open(filepath, "r", newline="") as f:
            return self.process_stream(f)

    def process_stream(self, stream: TextIO) -> Dict[int, ClientAccount]:
        """Process CSV records from an open text stream. Can be called multiple times."""
        logger.info("Starting processing")

        for command in self._read_commands(stream):
            logger.debug(f"command: {command}")
            self._execute(command)

        logger.info(f"Processed: {self._stats.processed}, Failed: {self._stats.failed}")

        return {account.client_id: account for account in self._processor.accounts()}

    def write_accounts(self, stream: TextIO) -> None:
        """Write all accounts as CSV, ordered by client id. Nothing at all when there are no accounts."""
        accounts = sorted(self._processor.accounts(), key=lambda a: a.client_id)
        if not accounts:
            return

        writer = csv.writer(stream, lineterminator="\n")
        writer.writerow(OUTPUT_COLUMNS)
        for account in accounts:
            writer.writerow(format_account(account))

    def _execute(self, command: Command) -> None:
        try:
            self._processor.execute(command)
        except LedgerError as e:
            self._stats.record_failure()
            logger.info(f"Rejected {command}: {type(e).__name__}: {e}")
            logger.debug("result: failed")
            return

        self._stats.record_success()
        logger.debug("result: ok")

    def _read_commands(self, stream: TextIO) -> Iterable[Command]:
        reader = csv.DictReader(stream)
        if reader.fieldnames is None:
            return

        reader.fieldnames = [name.strip() for name in reader.fieldnames]
        missing = [name for name in REQUIRED_COLUMNS if name not in reader.fieldnames]
        if missing:
            raise MalformedRecordError(1, f"header is missing columns {missing}")

        for row in reader:
            yield self._parse_csv_row(row, reader.line_num)

    def _parse_csv_row(self, row: Dict[str, str], line_number: int) -> Command:
        """Parse CSV row into Command."""
        # Short rows leave trailing fields as None, long rows put the surplus under a None key
        normalized = {k: (v or "").strip() for k, v in row.items() if k is not None}

        try:
            transaction_type = TransactionType(normalized["type"])
        except ValueError:
            raise MalformedRecordError(line_number, f"unknown transaction type {normalized['type']!r}") from None

        client_id = _parse_id(normalized["client"], "client", MAX_CLIENT_ID, line_number)
        transaction_id = _parse_id(normalized["tx"], "tx", MAX_TRANSACTION_ID, line_number)

        amount = None
        amount_str = normalized.get("amount", "")
        if amount_str:
            if not AMOUNT_PATTERN.fullmatch(amount_str):
                raise MalformedRecordError(line_number, f"amount {amount_str!r} is not a number")
            amount = float(amount_str)

        return Command(
            transaction_type=transaction_type,
            client_id=client_id,
            transaction_id=transaction_id,
            amount=amount,
        )


def _parse_id(value: str, column: str, max_value: int, line_number: int) -> int:
    if not (value.isascii() and value.isdigit()):
        raise MalformedRecordError(line_number, f"{column} {value!r} is not an unsigned integer")
    parsed = int(value)
    if parsed > max_value:
        raise MalformedRecordError(line_number, f"{column} {value!r} is above {max_value}")
    return parsed


def format_account(account: ClientAccount) -> list:
    return [
        account.client_id,
        f"{float(account.available):.4f}",
        f"{float(account.held):.4f}",
        f"{account.total:.4f}",
        str(account.locked).lower(),
    ]
