class LedgerError(Exception):
    """
    Base class for command-level failures.
    A command that raises one of these leaves the ledger untouched and the run continues.
    """


class MoneyError(LedgerError):
    """Money value out of its representable range."""


class RangeOverflowError(MoneyError):
    pass


class RangeUnderflowError(MoneyError):
    pass


class NegativeValueError(MoneyError):
    pass


class InvalidAmountError(LedgerError):
    pass


class MissingAmountError(LedgerError):
    pass


class AccountLockedError(LedgerError):
    pass


class DuplicateTransactionError(LedgerError):
    pass


class TransactionNotFoundError(LedgerError):
    pass


class ClientMismatchError(LedgerError):
    pass


class WrongTransactionStateError(LedgerError):
    pass


class NotDisputableError(LedgerError):
    pass


class ClientNotFoundError(LedgerError):
    pass


class AccountNotLockedError(LedgerError):
    pass


class MalformedRecordError(Exception):
    """Input record could not be parsed. Aborts the whole run."""

    def __init__(self, line_number: int, message: str):
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number
