import logging
from typing import List, Optional, Tuple

from errors import (
    AccountLockedError,
    AccountNotLockedError,
    ClientMismatchError,
    ClientNotFoundError,
    DuplicateTransactionError,
    NotDisputableError,
    TransactionNotFoundError,
    WrongTransactionStateError,
)
from models import (
    ClientAccount,
    Command,
    DepositRecord,
    DepositStatus,
    TransactionRecord,
    TransactionType,
    WithdrawalRecord,
)
from money import MoneyValue
from state_manager import LedgerState

logger = logging.getLogger(__name__)


class LedgerProcessor:
    """
    Applies commands to the ledger one at a time.
    A command is validated and fully computed before anything is stored,
    so a command that raises leaves the ledger exactly as it was.
    Not safe for concurrent use: commands must be fed in stream order by one caller.
    """

    def __init__(self, state: Optional[LedgerState] = None):
        self._state = state if state is not None else LedgerState()

    def accounts(self) -> List[ClientAccount]:
        return list(self._state.get_all_accounts().values())

    def execute(self, command: Command) -> None:
        """
        Apply a single command and commit the result.

        Raises:
            LedgerError: the command was rejected; nothing was stored
        """
        account = self._state.get_account(command.client_id)
        record = self._state.get_transaction(command.transaction_id)

        new_account, new_record = self.apply_command(command, account, record)

        self._state.commit(new_account, command.transaction_id, new_record)

    def unlock(self, client_id: int) -> None:
        """Administrative unlock of an account locked by a chargeback."""
        if not self._state.has_account(client_id):
            raise ClientNotFoundError(f"client {client_id} not found")

        account = self._state.get_account(client_id)
        if not account.locked:
            raise AccountNotLockedError(f"account {client_id} is not locked")

        self._state.store_account(account.unlock())
        logger.info(f"Account {client_id} unlocked")

    @staticmethod
    def apply_command(
        command: Command,
        account: ClientAccount,
        record: Optional[TransactionRecord],
    ) -> Tuple[ClientAccount, TransactionRecord]:
        """Validate command against account and prior record, return both updated. Doesn't touch state."""
        # Checked before the record so a locked account always reports as locked
        if account.locked:
            raise AccountLockedError(f"account {account.client_id} is locked")

        match command.transaction_type:
            case TransactionType.DEPOSIT:
                LedgerProcessor._ensure_new(command, record)
                amount = command.get_amount()
                new_record = DepositRecord(client_id=account.client_id, amount=amount)
                return account.deposit(amount), new_record
            case TransactionType.WITHDRAWAL:
                LedgerProcessor._ensure_new(command, record)
                amount = command.get_amount()
                new_record = WithdrawalRecord(client_id=account.client_id, amount=amount)
                return account.withdraw(amount), new_record
            case TransactionType.DISPUTE:
                amount, new_record = LedgerProcessor._dispute_step(
                    command, account, record, DepositStatus.DEPOSITED, DepositStatus.DISPUTED
                )
                return account.dispute(amount), new_record
            case TransactionType.RESOLVE:
                amount, new_record = LedgerProcessor._dispute_step(
                    command, account, record, DepositStatus.DISPUTED, DepositStatus.DEPOSITED
                )
                return account.resolve(amount), new_record
            case TransactionType.CHARGEBACK:
                amount, new_record = LedgerProcessor._dispute_step(
                    command, account, record, DepositStatus.DISPUTED, DepositStatus.CHARGED_BACK
                )
                return account.chargeback(amount), new_record
            case _:
                raise ValueError(f"unknown transaction type: {command.transaction_type}")

    @staticmethod
    def _ensure_new(command: Command, record: Optional[TransactionRecord]) -> None:
        if record is not None:
            raise DuplicateTransactionError(f"tx {command.transaction_id} already exists")

    @staticmethod
    def _dispute_step(
        command: Command,
        account: ClientAccount,
        record: Optional[TransactionRecord],
        expected_status: DepositStatus,
        next_status: DepositStatus,
    ) -> Tuple[MoneyValue, DepositRecord]:
        """Check the referenced deposit can move from expected_status, return its amount and the advanced record."""
        match record:
            case None:
                raise TransactionNotFoundError(f"tx {command.transaction_id} not found")
            case WithdrawalRecord():
                raise NotDisputableError(f"tx {command.transaction_id} is not a deposit transaction")
            case DepositRecord(client_id=client_id, amount=amount, status=status):
                if client_id != account.client_id:
                    raise ClientMismatchError(
                        f"tx {command.transaction_id} belongs to client {client_id}, not {account.client_id}"
                    )
                if status != expected_status:
                    raise WrongTransactionStateError(
                        f"tx {command.transaction_id} is {status.value}, expected {expected_status.value}"
                    )
                return amount, record.with_status(next_status)
            case _:
                raise TypeError(f"unknown transaction record: {record!r}")
