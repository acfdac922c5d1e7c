from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from errors import MissingAmountError
from money import MoneyValue


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class DepositStatus(Enum):
    DEPOSITED = "deposited"
    DISPUTED = "disputed"
    CHARGED_BACK = "charged_back"


@dataclass(frozen=True)
class Command:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[float] = None

    def get_amount(self) -> MoneyValue:
        if self.amount is None:
            raise MissingAmountError(f"{self.transaction_type.value} tx {self.transaction_id} is missing an amount")
        return MoneyValue.parse(self.amount)

    def __repr__(self) -> str:
        return f"Command({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass(frozen=True)
class ClientAccount:
    """
    Balance record of one client.
    Every operation returns a new account and leaves this one as it was.
    """

    client_id: int
    available: MoneyValue = MoneyValue.ZERO
    held: MoneyValue = MoneyValue.ZERO
    locked: bool = False

    @classmethod
    def new(cls, client_id: int) -> "ClientAccount":
        return cls(client_id=client_id)

    @property
    def total(self) -> float:
        return float(self.available) + float(self.held)

    def deposit(self, amount: MoneyValue) -> "ClientAccount":
        return replace(self, available=self.available.add(amount))

    def withdraw(self, amount: MoneyValue) -> "ClientAccount":
        return replace(self, available=self.available.subtract(amount))

    def dispute(self, amount: MoneyValue) -> "ClientAccount":
        """Move amount from available to held. Fails if it was already withdrawn."""
        return replace(
            self,
            available=self.available.subtract(amount),
            held=self.held.add(amount),
        )

    def resolve(self, amount: MoneyValue) -> "ClientAccount":
        return replace(
            self,
            available=self.available.add(amount),
            held=self.held.subtract(amount),
        )

    def chargeback(self, amount: MoneyValue) -> "ClientAccount":
        """Remove held funds and lock the account for good."""
        return replace(self, held=self.held.subtract(amount), locked=True)

    def unlock(self) -> "ClientAccount":
        return replace(self, locked=False)


@dataclass(frozen=True)
class WithdrawalRecord:
    client_id: int
    amount: MoneyValue


@dataclass(frozen=True)
class DepositRecord:
    client_id: int
    amount: MoneyValue
    status: DepositStatus = DepositStatus.DEPOSITED

    def with_status(self, status: DepositStatus) -> "DepositRecord":
        return replace(self, status=status)


TransactionRecord = Union[DepositRecord, WithdrawalRecord]


class ProcessingStats:
    """Counters for tracking processing statistics."""

    def __init__(self):
        self.processed = 0
        self.failed = 0

    def record_success(self):
        self.processed += 1

    def record_failure(self):
        self.failed += 1
