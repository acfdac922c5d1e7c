from typing import Dict, Optional

from models import ClientAccount, TransactionRecord


class LedgerState:
    """
    Client accounts and transaction history for dispute lookups.
    Owned by a single processor; only committed results are ever stored.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}
        self._transactions: Dict[int, TransactionRecord] = {}

    def get_account(self, client_id: int) -> ClientAccount:
        """Get existing account, or a fresh one that is not stored until committed."""
        account = self._accounts.get(client_id)
        if account is None:
            return ClientAccount.new(client_id)
        return account

    def has_account(self, client_id: int) -> bool:
        return client_id in self._accounts

    def get_transaction(self, transaction_id: int) -> Optional[TransactionRecord]:
        """Retrieve stored transaction record by ID."""
        return self._transactions.get(transaction_id)

    def commit(self, account: ClientAccount, transaction_id: int, record: TransactionRecord) -> None:
        """Store an account and the transaction record produced by the same command."""
        self._accounts[account.client_id] = account
        self._transactions[transaction_id] = record

    def store_account(self, account: ClientAccount) -> None:
        self._accounts[account.client_id] = account

    def get_all_accounts(self) -> Dict[int, ClientAccount]:
        """Return all accounts (for final output)."""
        return dict(self._accounts)
