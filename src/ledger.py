from decimal import Decimal
from typing import Dict, Optional

from models import ClientAccount


class Ledger:
    """
    Run-scoped state owned by the processor.
    Holds client accounts, amounts of applied transactions for dispute
    lookups, and amounts currently held by open disputes.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}
        self._applied: Dict[int, Decimal] = {}
        self._disputed: Dict[int, Decimal] = {}

    def get_or_create_account(self, client_id: int) -> ClientAccount:
        """Get existing account or create an empty one."""
        if client_id not in self._accounts:
            self._accounts[client_id] = ClientAccount(client_id=client_id)
        return self._accounts[client_id]

    def record_applied(self, transaction_id: int, amount: Decimal) -> None:
        """Remember the amount of a deposit or withdrawal that moved funds."""
        self._applied[transaction_id] = amount

    def get_applied(self, transaction_id: int) -> Optional[Decimal]:
        return self._applied.get(transaction_id)

    def open_dispute(self, transaction_id: int, amount: Decimal) -> None:
        self._disputed[transaction_id] = amount

    def get_disputed(self, transaction_id: int) -> Optional[Decimal]:
        return self._disputed.get(transaction_id)

    def is_disputed(self, transaction_id: int) -> bool:
        """Check if transaction is currently disputed."""
        return transaction_id in self._disputed

    def close_dispute(self, transaction_id: int) -> None:
        """Drop the open dispute after a resolve or chargeback."""
        self._disputed.pop(transaction_id, None)

    def get_all_accounts(self) -> Dict[int, ClientAccount]:
        """Return all accounts (for final output)."""
        return dict(self._accounts)
