import logging

from ledger import Ledger
from models import ClientAccount, Transaction, TransactionOutcome, TransactionType

logger = logging.getLogger(__name__)


class TransactionProcessor:
    """
    Applies transactions one at a time against the ledger.
    Rejections are returned as TransactionOutcome values carrying a
    diagnostic; they never raise and never mutate state.
    """

    def __init__(self, ledger: Ledger, freeze_locked_accounts: bool = False):
        self._ledger = ledger
        self._freeze_locked_accounts = freeze_locked_accounts

    def process_transaction(self, transaction: Transaction) -> TransactionOutcome:
        """
        Process a single transaction.

        Returns:
            SUCCESS: Applied to the account and ledger
            REJECTED: Skipped, with a diagnostic naming the transaction and reason
        """
        if transaction.transaction_type == TransactionType.UNRECOGNIZED:
            return self._reject(f'Unhandled transaction type: "{transaction.raw_type}"')

        account = self._ledger.get_or_create_account(transaction.client_id)

        if self._freeze_locked_accounts and account.locked:
            return self._reject(
                f'Account "{account.client_id}" is locked, transaction "{transaction.transaction_id}" rejected'
            )

        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                return self._handle_deposit(account, transaction)
            case TransactionType.WITHDRAWAL:
                return self._handle_withdrawal(account, transaction)
            case TransactionType.DISPUTE:
                return self._handle_dispute(account, transaction)
            case TransactionType.RESOLVE:
                return self._handle_resolve(account, transaction)
            case TransactionType.CHARGEBACK:
                return self._handle_chargeback(account, transaction)
            case _:
                return self._reject(f'Unhandled transaction type: "{transaction.raw_type}"')

    def _handle_deposit(self, account: ClientAccount, transaction: Transaction) -> TransactionOutcome:
        account.deposit(transaction.amount)
        self._ledger.record_applied(transaction.transaction_id, transaction.amount)
        return TransactionOutcome.success()

    def _handle_withdrawal(self, account: ClientAccount, transaction: Transaction) -> TransactionOutcome:
        error = account.withdraw(transaction.amount)
        if error is not None:
            return self._reject(f'Error when handling transaction "{transaction.transaction_id}": {error.value}')

        self._ledger.record_applied(transaction.transaction_id, transaction.amount)
        return TransactionOutcome.success()

    def _handle_dispute(self, account: ClientAccount, transaction: Transaction) -> TransactionOutcome:
        amount = self._ledger.get_applied(transaction.transaction_id)

        if amount is None:
            return self._reject(f'Could not find applied transaction "{transaction.transaction_id}" to dispute')

        if self._ledger.is_disputed(transaction.transaction_id):
            return self._reject(f'Could not dispute same transaction "{transaction.transaction_id}" twice')

        error = account.dispute(amount)
        if error is not None:
            return self._reject(f'Could not dispute transaction "{transaction.transaction_id}": {error.value}')

        self._ledger.open_dispute(transaction.transaction_id, amount)
        return TransactionOutcome.success()

    def _handle_resolve(self, account: ClientAccount, transaction: Transaction) -> TransactionOutcome:
        amount = self._ledger.get_disputed(transaction.transaction_id)

        if amount is None:
            return self._reject(f'Could not find disputed transaction "{transaction.transaction_id}" to resolve')

        error = account.resolve(amount)
        if error is not None:
            return self._reject(
                f'Could not resolve disputed transaction "{transaction.transaction_id}": {error.value}'
            )

        self._ledger.close_dispute(transaction.transaction_id)
        return TransactionOutcome.success()

    def _handle_chargeback(self, account: ClientAccount, transaction: Transaction) -> TransactionOutcome:
        amount = self._ledger.get_disputed(transaction.transaction_id)

        if amount is None:
            return self._reject(f'Could not find disputed transaction "{transaction.transaction_id}" to charge back')

        error = account.chargeback(amount)
        if error is not None:
            return self._reject(
                f'Could not charge back disputed transaction "{transaction.transaction_id}": {error.value}'
            )

        self._ledger.close_dispute(transaction.transaction_id)
        return TransactionOutcome.success()

    def _reject(self, diagnostic: str) -> TransactionOutcome:
        logger.info(diagnostic)
        return TransactionOutcome.rejected(diagnostic)
