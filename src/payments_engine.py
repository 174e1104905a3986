import logging
from typing import Iterable

from csv_io import read_transactions
from ledger import Ledger
from models import ProcessingReport, ProcessingStats, Transaction
from transaction_processor import TransactionProcessor

logger = logging.getLogger(__name__)


class PaymentsEngine:
    """
    Replays transactions in input order against per-client accounts.
    Rejected records are collected as diagnostics; processing always
    consumes the entire input. Repeated calls to process continue the same
    run, and each returned report is a snapshot of the run so far.
    """

    def __init__(self, freeze_locked_accounts: bool = False):
        self._ledger = Ledger()
        self._processor = TransactionProcessor(self._ledger, freeze_locked_accounts=freeze_locked_accounts)
        self._stats = ProcessingStats()
        self._diagnostics = []

    def process_file(self, filepath: str) -> ProcessingReport:
        """Process CSV file and return final account states with diagnostics."""
        transactions = read_transactions(filepath)
        return self.process(transactions)

    def process(self, transactions: Iterable[Transaction]) -> ProcessingReport:
        for transaction in transactions:
            outcome = self._processor.process_transaction(transaction)

            if outcome.is_success:
                self._stats.record_success()
            else:
                self._stats.record_rejection()
                self._diagnostics.append(outcome.diagnostic)

        logger.info(f"Processed: {self._stats.processed}, Rejected: {self._stats.rejected}")

        return ProcessingReport(
            accounts=self._ledger.get_all_accounts(),
            diagnostics=list(self._diagnostics),
            stats=self._stats.snapshot(),
        )
