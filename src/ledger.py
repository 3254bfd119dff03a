from typing import Dict, Optional

from errors import DuplicateTransactionError, TransactionNotFoundError
from models import TransactionRecord, TxId


class TransactionLedger:
    """
    Accepted deposits and withdrawals keyed by transaction id.
    Records are never removed; dispute state lives on the record itself.
    """

    def __init__(self):
        self._records: Dict[TxId, TransactionRecord] = {}

    def __contains__(self, transaction_id: TxId) -> bool:
        return transaction_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def insert(self, transaction_id: TxId, record: TransactionRecord) -> None:
        """Store a newly accepted transaction. Ids may never be reused."""
        if transaction_id in self._records:
            raise DuplicateTransactionError(transaction_id)
        self._records[transaction_id] = record

    def get(self, transaction_id: TxId) -> TransactionRecord:
        """Retrieve stored transaction by ID."""
        record = self._records.get(transaction_id)
        if record is None:
            raise TransactionNotFoundError(transaction_id)
        return record

    def find(self, transaction_id: TxId) -> Optional[TransactionRecord]:
        """Like get(), but returns None for unknown ids."""
        return self._records.get(transaction_id)

    def mark_dispute_active(self, transaction_id: TxId) -> None:
        self.get(transaction_id).has_dispute = True

    def mark_dispute_cleared(self, transaction_id: TxId) -> None:
        self.get(transaction_id).has_dispute = False
