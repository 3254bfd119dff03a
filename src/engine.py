import logging
from typing import Dict, Iterable, Optional

from account import AccountState
from models import ClientId, Event, ProcessingStats
from processor import TransactionProcessor
from records import read_events

logger = logging.getLogger(__name__)


class PaymentsEngine:
    """
    Feeds an event stream through the processor, strictly in input order.
    The next row is not read until the current event has been applied or dropped.
    """

    def __init__(self, processor: Optional[TransactionProcessor] = None):
        self._processor = processor if processor is not None else TransactionProcessor()
        self._stats = ProcessingStats()

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_file(self, filepath: str) -> Dict[ClientId, AccountState]:
        """Process CSV file and return final account states."""
        logger.info(f"Processing {filepath}")
        with open(filepath, "r", encoding="utf-8", newline="") as f:
            return self.process_events(read_events(f))

    def process_events(self, events: Iterable[Event]) -> Dict[ClientId, AccountState]:
        """
        Apply every event and return final account states.
        Run-aborting errors propagate; nothing after the failing event is consumed.
        """
        for event in events:
            self._stats.record(self._processor.handle(event))

        logger.info(f"Processed: {self._stats.processed}, Rejected: {self._stats.rejected}")
        return self._processor.accounts()
