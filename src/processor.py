import logging
from typing import Dict, Optional

from account import AccountState, Credit, Debit, Freeze, HoldDeposit, HoldWithdrawal, Release, Transition
from errors import TransitionError
from ledger import TransactionLedger
from models import (
    Chargeback,
    ClientId,
    Deposit,
    Dispute,
    Event,
    ProcessingResult,
    Resolve,
    TransactionKind,
    TransactionRecord,
    Withdrawal,
)

logger = logging.getLogger(__name__)


class TransactionProcessor:
    """
    Applies events to client accounts, one at a time, in the order given.

    Business-rule violations (insufficient funds, frozen account, bad dispute
    references) are dropped and reported as REJECTED. Only a duplicate
    transaction id raises, since it means the input itself is broken.
    """

    def __init__(self, ledger: Optional[TransactionLedger] = None):
        self._accounts: Dict[ClientId, AccountState] = {}
        self._ledger = ledger if ledger is not None else TransactionLedger()

    @property
    def ledger(self) -> TransactionLedger:
        return self._ledger

    def accounts(self) -> Dict[ClientId, AccountState]:
        """Return all accounts (for final output)."""
        return dict(self._accounts)

    def handle(self, event: Event) -> ProcessingResult:
        """
        Process a single event.

        Returns:
            SUCCESS: State was updated
            REJECTED: Event was ignored, all state left untouched

        Raises:
            DuplicateTransactionError: deposit/withdrawal reuses a stored tx id
        """
        match event:
            case Deposit():
                return self._handle_funds(event, TransactionKind.DEPOSIT, Credit(event.amount))
            case Withdrawal():
                return self._handle_funds(event, TransactionKind.WITHDRAWAL, Debit(event.amount))
            case Dispute():
                return self._handle_dispute(event)
            case Resolve():
                return self._handle_resolve(event)
            case Chargeback():
                return self._handle_chargeback(event)

        raise TypeError(f"unknown event: {event!r}")

    def _handle_funds(self, event, kind: TransactionKind, transition: Transition) -> ProcessingResult:
        if event.amount < 0:
            logger.warning(f"{kind.value.capitalize()} tx {event.tx}: invalid amount {event.amount}")
            return ProcessingResult.REJECTED

        current = self._accounts.get(event.client, AccountState())
        next_state = self._try_apply(current, transition, event)
        if next_state is None:
            return ProcessingResult.REJECTED

        self._ledger.insert(event.tx, TransactionRecord(kind=kind, client=event.client, amount=event.amount))
        self._accounts[event.client] = next_state
        return ProcessingResult.SUCCESS

    def _handle_dispute(self, event: Dispute) -> ProcessingResult:
        record = self._find_record(event)
        if record is None:
            return ProcessingResult.REJECTED

        if record.has_dispute:
            logger.info(f"Dispute for tx {event.tx}: transaction already disputed")
            return ProcessingResult.REJECTED

        if record.kind == TransactionKind.DEPOSIT:
            transition = HoldDeposit(record.amount)
        else:
            transition = HoldWithdrawal(record.amount)

        next_state = self._try_apply(self._accounts[record.client], transition, event)
        if next_state is None:
            return ProcessingResult.REJECTED

        self._accounts[record.client] = next_state
        self._ledger.mark_dispute_active(event.tx)
        return ProcessingResult.SUCCESS

    def _handle_resolve(self, event: Resolve) -> ProcessingResult:
        record = self._find_record(event)
        if record is None:
            return ProcessingResult.REJECTED

        if not record.has_dispute:
            logger.info(f"Resolve for tx {event.tx}: transaction is not disputed")
            return ProcessingResult.REJECTED

        next_state = self._try_apply(self._accounts[record.client], Release(record.amount), event)
        if next_state is None:
            return ProcessingResult.REJECTED

        self._accounts[record.client] = next_state
        self._ledger.mark_dispute_cleared(event.tx)
        return ProcessingResult.SUCCESS

    def _handle_chargeback(self, event: Chargeback) -> ProcessingResult:
        # No active dispute is required, and the record's dispute flag is left as it is.
        record = self._find_record(event)
        if record is None:
            return ProcessingResult.REJECTED

        if record.kind != TransactionKind.DEPOSIT:
            logger.info(f"Chargeback for tx {event.tx}: only deposits can be charged back")
            return ProcessingResult.REJECTED

        next_state = self._try_apply(self._accounts[record.client], Freeze(), event)
        if next_state is None:
            return ProcessingResult.REJECTED

        self._accounts[record.client] = next_state
        return ProcessingResult.SUCCESS

    def _find_record(self, event) -> Optional[TransactionRecord]:
        """Look up the transaction a dispute-family event refers to, checking ownership."""
        record = self._ledger.find(event.tx)
        name = type(event).__name__

        if record is None:
            logger.info(f"{name} for tx {event.tx}: transaction not found")
            return None

        if record.client != event.client:
            logger.warning(f"{name} for tx {event.tx}: client mismatch (expected {record.client}, got {event.client})")
            return None

        if record.client not in self._accounts:
            logger.warning(f"{name} for tx {event.tx}: no account for client {record.client}")
            return None

        return record

    @staticmethod
    def _try_apply(state: AccountState, transition: Transition, event) -> Optional[AccountState]:
        try:
            return state.apply(transition)
        except TransitionError as e:
            logger.info(f"{type(event).__name__} tx {event.tx} for client {event.client} ignored: {e}")
            return None
