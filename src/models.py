from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Union

ClientId = int
TxId = int

MAX_CLIENT_ID = 2**16 - 1
MAX_TX_ID = 2**32 - 1


class EventType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class TransactionKind(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class ProcessingResult(Enum):
    SUCCESS = "success"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Deposit:
    client: ClientId
    tx: TxId
    amount: Decimal


@dataclass(frozen=True)
class Withdrawal:
    client: ClientId
    tx: TxId
    amount: Decimal


@dataclass(frozen=True)
class Dispute:
    client: ClientId
    tx: TxId


@dataclass(frozen=True)
class Resolve:
    client: ClientId
    tx: TxId


@dataclass(frozen=True)
class Chargeback:
    client: ClientId
    tx: TxId


Event = Union[Deposit, Withdrawal, Dispute, Resolve, Chargeback]


@dataclass
class TransactionRecord:
    """
    An accepted deposit or withdrawal, kept for dispute lookups.
    Only has_dispute changes after creation.
    """

    kind: TransactionKind
    client: ClientId
    amount: Decimal
    has_dispute: bool = False

    def __repr__(self) -> str:
        return f"TransactionRecord({self.kind.value}, client={self.client}, amount={self.amount}, disputed={self.has_dispute})"


class ProcessingStats:
    """Counters for the end-of-run summary."""

    def __init__(self):
        self.processed = 0
        self.rejected = 0

    def record(self, result: ProcessingResult) -> None:
        if result == ProcessingResult.SUCCESS:
            self.processed += 1
        else:
            self.rejected += 1

    @property
    def total(self) -> int:
        return self.processed + self.rejected
