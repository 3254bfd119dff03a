"""
Error hierarchy.

ProcessingError subclasses mean the input itself is broken and stop the run.
TransitionError subclasses are business-rule rejections; the processor turns
them into ProcessingResult.REJECTED and moves on to the next event.
"""

from decimal import Decimal
from typing import Optional


class LedgerError(Exception):
    """Base error."""


# --- Run-aborting ---

class ProcessingError(LedgerError):
    """Input stream is invalid, processing cannot continue."""


class MalformedRowError(ProcessingError):
    def __init__(self, reason: str, line_num: Optional[int] = None):
        self.reason = reason
        self.line_num = line_num
        location = f"line {line_num}: " if line_num is not None else ""
        super().__init__(f"{location}malformed row: {reason}")


class UnknownEventTypeError(MalformedRowError):
    def __init__(self, event_type: str, line_num: Optional[int] = None):
        self.event_type = event_type
        super().__init__(f"unknown transaction type `{event_type}`", line_num)


class DuplicateTransactionError(ProcessingError):
    def __init__(self, transaction_id: int):
        self.transaction_id = transaction_id
        super().__init__(f"duplicate transaction id: {transaction_id}")


class TransactionNotFoundError(LedgerError):
    def __init__(self, transaction_id: int):
        self.transaction_id = transaction_id
        super().__init__(f"transaction not found: {transaction_id}")


# --- Business rejections ---

class TransitionError(LedgerError):
    """Account state transition refused."""


class AccountFrozenError(TransitionError):
    def __init__(self):
        super().__init__("account is frozen")


class InsufficientFundsError(TransitionError):
    def __init__(self, required: Decimal, available: Decimal):
        self.required = required
        self.available = available
        super().__init__(f"insufficient funds: required {required}, available {available}")
