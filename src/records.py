"""
CSV input adapter.

Rows look like ``type, client, tx, amount``. Whitespace around headers and
values is ignored and the amount column may be empty or missing for
dispute, resolve and chargeback rows.
"""

import csv
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterator, Optional, TextIO

from errors import MalformedRowError, UnknownEventTypeError
from models import (
    MAX_CLIENT_ID,
    MAX_TX_ID,
    Chargeback,
    Deposit,
    Dispute,
    Event,
    EventType,
    Resolve,
    Withdrawal,
)

REQUIRED_FIELDS = ("type", "client", "tx")


def read_events(stream: TextIO) -> Iterator[Event]:
    """Yield one event per data row, parsing lazily."""
    reader = csv.DictReader(stream)
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except UnicodeDecodeError as e:
            raise MalformedRowError(f"invalid encoding: {e.reason}", reader.line_num) from e
        except csv.Error as e:
            raise MalformedRowError(str(e), reader.line_num) from e

        if not any(v and v.strip() for k, v in row.items() if k is not None):
            continue
        yield parse_row(row, line_num=reader.line_num)


def parse_row(row: Dict[Optional[str], Optional[str]], line_num: Optional[int] = None) -> Event:
    """Parse CSV row into Event."""
    # Extra columns land under the None key as a list, missing ones as None.
    normalized = {k.strip(): (v or "").strip() for k, v in row.items() if k is not None}

    for field in REQUIRED_FIELDS:
        if not normalized.get(field):
            raise MalformedRowError(f"missing `{field}`", line_num)

    try:
        event_type = EventType(normalized["type"])
    except ValueError:
        raise UnknownEventTypeError(normalized["type"], line_num) from None

    client_id = _parse_id(normalized["client"], "client", MAX_CLIENT_ID, line_num)
    transaction_id = _parse_id(normalized["tx"], "tx", MAX_TX_ID, line_num)

    match event_type:
        case EventType.DEPOSIT:
            return Deposit(client_id, transaction_id, _parse_amount(normalized.get("amount", ""), line_num))
        case EventType.WITHDRAWAL:
            return Withdrawal(client_id, transaction_id, _parse_amount(normalized.get("amount", ""), line_num))
        case EventType.DISPUTE:
            return Dispute(client_id, transaction_id)
        case EventType.RESOLVE:
            return Resolve(client_id, transaction_id)
        case EventType.CHARGEBACK:
            return Chargeback(client_id, transaction_id)


def _parse_id(value: str, field: str, maximum: int, line_num: Optional[int]) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise MalformedRowError(f"`{field}` is not an integer: {value!r}", line_num) from None

    if not 0 <= parsed <= maximum:
        raise MalformedRowError(f"`{field}` out of range: {parsed}", line_num)
    return parsed


def _parse_amount(value: str, line_num: Optional[int]) -> Decimal:
    if not value:
        raise MalformedRowError("missing `amount`", line_num)

    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise MalformedRowError(f"`amount` is not a decimal: {value!r}", line_num) from None

    if not amount.is_finite():
        raise MalformedRowError(f"`amount` is not finite: {value!r}", line_num)
    return amount
