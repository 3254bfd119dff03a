import sys
import logging
from decimal import Decimal
from typing import Dict, TextIO

from account import AccountState
from engine import PaymentsEngine
from errors import ProcessingError
from models import ClientId

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s",
    stream=sys.stderr,
)

REPORT_HEADER = "client,available,held,total,locked"


def format_decimal(value: Decimal) -> str:
    """Format decimal without trailing zeros or exponent notation."""
    normalized = value.normalize()
    return f"{normalized:f}"


def write_report(accounts: Dict[ClientId, AccountState], out: TextIO) -> None:
    print(REPORT_HEADER, file=out)
    for client_id in sorted(accounts.keys()):
        account = accounts[client_id]
        print(
            f"{client_id},"
            f"{format_decimal(account.available)},"
            f"{format_decimal(account.held)},"
            f"{format_decimal(account.total)},"
            f"{str(account.locked).lower()}",
            file=out,
        )


def main():
    if len(sys.argv) != 2:
        print("Usage: python main.py <input.csv>", file=sys.stderr)
        sys.exit(1)

    filepath = sys.argv[1]
    engine = PaymentsEngine()
    try:
        accounts = engine.process_file(filepath)
    except (ProcessingError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        sys.exit(1)

    write_report(accounts, sys.stdout)


if __name__ == "__main__":
    main()
