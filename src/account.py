from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Union

from errors import AccountFrozenError, InsufficientFundsError


@dataclass(frozen=True)
class Credit:
    amount: Decimal


@dataclass(frozen=True)
class Debit:
    amount: Decimal


@dataclass(frozen=True)
class HoldDeposit:
    amount: Decimal


@dataclass(frozen=True)
class HoldWithdrawal:
    amount: Decimal


@dataclass(frozen=True)
class Release:
    amount: Decimal


@dataclass(frozen=True)
class Freeze:
    pass


Transition = Union[Credit, Debit, HoldDeposit, HoldWithdrawal, Release, Freeze]


@dataclass(frozen=True)
class AccountState:
    """
    Funds of a single client.

    Immutable: apply() hands back a new state and leaves the receiver alone,
    so a refused transition never leaves a half-updated account behind.
    Once locked, every transition is refused.
    """

    locked: bool = False
    available: Decimal = Decimal("0")
    held: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        return self.available + self.held

    def apply(self, transition: Transition) -> "AccountState":
        """
        Return the state reached by applying transition.

        Raises:
            AccountFrozenError: the account is locked
            InsufficientFundsError: a debit or deposit hold exceeds available funds
        """
        if self.locked:
            raise AccountFrozenError()

        match transition:
            case Credit(amount):
                return replace(self, available=self.available + amount)
            case Debit(amount):
                self._require_available(amount)
                return replace(self, available=self.available - amount)
            case HoldDeposit(amount):
                self._require_available(amount)
                return replace(self, available=self.available - amount, held=self.held + amount)
            case HoldWithdrawal(amount):
                # Withdrawn funds already left available; only the claim is held.
                return replace(self, held=self.held + amount)
            case Release(amount):
                return replace(self, available=self.available + amount, held=self.held - amount)
            case Freeze():
                return replace(self, locked=True)

        raise TypeError(f"unknown transition: {transition!r}")

    def _require_available(self, amount: Decimal) -> None:
        if amount > self.available:
            raise InsufficientFundsError(required=amount, available=self.available)
