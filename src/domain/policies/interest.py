"""Interest policies evaluated on a year's balance position.

A policy returns the interest charge for a year given a position. Positive
values are expenses, negative values are income. The convergence driver
evaluates policies on the previous pass's closing position, which is what
makes them circular.
"""

from decimal import Decimal
from typing import Protocol

from src.domain.models.statements import BalancePosition
from src.utils.decimal_utils import coerce_decimal, round_currency


class InterestPolicy(Protocol):
    """Policy computing an interest charge from a balance position."""

    def charge(self, position: BalancePosition) -> Decimal:
        """Return the interest charge for the position."""


class NoInterestPolicy:
    """Policy that never charges interest."""

    def charge(self, position: BalancePosition) -> Decimal:
        return Decimal("0")


class CashInterestPolicy:
    """Interest on closing cash: expense when overdrawn, income otherwise."""

    def __init__(
        self,
        deposit_rate=Decimal("0"),
        overdraft_rate=Decimal("0"),
    ) -> None:
        """Initialize the policy.

        Args:
            deposit_rate: Rate credited on positive cash balances.
            overdraft_rate: Rate charged on negative cash balances.
        """
        self.deposit_rate = coerce_decimal(deposit_rate)
        self.overdraft_rate = coerce_decimal(overdraft_rate)

    def charge(self, position: BalancePosition) -> Decimal:
        cash = position.cash
        if cash < 0:
            return round_currency(-cash * self.overdraft_rate)
        return round_currency(Decimal("0") - cash * self.deposit_rate)

    def __repr__(self) -> str:
        return (
            f"CashInterestPolicy(deposit_rate={self.deposit_rate}, "
            f"overdraft_rate={self.overdraft_rate})"
        )


__all__ = ["InterestPolicy", "NoInterestPolicy", "CashInterestPolicy"]
