"""
Position management for a single instrument held by a single holder.
"""

from dataclasses import dataclass

from ..core.types import PositionDirection


@dataclass
class Position:
    """Signed position in a single instrument with its cost basis.

    ``cost_basis_total`` is the unsigned amount paid (long) or received
    (short) for the shares still open, and ``cost_basis_quantity`` carries
    the same sign as ``quantity``. A trade against the current direction
    first covers the open shares at their average cost; any excess opens a
    fresh basis at the trade price.
    """
    instrument: str
    quantity: float = 0.0
    cost_basis_total: float = 0.0
    cost_basis_quantity: float = 0.0
    realized_pnl: float = 0.0

    @property
    def direction(self) -> PositionDirection:
        if self.quantity > 0:
            return PositionDirection.LONG
        if self.quantity < 0:
            return PositionDirection.SHORT
        return PositionDirection.FLAT

    @property
    def is_flat(self) -> bool:
        return self.quantity == 0

    @property
    def avg_cost(self) -> float:
        """Average cost per share of the open shares, 0 when flat"""
        if self.cost_basis_quantity == 0:
            return 0.0
        return self.cost_basis_total / abs(self.cost_basis_quantity)

    def market_value(self, current_price: float) -> float:
        """Signed market value at current price"""
        return self.quantity * current_price

    def unrealized_pnl(self, current_price: float) -> float:
        """Unrealized profit/loss at current price, for longs and shorts alike"""
        return (current_price - self.avg_cost) * self.quantity

    def apply_buy(self, quantity: float, price: float) -> None:
        """Apply a buy: cover an open short first, then add to / open a long"""
        if quantity <= 0:
            raise ValueError("Quantity must be positive")

        remaining = quantity
        if self.quantity < 0:
            remaining -= self._cover(min(quantity, -self.quantity), price)
        if remaining > 0:
            self._open(remaining, price)

    def apply_sell(self, quantity: float, price: float) -> None:
        """Apply a sell: cover an open long first, then add to / open a short"""
        if quantity <= 0:
            raise ValueError("Quantity must be positive")

        remaining = quantity
        if self.quantity > 0:
            remaining -= self._cover(min(quantity, self.quantity), price)
        if remaining > 0:
            self._open(-remaining, price)

    def _cover(self, cover_qty: float, price: float) -> float:
        """Close ``cover_qty`` shares of the open position at its average cost"""
        avg_cost = self.avg_cost
        if self.quantity > 0:
            self.realized_pnl += (price - avg_cost) * cover_qty
            self.quantity -= cover_qty
            self.cost_basis_quantity -= cover_qty
        else:
            self.realized_pnl += (avg_cost - price) * cover_qty
            self.quantity += cover_qty
            self.cost_basis_quantity += cover_qty
        self.cost_basis_total -= avg_cost * cover_qty

        if self.quantity == 0:
            self.reset_basis()
        return cover_qty

    def _open(self, signed_qty: float, price: float) -> None:
        """Add shares in the current direction (or open one from flat)"""
        self.cost_basis_total += abs(signed_qty) * price
        self.cost_basis_quantity += signed_qty
        self.quantity += signed_qty

    def reset_basis(self) -> None:
        self.cost_basis_total = 0.0
        self.cost_basis_quantity = 0.0

    def __str__(self) -> str:
        return f"Position({self.instrument}: {self.quantity:g} @ ${self.avg_cost:.2f})"

    def __repr__(self) -> str:
        return self.__str__()
