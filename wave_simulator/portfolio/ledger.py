"""
Per-holder ledger of cash and signed positions.
"""

from typing import Dict, List, Mapping, Optional

from .position import Position
from ..core.models import Trade
from ..core.types import TradeSide
from ..core.exceptions import InsufficientFundsError, InvalidTradeError, MissingPriceError

DEFAULT_INITIAL_CASH = 50000.0

# Float slack when comparing a cost against cash
CASH_TOLERANCE = 1e-9


class PositionLedger:
    """Manages one holder's cash balance and per-instrument positions"""

    def __init__(self, holder_id: str, initial_cash: float = DEFAULT_INITIAL_CASH):
        if initial_cash < 0:
            raise ValueError("Initial cash cannot be negative")

        self.holder_id = holder_id
        self.cash = float(initial_cash)
        self.initial_cash = float(initial_cash)
        self.positions: Dict[str, Position] = {}
        self.trades: List[Trade] = []
        self.previous_net_worth: Optional[float] = None

    def get_position(self, instrument: str) -> Position:
        """Get position for an instrument, creating if doesn't exist"""
        if instrument not in self.positions:
            self.positions[instrument] = Position(instrument=instrument)
        return self.positions[instrument]

    def quantity(self, instrument: str) -> float:
        position = self.positions.get(instrument)
        return position.quantity if position else 0.0

    def can_buy(self, quantity: float, price: float) -> bool:
        """Check if we have enough cash to buy"""
        if quantity <= 0 or price <= 0:
            return False
        return quantity * price - self.cash <= CASH_TOLERANCE

    @staticmethod
    def _validate(quantity: float, price: float) -> None:
        if quantity <= 0:
            raise InvalidTradeError("Quantity must be positive")
        if price <= 0:
            raise InvalidTradeError("Price must be positive")

    def buy(self, instrument: str, quantity: float, price: float) -> Position:
        """Buy shares; covers an open short before opening a long.

        Raises InsufficientFundsError without touching any state when the
        cost exceeds available cash.
        """
        self._validate(quantity, price)
        cost = quantity * price
        if not self.can_buy(quantity, price):
            raise InsufficientFundsError(cost, self.cash)

        position = self.get_position(instrument)
        position.apply_buy(quantity, price)
        self.cash = max(self.cash - cost, 0.0)
        return position

    def sell(self, instrument: str, quantity: float, price: float) -> Position:
        """Sell shares; selling past the held quantity opens a short"""
        self._validate(quantity, price)

        position = self.get_position(instrument)
        position.apply_sell(quantity, price)
        self.cash += quantity * price
        return position

    def average_cost(self, instrument: str) -> float:
        position = self.positions.get(instrument)
        return position.avg_cost if position else 0.0

    def open_positions(self) -> Dict[str, Position]:
        return {name: p for name, p in self.positions.items() if not p.is_flat}

    def net_worth(self, prices: Mapping[str, float]) -> float:
        """Cash plus signed market value of every open position.

        Every open position must be priced by ``prices``; a missing price
        raises MissingPriceError rather than being valued at zero.
        """
        total = self.cash
        for instrument, position in self.open_positions().items():
            if instrument not in prices:
                raise MissingPriceError(instrument)
            total += position.market_value(prices[instrument])
        return total

    def get_pnl(self, prices: Mapping[str, float]) -> float:
        """Total profit/loss vs initial cash"""
        return self.net_worth(prices) - self.initial_cash

    def unrealized_pnl(self, prices: Mapping[str, float]) -> float:
        total = 0.0
        for instrument, position in self.open_positions().items():
            if instrument not in prices:
                raise MissingPriceError(instrument)
            total += position.unrealized_pnl(prices[instrument])
        return total

    def realized_pnl(self) -> float:
        return sum(p.realized_pnl for p in self.positions.values())

    def positions_summary(self, prices: Mapping[str, float]) -> Dict[str, Dict]:
        """Get summary of all open positions"""
        summary = {}
        for instrument, position in self.open_positions().items():
            if instrument not in prices:
                raise MissingPriceError(instrument)
            current_price = prices[instrument]
            unrealized = position.unrealized_pnl(current_price)
            basis = abs(position.quantity) * position.avg_cost
            summary[instrument] = {
                'quantity': position.quantity,
                'direction': position.direction.value,
                'avg_cost': position.avg_cost,
                'current_price': current_price,
                'market_value': position.market_value(current_price),
                'cost_basis': basis,
                'unrealized_pnl': unrealized,
                'pnl_percent': (unrealized / basis * 100) if basis > 0 else 0.0,
            }
        return summary

    def mark(self, prices: Mapping[str, float]) -> float:
        """Record net worth at ``prices``; returns the change since the last mark"""
        current = self.net_worth(prices)
        previous = self.previous_net_worth if self.previous_net_worth is not None else current
        self.previous_net_worth = current
        return current - previous

    def record_trade(self, trade: Trade) -> None:
        """Add a completed trade to the ledger history"""
        self.trades.append(trade)

    def trades_for(self, instrument: str, side: Optional[TradeSide] = None) -> List[Trade]:
        return [t for t in self.trades
                if t.instrument == instrument and (side is None or t.side == side)]

    def __str__(self) -> str:
        return (f"PositionLedger({self.holder_id}: Cash ${self.cash:.2f}, "
                f"Positions: {len(self.open_positions())}, Trades: {len(self.trades)})")

    def __repr__(self) -> str:
        return self.__str__()
