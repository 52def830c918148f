"""
Trade engine that routes trade requests to holder ledgers.
"""

import logging
from typing import Dict, List, Mapping, Optional, Tuple
from datetime import datetime

from ..market.coordinator import RoundCoordinator
from ..portfolio.ledger import PositionLedger, DEFAULT_INITIAL_CASH
from ..core.models import Trade, TradeRequest, TradeResult
from ..core.types import TradeSide
from ..core.exceptions import (
    WaveSimulatorError, InvalidConstructionError, InvalidTradeError,
    LimitPriceError, UnknownHolderError
)


class TradeEngine:
    """Executes trade requests against ledgers at coordinator prices.

    Ledger primitives raise on bad requests; ``submit`` turns every
    recoverable rejection into a failed ``TradeResult`` so callers never
    have to catch anything.
    """

    def __init__(self, coordinator: RoundCoordinator):
        self.coordinator = coordinator
        self.ledgers: Dict[str, PositionLedger] = {}
        self.executed_trades: List[Trade] = []
        self.rejected: List[TradeResult] = []
        self.logger = logging.getLogger(__name__)

    def open_account(self, holder_id: str,
                     initial_cash: float = DEFAULT_INITIAL_CASH) -> PositionLedger:
        """Create the ledger for a new holder"""
        if holder_id in self.ledgers:
            raise InvalidConstructionError(f"Holder {holder_id} already has an account")
        ledger = PositionLedger(holder_id, initial_cash)
        self.ledgers[holder_id] = ledger
        return ledger

    def get_ledger(self, holder_id: str) -> PositionLedger:
        try:
            return self.ledgers[holder_id]
        except KeyError:
            raise UnknownHolderError(holder_id) from None

    def _resolve_fill_price(self, request: TradeRequest) -> float:
        engine = self.coordinator.get_engine(request.instrument)
        price = request.price if request.price is not None else engine.price

        if request.limit_price is not None:
            if request.side == TradeSide.BUY and price > request.limit_price:
                raise LimitPriceError(request.instrument, price, request.limit_price)
            if request.side == TradeSide.SELL and price < request.limit_price:
                raise LimitPriceError(request.instrument, price, request.limit_price)
        return price

    def _execute(self, request: TradeRequest, round_number: int) -> Trade:
        if request.quantity == 0:
            raise InvalidTradeError("Quantity must be non-zero")

        ledger = self.get_ledger(request.holder_id)
        price = self._resolve_fill_price(request)
        quantity = abs(request.quantity)

        if request.side == TradeSide.BUY:
            ledger.buy(request.instrument, quantity, price)
        else:
            ledger.sell(request.instrument, quantity, price)

        trade = Trade(
            holder_id=request.holder_id,
            instrument=request.instrument,
            side=request.side,
            quantity=quantity,
            price=price,
            timestamp=datetime.now(),
            round_number=round_number,
        )
        ledger.record_trade(trade)
        self.executed_trades.append(trade)
        return trade

    def submit(self, request: TradeRequest, round_number: int = 0) -> TradeResult:
        """Execute a trade request; rejections come back as failed results"""
        try:
            trade = self._execute(request, round_number)
        except WaveSimulatorError as e:
            self.logger.warning(f"Rejected trade for {request.holder_id} on {request.instrument}: {e}")
            result = TradeResult(request=request, success=False, error=e)
            self.rejected.append(result)
            return result

        self.logger.info(f"{trade.holder_id} {trade.side.value} {trade.quantity:g} "
                         f"{trade.instrument} @ ${trade.price:.2f}")
        return TradeResult(request=request, success=True, trade=trade)

    def buy(self, holder_id: str, instrument: str, quantity: float,
            limit_price: Optional[float] = None, round_number: int = 0) -> TradeResult:
        """Buy at the instrument's current price"""
        return self.submit(
            TradeRequest(holder_id, instrument, abs(quantity), limit_price=limit_price),
            round_number,
        )

    def sell(self, holder_id: str, instrument: str, quantity: float,
             limit_price: Optional[float] = None, round_number: int = 0) -> TradeResult:
        """Sell at the instrument's current price, shorting past the held quantity"""
        return self.submit(
            TradeRequest(holder_id, instrument, -abs(quantity), limit_price=limit_price),
            round_number,
        )

    def standings(self, prices: Optional[Mapping[str, float]] = None) -> List[Tuple[str, float]]:
        """Holders ranked by net worth, richest first"""
        if prices is None:
            prices = self.coordinator.snapshot()
        ranked = [(holder_id, ledger.net_worth(prices)) for holder_id, ledger in self.ledgers.items()]
        return sorted(ranked, key=lambda item: item[1], reverse=True)

    def get_trading_statistics(self) -> dict:
        """Get trading activity statistics"""
        if not self.executed_trades:
            return {'total_trades': 0, 'rejected_trades': len(self.rejected)}

        buy_trades = [t for t in self.executed_trades if t.side == TradeSide.BUY]
        sell_trades = [t for t in self.executed_trades if t.side == TradeSide.SELL]

        return {
            'total_trades': len(self.executed_trades),
            'buy_trades': len(buy_trades),
            'sell_trades': len(sell_trades),
            'rejected_trades': len(self.rejected),
            'total_volume': sum(t.quantity for t in self.executed_trades),
            'total_traded_value': sum(t.value for t in self.executed_trades),
        }

    def __str__(self) -> str:
        return f"TradeEngine(Holders: {len(self.ledgers)}, Trades: {len(self.executed_trades)})"

    def __repr__(self) -> str:
        return self.__str__()
