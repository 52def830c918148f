"""
Tests for trade request routing.
"""

import logging

import pytest
from wave_simulator.core.models import TradeRequest
from wave_simulator.core.types import TradeSide
from wave_simulator.core.exceptions import (
    InsufficientFundsError, InvalidConstructionError, InvalidTradeError,
    LimitPriceError, UnknownHolderError, UnknownInstrumentError
)


class TestTradeEngine:
    def test_buy_at_current_price(self, sample_trade_engine):
        result = sample_trade_engine.buy("alice", "NVIDIA", 10)

        assert result.success
        assert result.trade.price == 100.0
        assert result.trade.side == TradeSide.BUY
        ledger = sample_trade_engine.get_ledger("alice")
        assert ledger.cash == 9000.0
        assert ledger.quantity("NVIDIA") == 10
        assert ledger.trades == [result.trade]

    def test_signed_request_sells(self, sample_trade_engine):
        result = sample_trade_engine.submit(TradeRequest("bob", "Pfizer", -5), round_number=2)

        assert result.success
        assert result.trade.side == TradeSide.SELL
        assert result.trade.quantity == 5
        assert result.trade.round_number == 2
        assert sample_trade_engine.get_ledger("bob").quantity("Pfizer") == -5

    def test_reference_price_overrides_engine_price(self, sample_trade_engine):
        result = sample_trade_engine.submit(TradeRequest("alice", "NVIDIA", 2, price=90.0))
        assert result.trade.price == 90.0
        assert sample_trade_engine.get_ledger("alice").cash == 9820.0

    def test_insufficient_funds_returns_failed_result(self, sample_trade_engine):
        result = sample_trade_engine.buy("bob", "NVIDIA", 10)

        assert not result.success
        assert isinstance(result.error, InsufficientFundsError)
        assert sample_trade_engine.get_ledger("bob").cash == 500.0
        assert sample_trade_engine.rejected == [result]

    @pytest.mark.parametrize("request_, error_type", [
        (TradeRequest("alice", "Boeing", 1), UnknownInstrumentError),
        (TradeRequest("carol", "NVIDIA", 1), UnknownHolderError),
        (TradeRequest("alice", "NVIDIA", 0), InvalidTradeError),
        (TradeRequest("alice", "NVIDIA", 1, price=-3.0), InvalidTradeError),
    ])
    def test_rejections_never_raise(self, sample_trade_engine, request_, error_type):
        result = sample_trade_engine.submit(request_)
        assert not result.success
        assert isinstance(result.error, error_type)
        assert result.trade is None

    def test_rejections_are_logged(self, sample_trade_engine, caplog):
        with caplog.at_level(logging.WARNING):
            sample_trade_engine.buy("alice", "Boeing", 1)
        assert "Unknown instrument: Boeing" in caplog.text

    def test_limit_prices(self, sample_trade_engine):
        assert not sample_trade_engine.buy("alice", "NVIDIA", 1, limit_price=99.0).success
        assert sample_trade_engine.buy("alice", "NVIDIA", 1, limit_price=100.0).success

        rejected = sample_trade_engine.sell("alice", "NVIDIA", 1, limit_price=101.0)
        assert isinstance(rejected.error, LimitPriceError)
        assert sample_trade_engine.sell("alice", "NVIDIA", 1, limit_price=95.0).success

    def test_trades_for_filters_history(self, sample_trade_engine):
        sample_trade_engine.buy("alice", "NVIDIA", 10)
        sample_trade_engine.sell("alice", "NVIDIA", 4)
        sample_trade_engine.buy("alice", "Pfizer", 5)

        ledger = sample_trade_engine.get_ledger("alice")
        assert len(ledger.trades_for("NVIDIA")) == 2
        sells = ledger.trades_for("NVIDIA", TradeSide.SELL)
        assert [t.quantity for t in sells] == [4]
        assert ledger.trades_for("Pfizer", TradeSide.SELL) == []

    def test_duplicate_account_rejected(self, sample_trade_engine):
        with pytest.raises(InvalidConstructionError):
            sample_trade_engine.open_account("alice")

    def test_get_unknown_ledger(self, sample_trade_engine):
        with pytest.raises(UnknownHolderError):
            sample_trade_engine.get_ledger("carol")

    def test_standings(self, sample_trade_engine, sample_coordinator):
        sample_trade_engine.buy("bob", "Pfizer", 10)
        snapshot = sample_coordinator.advance_round(1)

        standings = sample_trade_engine.standings(snapshot)
        assert [holder for holder, _ in standings] == ["alice", "bob"]
        assert standings[1][1] == pytest.approx(100.0 + 10 * snapshot["Pfizer"])

    def test_trading_statistics(self, sample_trade_engine):
        assert sample_trade_engine.get_trading_statistics()['total_trades'] == 0

        sample_trade_engine.buy("alice", "NVIDIA", 10)
        sample_trade_engine.sell("alice", "Pfizer", 5)
        sample_trade_engine.buy("bob", "NVIDIA", 100)

        stats = sample_trade_engine.get_trading_statistics()
        assert stats['total_trades'] == 2
        assert stats['buy_trades'] == 1
        assert stats['sell_trades'] == 1
        assert stats['rejected_trades'] == 1
        assert stats['total_traded_value'] == pytest.approx(1000.0 + 200.0)
