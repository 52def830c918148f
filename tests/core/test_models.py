"""
Tests for core models.
"""

import pytest
from wave_simulator.core.models import (
    VolatilityBand, InstrumentDefinition, TradeRequest, Trade, TradeResult, PriceSnapshot
)
from wave_simulator.core.types import TradeSide
from wave_simulator.core.exceptions import (
    InvalidConstructionError, MissingPriceError, InsufficientFundsError, WaveSimulatorError
)


class TestVolatilityBand:
    def test_clamp(self):
        """Values outside the band are pulled to the nearest edge"""
        band = VolatilityBand(0.1, 0.3)
        assert band.clamp(0.05) == 0.1
        assert band.clamp(0.5) == 0.3
        assert band.clamp(0.2) == 0.2

    def test_inverted_band_rejected(self):
        with pytest.raises(InvalidConstructionError):
            VolatilityBand(0.4, 0.2)

    def test_non_positive_band_rejected(self):
        with pytest.raises(InvalidConstructionError):
            VolatilityBand(-0.1, 0.1)
        with pytest.raises(InvalidConstructionError):
            VolatilityBand(0.0, 0.1)

    def test_degenerate_band_allowed(self):
        band = VolatilityBand(0.2, 0.2)
        assert band.clamp(1.0) == 0.2


class TestInstrumentDefinition:
    def test_tags_become_tuple(self):
        definition = InstrumentDefinition("Tesla", ["Automotive", "Growth"])
        assert definition.tags == ("Automotive", "Growth")

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_rejected(self, name):
        with pytest.raises(InvalidConstructionError):
            InstrumentDefinition(name, ("Growth",))


class TestTradeRequest:
    def test_side_from_sign(self):
        assert TradeRequest("alice", "ASML", 10).side == TradeSide.BUY
        assert TradeRequest("alice", "ASML", -10).side == TradeSide.SELL

    def test_result_message(self):
        request = TradeRequest("alice", "ASML", 10)
        trade = Trade(holder_id="alice", instrument="ASML", side=TradeSide.BUY, quantity=10, price=12.5)
        assert TradeResult(request, True, trade=trade).message == "buy 10 ASML @ $12.50"

        error = InsufficientFundsError(110.0, 100.0)
        rejected = TradeResult(request, False, error=error)
        assert "Insufficient funds" in rejected.message
        assert isinstance(rejected.error, WaveSimulatorError)


class TestPriceSnapshot:
    def test_mapping_behaviour(self):
        snapshot = PriceSnapshot({'A': 10.0, 'B': 20.0}, round_number=3)
        assert snapshot['A'] == 10.0
        assert 'B' in snapshot
        assert len(snapshot) == 2
        assert dict(snapshot) == {'A': 10.0, 'B': 20.0}
        assert snapshot.round_number == 3

    def test_snapshot_is_isolated_from_source(self):
        """Mutating the source dict does not leak into the snapshot"""
        prices = {'A': 10.0}
        snapshot = PriceSnapshot(prices)
        prices['A'] = 99.0
        assert snapshot['A'] == 10.0

    def test_snapshot_is_read_only(self):
        snapshot = PriceSnapshot({'A': 10.0})
        with pytest.raises(TypeError):
            snapshot.prices['A'] = 1.0
        with pytest.raises(AttributeError):
            snapshot.round_number = 5

    def test_price_of_missing_instrument(self):
        snapshot = PriceSnapshot({'A': 10.0})
        with pytest.raises(MissingPriceError):
            snapshot.price_of('B')

    def test_change_percent(self):
        snapshot = PriceSnapshot({'A': 11.0}, changes={'A': 0.1})
        assert snapshot.change_percent('A') == pytest.approx(10.0)
        assert snapshot.change_percent('B') == 0.0

    def test_equality_with_dict(self):
        assert PriceSnapshot({'A': 1.0}) == {'A': 1.0}
