"""
Pytest configuration and shared fixtures.
"""

import numpy as np
import pytest

from wave_simulator.core.models import InstrumentDefinition
from wave_simulator.market.price_engine import PriceEngine
from wave_simulator.market.coordinator import RoundCoordinator
from wave_simulator.portfolio.ledger import PositionLedger
from wave_simulator.trading.engine import TradeEngine
from wave_simulator.config.simulation_config import SimulationConfig


@pytest.fixture
def growth_instrument():
    """A growth-stage instrument with sector and region tags"""
    return InstrumentDefinition("NVIDIA", ("Semiconductors", "Growth", "North America"))


@pytest.fixture
def mature_instrument():
    return InstrumentDefinition("Pfizer", ("Pharmaceuticals", "Mature", "North America"))


@pytest.fixture
def sample_ledger():
    """Create a sample ledger for testing"""
    return PositionLedger("alice", initial_cash=100000.0)


@pytest.fixture
def sample_coordinator(growth_instrument, mature_instrument):
    """Two engines with fixed opening prices"""
    return RoundCoordinator([
        PriceEngine(growth_instrument, rng=np.random.default_rng(1), initial_price=100.0),
        PriceEngine(mature_instrument, rng=np.random.default_rng(2), initial_price=40.0),
    ])


@pytest.fixture
def sample_trade_engine(sample_coordinator):
    """Create a sample trade engine with two funded holders"""
    engine = TradeEngine(sample_coordinator)
    engine.open_account("alice", 10000.0)
    engine.open_account("bob", 500.0)
    return engine


@pytest.fixture
def seeded_config():
    return SimulationConfig(seed=1234, total_rounds=4, active_instruments=4)
