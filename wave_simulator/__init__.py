"""
Wave Simulator - a round-based market simulation core.

This package provides:
- Category-bounded stochastic price engines
- Signed position ledgers with cover-then-open cost basis
- Round coordination with immutable price snapshots
- Trade request routing with result objects
- Seeded market sessions with pandas history frames
"""

__version__ = "1.0.0"
__author__ = "Wave Simulator Team"

import numpy as np

from .core.types import InstrumentCategory, TradeSide, PositionDirection
from .core.models import (
    VolatilityBand, InstrumentDefinition, TradeRequest, Trade, TradeResult,
    PriceSnapshot, RoundReport
)
from .market.price_engine import PriceEngine
from .market.coordinator import RoundCoordinator
from .portfolio.position import Position
from .portfolio.ledger import PositionLedger
from .trading.engine import TradeEngine
from .simulation.session import MarketSession
from .data.loaders import InstrumentLoader, DEFAULT_CATALOG
from .config.simulation_config import SimulationConfig

# Convenience factory functions
def create_market(instruments: list = None, seed: int = None,
                  price_range: tuple = (10.0, 200.0)) -> RoundCoordinator:
    """Create a coordinator with one independently seeded engine per instrument"""
    if instruments is None:
        instruments = DEFAULT_CATALOG[:6]

    streams = np.random.SeedSequence(seed).spawn(len(instruments))
    return RoundCoordinator(
        PriceEngine(definition, rng=np.random.default_rng(stream), price_range=price_range)
        for definition, stream in zip(instruments, streams)
    )

def create_session(seed: int = None, holders: list = None,
                   total_rounds: int = 3) -> MarketSession:
    """Create a market session with default settings"""
    config = SimulationConfig(seed=seed, total_rounds=total_rounds)
    if holders is not None:
        config.holders = list(holders)
    return MarketSession(config)

__all__ = [
    # Core types
    'InstrumentCategory', 'TradeSide', 'PositionDirection',
    # Core models
    'VolatilityBand', 'InstrumentDefinition', 'TradeRequest', 'Trade',
    'TradeResult', 'PriceSnapshot', 'RoundReport',
    # Main components
    'PriceEngine', 'RoundCoordinator', 'Position', 'PositionLedger',
    'TradeEngine', 'MarketSession',
    # Data and configuration
    'InstrumentLoader', 'DEFAULT_CATALOG', 'SimulationConfig',
    # Convenience functions
    'create_market', 'create_session'
]
