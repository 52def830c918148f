"""Core components of the wave simulator."""

from .types import InstrumentCategory, TradeSide, PositionDirection
from .models import (
    VolatilityBand, InstrumentDefinition, TradeRequest, Trade, TradeResult,
    PriceSnapshot, RoundReport
)
from .exceptions import (
    WaveSimulatorError, InvalidConstructionError, InsufficientFundsError,
    UnknownInstrumentError, UnknownHolderError, MissingPriceError,
    InvalidTradeError, LimitPriceError, DataLoadingError
)

__all__ = [
    'InstrumentCategory', 'TradeSide', 'PositionDirection',
    'VolatilityBand', 'InstrumentDefinition', 'TradeRequest', 'Trade',
    'TradeResult', 'PriceSnapshot', 'RoundReport',
    'WaveSimulatorError', 'InvalidConstructionError', 'InsufficientFundsError',
    'UnknownInstrumentError', 'UnknownHolderError', 'MissingPriceError',
    'InvalidTradeError', 'LimitPriceError', 'DataLoadingError'
]
