"""
Core type definitions for the wave simulator.
Contains all enums and basic type definitions.
"""

from enum import Enum


class InstrumentCategory(Enum):
    """Lifecycle stage of an instrument, drives its volatility band"""
    STARTUP = "startup"
    GROWTH = "growth"
    MATURE = "mature"
    DECLINE = "decline"
    UNCLASSIFIED = "unclassified"


class TradeSide(Enum):
    """Side of a trade - buy or sell"""
    BUY = "buy"
    SELL = "sell"

    @classmethod
    def from_quantity(cls, quantity: float) -> 'TradeSide':
        """Positive quantities buy, negative quantities sell"""
        return cls.BUY if quantity > 0 else cls.SELL


class PositionDirection(Enum):
    """Direction of a signed position"""
    LONG = "long"
    SHORT = "short"
    FLAT = "flat"
