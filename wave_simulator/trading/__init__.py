"""Trade request routing."""

from .engine import TradeEngine

__all__ = ['TradeEngine']
