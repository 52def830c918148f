"""Round-by-round market sessions."""

from .session import MarketSession

__all__ = ['MarketSession']
