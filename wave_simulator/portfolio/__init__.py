"""Holder positions and cost-basis accounting."""

from .position import Position
from .ledger import PositionLedger

__all__ = ['Position', 'PositionLedger']
