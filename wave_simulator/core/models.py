"""
Core data models for the wave simulator.
Contains all dataclasses and model definitions.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, List, Optional, Sequence, Tuple
from datetime import datetime
import uuid

from .types import TradeSide
from .exceptions import InvalidConstructionError, MissingPriceError


@dataclass(frozen=True)
class VolatilityBand:
    """Closed [min, max] range a category's volatility is clamped into"""
    min: float
    max: float

    def __post_init__(self):
        if self.min <= 0:
            raise InvalidConstructionError(f"Volatility band minimum must be positive, got {self.min}")
        if self.min > self.max:
            raise InvalidConstructionError(
                f"Volatility band minimum {self.min} exceeds maximum {self.max}"
            )

    def clamp(self, value: float) -> float:
        return min(max(value, self.min), self.max)

    def contains(self, value: float) -> bool:
        return self.min <= value <= self.max


@dataclass(frozen=True)
class InstrumentDefinition:
    """Name and ordered tag set of a tradable instrument"""
    name: str
    tags: Tuple[str, ...] = ()

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidConstructionError("Instrument name must be a non-empty string")
        object.__setattr__(self, 'tags', tuple(self.tags))


@dataclass
class TradeRequest:
    """A signed trade against one holder's ledger.

    Positive quantities buy and negative quantities sell. When ``price`` is
    None the trade fills at the instrument's current price.
    """
    holder_id: str
    instrument: str
    quantity: float
    price: Optional[float] = None
    limit_price: Optional[float] = None

    @property
    def side(self) -> TradeSide:
        return TradeSide.from_quantity(self.quantity)


@dataclass
class Trade:
    """Represents an executed trade"""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    holder_id: str = ""
    instrument: str = ""
    side: TradeSide = TradeSide.BUY
    quantity: float = 0.0
    price: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)
    round_number: int = 0

    @property
    def value(self) -> float:
        return self.quantity * self.price


@dataclass
class TradeResult:
    """Outcome of a submitted trade request"""
    request: TradeRequest
    success: bool
    trade: Optional[Trade] = None
    error: Optional[Exception] = None

    @property
    def message(self) -> str:
        if self.success and self.trade is not None:
            return (f"{self.trade.side.value} {self.trade.quantity:g} {self.trade.instrument} "
                    f"@ ${self.trade.price:.2f}")
        return str(self.error) if self.error is not None else "rejected"


@dataclass(frozen=True, eq=False)
class PriceSnapshot(Mapping):
    """Immutable instrument -> price map published once per round"""
    prices: Mapping
    round_number: int = 0
    changes: Mapping = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'prices', MappingProxyType(dict(self.prices)))
        object.__setattr__(self, 'changes', MappingProxyType(dict(self.changes)))

    def __getitem__(self, instrument: str) -> float:
        return self.prices[instrument]

    def __iter__(self) -> Iterator[str]:
        return iter(self.prices)

    def __len__(self) -> int:
        return len(self.prices)

    def price_of(self, instrument: str) -> float:
        """Price lookup that surfaces a missing instrument as a domain error"""
        if instrument not in self.prices:
            raise MissingPriceError(instrument)
        return self.prices[instrument]

    def change_percent(self, instrument: str) -> float:
        """Fractional change of the round that produced this snapshot, in percent"""
        return self.changes.get(instrument, 0.0) * 100

    def as_dict(self) -> Dict[str, float]:
        return dict(self.prices)

    def __repr__(self) -> str:
        return f"PriceSnapshot(round={self.round_number}, prices={dict(self.prices)})"


@dataclass
class RoundReport:
    """Everything that happened in one settled round"""
    round_number: int
    snapshot: PriceSnapshot
    trade_results: List[TradeResult] = field(default_factory=list)
    net_worth: Dict[str, float] = field(default_factory=dict)
    net_worth_change: Dict[str, float] = field(default_factory=dict)

    @property
    def rejected(self) -> Sequence[TradeResult]:
        return [r for r in self.trade_results if not r.success]
