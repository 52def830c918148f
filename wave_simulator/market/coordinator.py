"""
Round coordinator that advances every price engine once per round.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from ..core.models import PriceSnapshot
from ..core.exceptions import InvalidConstructionError, UnknownInstrumentError
from .price_engine import PriceEngine

logger = logging.getLogger(__name__)


class RoundCoordinator:
    """Advances registered engines in registration order and publishes snapshots"""

    def __init__(self, engines: Optional[Iterable[PriceEngine]] = None):
        self._engines: Dict[str, PriceEngine] = {}
        for engine in engines or ():
            self.register(engine)

    def register(self, engine: PriceEngine) -> None:
        """Register an engine; instrument names must be unique"""
        if engine.name in self._engines:
            raise InvalidConstructionError(f"Instrument {engine.name} is already registered")
        self._engines[engine.name] = engine

    def get_engine(self, name: str) -> PriceEngine:
        try:
            return self._engines[name]
        except KeyError:
            raise UnknownInstrumentError(name) from None

    @property
    def names(self) -> List[str]:
        return list(self._engines)

    @property
    def engines(self) -> List[PriceEngine]:
        return list(self._engines.values())

    def current_price(self, name: str) -> float:
        return self.get_engine(name).price

    def snapshot(self, round_number: int = 0) -> PriceSnapshot:
        """Current prices without advancing anything"""
        return PriceSnapshot(
            {name: engine.price for name, engine in self._engines.items()},
            round_number=round_number,
        )

    def advance_round(self, round_number: int = 0) -> PriceSnapshot:
        """Advance each engine exactly once and return the resulting snapshot"""
        changes = {}
        for name, engine in self._engines.items():
            changes[name] = engine.advance_round()

        snapshot = PriceSnapshot(
            {name: engine.price for name, engine in self._engines.items()},
            round_number=round_number,
            changes=changes,
        )
        logger.debug(f"Round {round_number} settled for {len(snapshot)} instruments")
        return snapshot

    def __contains__(self, name: str) -> bool:
        return name in self._engines

    def __iter__(self) -> Iterator[PriceEngine]:
        return iter(self._engines.values())

    def __len__(self) -> int:
        return len(self._engines)

    def __str__(self) -> str:
        return f"RoundCoordinator(Instruments: {len(self._engines)})"

    def __repr__(self) -> str:
        return self.__str__()
