"""
Bounded stochastic price walk for a single instrument.
"""

import logging
import math
from typing import List, Optional, Tuple

import numpy as np

from ..core.models import InstrumentDefinition, VolatilityBand
from ..core.exceptions import InvalidConstructionError
from .categories import profile_for, resolve_category, volatility_modifier

logger = logging.getLogger(__name__)

PRICE_FLOOR = 0.01
MAX_ROUND_CHANGE = 1.0
DEFAULT_PRICE_RANGE = (10.0, 200.0)


class PriceEngine:
    """Owns one instrument's price and volatility and advances them each round.

    Every round a standard-normal draw is scaled by the current volatility and
    truncated to +/-100%, the price moves by that fraction (never below
    ``PRICE_FLOOR``), and the volatility is multiplied by the instrument's
    category modifier and clamped back into its category band.

    The engine draws only from its own ``numpy.random.Generator``, so two
    engines built the same way from the same seed follow identical paths.
    """

    def __init__(self, definition: InstrumentDefinition,
                 rng: Optional[np.random.Generator] = None,
                 seed: Optional[int] = None,
                 price_range: Tuple[float, float] = DEFAULT_PRICE_RANGE,
                 initial_price: Optional[float] = None,
                 initial_volatility: Optional[float] = None,
                 band: Optional[VolatilityBand] = None):
        if not isinstance(definition, InstrumentDefinition):
            raise InvalidConstructionError("PriceEngine requires an InstrumentDefinition")
        if rng is not None and seed is not None:
            raise InvalidConstructionError("Pass either rng or seed, not both")

        low, high = price_range
        if low < PRICE_FLOOR or high < PRICE_FLOOR:
            raise InvalidConstructionError(
                f"Initial price range must be at least {PRICE_FLOOR}, got {price_range}"
            )
        if low > high:
            raise InvalidConstructionError(f"Initial price range is inverted: {price_range}")

        self.definition = definition
        self.category = resolve_category(definition.tags)
        self.band = band if band is not None else profile_for(self.category).band
        if not isinstance(self.band, VolatilityBand):
            raise InvalidConstructionError("band must be a VolatilityBand")
        self.modifier = volatility_modifier(definition.tags)
        self.price_range = (float(low), float(high))

        self._rng = rng if rng is not None else np.random.default_rng(seed)
        self.rounds_advanced = 0

        if initial_price is None:
            self.price = round(self._uniform(low, high), 2)
        elif initial_price < PRICE_FLOOR:
            raise InvalidConstructionError(
                f"Initial price for {definition.name} must be at least {PRICE_FLOOR}"
            )
        else:
            self.price = round(float(initial_price), 2)

        if initial_volatility is None:
            self.volatility = self._uniform(self.band.min, self.band.max)
        elif not self.band.contains(initial_volatility):
            raise InvalidConstructionError(
                f"Initial volatility {initial_volatility} outside band "
                f"[{self.band.min}, {self.band.max}] for {definition.name}"
            )
        else:
            self.volatility = float(initial_volatility)

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def tags(self) -> Tuple[str, ...]:
        return self.definition.tags

    def _uniform(self, low: float, high: float) -> float:
        return low + float(self._rng.random()) * (high - low)

    def _open_unit(self) -> float:
        """Uniform draw in (0, 1); zero is redrawn to keep log() finite"""
        value = 0.0
        while value == 0.0:
            value = float(self._rng.random())
        return value

    def standard_normal(self) -> float:
        """One standard-normal sample from two uniforms (Box-Muller)"""
        u = self._open_unit()
        v = self._open_unit()
        return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)

    def sample_change(self) -> float:
        """Fractional price change for one round, truncated to [-1, 1]"""
        change = self.standard_normal() * self.volatility
        return max(-MAX_ROUND_CHANGE, min(MAX_ROUND_CHANGE, change))

    def advance_round(self) -> float:
        """Move price and volatility forward one round; returns the fractional change"""
        change = self.sample_change()

        new_price = max(self.price * (1 + change), PRICE_FLOOR)
        self.price = round(new_price, 2)
        self.volatility = self.band.clamp(self.volatility * self.modifier)
        self.rounds_advanced += 1

        logger.debug(f"{self.name} advanced to {self.price:.2f} ({change:+.2%}), "
                     f"volatility {self.volatility:.4f}")
        return change

    def preview(self, rounds: int = 10,
                rng: Optional[np.random.Generator] = None) -> List[Tuple[float, float]]:
        """Simulate ``rounds`` future rounds on a throwaway copy.

        Neither this engine's state nor its random stream is touched; the
        copy draws from ``rng`` (a fresh unseeded generator by default).
        Returns a list of ``(price, change)`` pairs.
        """
        if rounds < 0:
            raise ValueError("rounds must be non-negative")

        shadow = PriceEngine(
            self.definition,
            rng=rng if rng is not None else np.random.default_rng(),
            price_range=self.price_range,
            initial_price=self.price,
            initial_volatility=self.volatility,
            band=self.band,
        )
        path = []
        for _ in range(rounds):
            change = shadow.advance_round()
            path.append((shadow.price, change))
        return path

    def __str__(self) -> str:
        return (f"PriceEngine({self.name}: ${self.price:.2f}, "
                f"vol {self.volatility:.2%}, {self.category.value})")

    def __repr__(self) -> str:
        return self.__str__()
