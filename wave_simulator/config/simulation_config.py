"""
Simulation configuration and predefined profiles.
"""

from dataclasses import dataclass, field, asdict
from typing import List, Optional, Tuple
import os
import json

from ..core.exceptions import InvalidConstructionError


@dataclass
class SimulationConfig:
    """Settings for one market session"""
    # Holders
    initial_cash: float = 50000.0
    holders: List[str] = field(default_factory=lambda: ["Player 1", "Player 2"])

    # Market
    active_instruments: int = 6
    total_rounds: int = 3
    price_range: Tuple[float, float] = (10.0, 200.0)
    seed: Optional[int] = None

    # Instrument catalog CSV; the built-in catalog is used when unset
    catalog_path: Optional[str] = None

    def __post_init__(self):
        self.price_range = tuple(self.price_range)
        self.holders = list(self.holders)

    def validate(self) -> None:
        """Raise InvalidConstructionError for settings no session can run with"""
        if self.initial_cash < 0:
            raise InvalidConstructionError("initial_cash cannot be negative")
        if not self.holders:
            raise InvalidConstructionError("At least one holder is required")
        if len(set(self.holders)) != len(self.holders):
            raise InvalidConstructionError("Holder names must be unique")
        if self.active_instruments <= 0:
            raise InvalidConstructionError("active_instruments must be positive")
        if self.total_rounds < 0:
            raise InvalidConstructionError("total_rounds cannot be negative")
        if len(self.price_range) != 2:
            raise InvalidConstructionError("price_range must be a (low, high) pair")
        low, high = self.price_range
        if low <= 0 or low > high:
            raise InvalidConstructionError(f"Invalid price_range {self.price_range}")

    @classmethod
    def from_file(cls, config_path: str) -> 'SimulationConfig':
        """Load configuration from JSON file"""
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return cls(**data)
        except (FileNotFoundError, json.JSONDecodeError, TypeError) as e:
            raise ValueError(f"Failed to load simulation config from {config_path}: {e}")

    def save_to_file(self, config_path: str):
        """Save configuration to JSON file"""
        # Convert to dict, excluding None values
        config_dict = {k: v for k, v in asdict(self).items() if v is not None}

        with open(config_path, 'w', encoding='utf-8') as f:
            json.dump(config_dict, f, indent=2, ensure_ascii=False)

    @classmethod
    def from_env(cls) -> 'SimulationConfig':
        """Create configuration from WAVE_* environment variables"""
        defaults = cls()

        holders_str = os.getenv('WAVE_HOLDERS')
        holders = ([h.strip() for h in holders_str.split(',') if h.strip()]
                   if holders_str else defaults.holders)

        price_range = defaults.price_range
        range_str = os.getenv('WAVE_PRICE_RANGE')
        if range_str:
            try:
                low, high = (float(v) for v in range_str.split(','))
            except ValueError as e:
                raise ValueError(f"Invalid WAVE_PRICE_RANGE {range_str!r}, expected 'low,high': {e}")
            price_range = (low, high)

        seed = os.getenv('WAVE_SEED')

        return cls(
            initial_cash=float(os.getenv('WAVE_INITIAL_CASH', str(defaults.initial_cash))),
            holders=holders,
            active_instruments=int(os.getenv('WAVE_ACTIVE_INSTRUMENTS', str(defaults.active_instruments))),
            total_rounds=int(os.getenv('WAVE_TOTAL_ROUNDS', str(defaults.total_rounds))),
            price_range=price_range,
            seed=int(seed) if seed else None,
            catalog_path=os.getenv('WAVE_CATALOG_PATH') or None,
        )


# Predefined configurations
DEFAULT_CONFIG = SimulationConfig()

QUICK_CONFIG = SimulationConfig(
    holders=["Player 1"],
    active_instruments=3,
    total_rounds=1,
    seed=7,
)
