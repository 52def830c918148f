"""Price generation and round coordination."""

from .categories import CategoryProfile, CATEGORY_PROFILES, resolve_category, volatility_modifier
from .price_engine import PriceEngine
from .coordinator import RoundCoordinator

__all__ = [
    'CategoryProfile', 'CATEGORY_PROFILES', 'resolve_category', 'volatility_modifier',
    'PriceEngine', 'RoundCoordinator'
]
