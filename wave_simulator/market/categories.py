"""
Category table for instrument volatility.

Each lifecycle category owns a volatility band and a per-round modifier.
Tags are resolved against the table once, when a price engine is built.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from ..core.models import VolatilityBand
from ..core.types import InstrumentCategory


@dataclass(frozen=True)
class CategoryProfile:
    """Volatility band, modifier and tag tokens of one category"""
    category: InstrumentCategory
    band: VolatilityBand
    modifier: float
    tokens: Tuple[str, ...] = ()


CATEGORY_PROFILES: Dict[InstrumentCategory, CategoryProfile] = {
    InstrumentCategory.STARTUP: CategoryProfile(
        InstrumentCategory.STARTUP, VolatilityBand(0.30, 0.40), 1.3, ('startup', '初创')
    ),
    InstrumentCategory.GROWTH: CategoryProfile(
        InstrumentCategory.GROWTH, VolatilityBand(0.10, 0.30), 1.2, ('growth', '成长')
    ),
    InstrumentCategory.MATURE: CategoryProfile(
        InstrumentCategory.MATURE, VolatilityBand(0.02, 0.10), 0.8, ('mature', '成熟')
    ),
    InstrumentCategory.DECLINE: CategoryProfile(
        InstrumentCategory.DECLINE, VolatilityBand(0.05, 0.20), 0.9, ('decline', '衰退')
    ),
    InstrumentCategory.UNCLASSIFIED: CategoryProfile(
        InstrumentCategory.UNCLASSIFIED, VolatilityBand(0.20, 0.40), 1.0
    ),
}

DEFAULT_CATEGORY = InstrumentCategory.UNCLASSIFIED

_TOKEN_INDEX: Dict[str, InstrumentCategory] = {
    token: profile.category
    for profile in CATEGORY_PROFILES.values()
    for token in profile.tokens
}


def _normalize(tag: str) -> str:
    return tag.strip().lower()


def category_for_tag(tag: str) -> Optional[InstrumentCategory]:
    """Category named by a single tag, or None for sector/region tags"""
    return _TOKEN_INDEX.get(_normalize(tag))


def resolve_category(tags: Iterable[str]) -> InstrumentCategory:
    """First tag naming a category wins; no match falls back to the default"""
    for tag in tags:
        category = category_for_tag(tag)
        if category is not None:
            return category
    return DEFAULT_CATEGORY


def volatility_modifier(tags: Iterable[str]) -> float:
    """Product of the modifiers of every category named in the tags.

    Each category contributes once no matter how often it is tagged; tags
    that name no category contribute nothing.
    """
    named = {category_for_tag(tag) for tag in tags}
    named.discard(None)

    modifier = 1.0
    for category in InstrumentCategory:
        if category in named:
            modifier *= CATEGORY_PROFILES[category].modifier
    return modifier


def profile_for(category: InstrumentCategory) -> CategoryProfile:
    return CATEGORY_PROFILES[category]
