"""Instrument catalog loading."""

from .loaders import InstrumentLoader, DEFAULT_CATALOG

__all__ = ['InstrumentLoader', 'DEFAULT_CATALOG']
