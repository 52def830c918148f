"""
Instrument catalog loading.
"""

import logging
from typing import Dict, Iterable, List

import pandas as pd

from ..core.models import InstrumentDefinition
from ..core.exceptions import DataLoadingError

logger = logging.getLogger(__name__)

TAG_COLUMNS = ('field', 'business', 'stage')


DEFAULT_CATALOG: List[InstrumentDefinition] = [
    InstrumentDefinition("NVIDIA", ("Semiconductors", "Consumer Electronics", "Growth", "North America")),
    InstrumentDefinition("Occidental Petroleum", ("Oil", "Mature", "North America")),
    InstrumentDefinition("CATL", ("Solar", "Batteries", "Automotive", "Mature", "Asia")),
    InstrumentDefinition("Chipotle", ("Food", "Growth", "North America")),
    InstrumentDefinition("Kweichow Moutai", ("Liquor", "Decline", "Asia")),
    InstrumentDefinition("L'Oreal", ("Cosmetics", "Mature", "Europe")),
    InstrumentDefinition("Vanke", ("Real Estate", "Decline", "Asia")),
    InstrumentDefinition("Boeing", ("Transport", "Mature", "North America")),
    InstrumentDefinition("Apple", ("Semiconductors", "Consumer Electronics", "Mature", "North America")),
    InstrumentDefinition("Pfizer", ("Pharmaceuticals", "Mature", "North America")),
    InstrumentDefinition("Tesla", ("Automotive", "Batteries", "Consumer Electronics", "Growth", "North America")),
    InstrumentDefinition("Faraday Future", ("Automotive", "Startup", "North America")),
    InstrumentDefinition("Wens Foodstuff", ("Livestock", "Mature", "Asia")),
    InstrumentDefinition("ASML", ("Semiconductors", "Mature", "Europe")),
    InstrumentDefinition("Shandong Gold", ("Precious Metals", "Mature", "Asia")),
]


class InstrumentLoader:
    """Builds instrument definitions from CSV files or plain records"""

    @staticmethod
    def load_csv(file_path: str) -> List[InstrumentDefinition]:
        """Load instruments from a CSV with ``name, field, business, stage`` columns.

        Tags are the non-empty ``field``, ``business`` and ``stage`` values in
        that order. Rows without a name are skipped.
        """
        try:
            frame = pd.read_csv(file_path, encoding='utf-8-sig', dtype=str, keep_default_na=False)
        except (FileNotFoundError, UnicodeDecodeError, pd.errors.EmptyDataError, pd.errors.ParserError) as e:
            raise DataLoadingError(f"Failed to read instruments from {file_path}: {e}") from e

        frame.columns = [str(c).strip().lower() for c in frame.columns]
        name_column = next((c for c in frame.columns if 'name' in c), None)
        if name_column is None:
            raise DataLoadingError(f"{file_path} has no name column")

        tag_columns = [c for c in TAG_COLUMNS if c in frame.columns]
        instruments = []
        for record in frame.to_dict(orient='records'):
            name = str(record[name_column]).strip()
            if not name:
                logger.warning(f"Skipping instrument row without a name: {record}")
                continue
            tags = tuple(str(record[c]).strip() for c in tag_columns if str(record[c]).strip())
            instruments.append(InstrumentDefinition(name, tags))

        logger.info(f"Loaded {len(instruments)} instruments from {file_path}")
        return instruments

    @staticmethod
    def from_records(records: Iterable[Dict]) -> List[InstrumentDefinition]:
        """Build definitions from ``{'name': ..., 'tags': [...]}`` records"""
        instruments = []
        for record in records:
            if 'name' not in record:
                raise DataLoadingError(f"Instrument record without a name: {record}")
            instruments.append(InstrumentDefinition(record['name'], tuple(record.get('tags', ()))))
        return instruments
