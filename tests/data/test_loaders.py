"""
Tests for instrument catalog loading.
"""

import pytest

from wave_simulator.core.exceptions import DataLoadingError, InvalidConstructionError
from wave_simulator.data.loaders import InstrumentLoader, DEFAULT_CATALOG
from wave_simulator.market.categories import resolve_category
from wave_simulator.core.types import InstrumentCategory


class TestInstrumentLoader:
    def test_load_csv(self, tmp_path):
        path = tmp_path / "stocks.csv"
        path.write_text(
            "\ufeffname,field,business,stage\n"
            "Tesla,Automotive,Batteries,Growth\n"
            ",Oil,,Mature\n"
            "Vanke,Real Estate,,Decline\n",
            encoding="utf-8",
        )

        instruments = InstrumentLoader.load_csv(str(path))

        assert [i.name for i in instruments] == ["Tesla", "Vanke"]
        assert instruments[0].tags == ("Automotive", "Batteries", "Growth")
        assert instruments[1].tags == ("Real Estate", "Decline")

    def test_missing_file(self, tmp_path):
        with pytest.raises(DataLoadingError):
            InstrumentLoader.load_csv(str(tmp_path / "missing.csv"))

    def test_no_name_column(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("ticker,stage\nTSLA,Growth\n", encoding="utf-8")
        with pytest.raises(DataLoadingError):
            InstrumentLoader.load_csv(str(path))

    def test_from_records(self):
        instruments = InstrumentLoader.from_records([
            {'name': 'ASML', 'tags': ['Semiconductors', 'Mature']},
            {'name': 'Startup Co'},
        ])
        assert instruments[0].tags == ('Semiconductors', 'Mature')
        assert instruments[1].tags == ()

        with pytest.raises(DataLoadingError):
            InstrumentLoader.from_records([{'tags': ['Growth']}])
        with pytest.raises(InvalidConstructionError):
            InstrumentLoader.from_records([{'name': ''}])

    def test_default_catalog(self):
        names = [d.name for d in DEFAULT_CATALOG]
        assert len(names) == 15
        assert len(set(names)) == 15
        assert all(resolve_category(d.tags) != InstrumentCategory.UNCLASSIFIED for d in DEFAULT_CATALOG)
