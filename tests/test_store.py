from __future__ import annotations

import json

import pytest

from spendsight.data.schemas import Polarity
from spendsight.data.sources import FileSource, StaticSource
from spendsight.data.store import TransactionStore


def test_empty_store_without_source():
    store = TransactionStore().load()
    assert store.is_loaded
    assert store.row_count() == 0
    assert store.categories() == []
    assert store.date_range() == "N/A"


def test_store_normalizes_and_totals(raw_records):
    store = TransactionStore(StaticSource(raw_records)).load()
    assert [t.overall_total for t in store.transactions] == [1000, 980, -270]


def test_static_source_returns_copies(raw_records):
    source = StaticSource(raw_records)
    fetched = source.fetch()
    fetched[0]["amount"] = 0
    assert source.records[0]["amount"] == 20


def test_csv_source(tmp_path):
    path = tmp_path / "export.csv"
    path.write_text(
        "date,amount,category,name\n"
        "2025-02-03,12.50,Dining,Cafe\n"
        "2025-02-01,-2000,,Payroll\n"
    )
    store = TransactionStore(FileSource(path, Polarity.DEBIT_POSITIVE)).load()
    first, second = store.transactions
    assert (first.name, first.is_credit, first.amount, first.category) == ("Payroll", True, 2000.0, "UNKNOWN")
    assert (second.name, second.is_credit, second.amount) == ("Cafe", False, 12.5)
    assert second.overall_total == pytest.approx(1987.5)


@pytest.mark.parametrize("wrap", [None, "transactions", "chartData"])
def test_json_source(tmp_path, raw_records, wrap):
    path = tmp_path / "export.json"
    path.write_text(json.dumps(raw_records if wrap is None else {wrap: raw_records}))
    assert len(FileSource(path).fetch()) == 3


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        FileSource(tmp_path / "nope.csv").fetch()


def test_unsupported_file(tmp_path):
    path = tmp_path / "export.xml"
    path.write_text("<x/>")
    with pytest.raises(ValueError):
        FileSource(path).fetch()
