"""Shared fixtures: small transaction sets and an API client over a static source."""

from __future__ import annotations

import datetime as dt

import pytest
from fastapi.testclient import TestClient

from spendsight.data.schemas import Transaction
from spendsight.data.sources import StaticSource
from spendsight.data.store import TransactionStore
from spendsight.main import create_app


def make_txn(i: int, amount: float, is_credit: bool, category: str | None = "UNKNOWN", day: int | None = None) -> Transaction:
    return Transaction(
        id=f"t{i}",
        date=dt.date(2025, 1, 1) + dt.timedelta(days=day if day is not None else i),
        amount=amount,
        is_credit=is_credit,
        category=category,
    )


@pytest.fixture
def month_of_spending() -> list[Transaction]:
    return [
        make_txn(0, 2500.0, True, "Income"),
        make_txn(1, 42.5, False, "Dining"),
        make_txn(2, 1200.0, False, "Rent"),
        make_txn(3, 18.0, False, "Dining"),
        make_txn(4, 60.0, False, "Shopping"),
        make_txn(5, 25.0, True, "Refund"),
        make_txn(6, 89.99, False, "Shopping"),
        make_txn(7, 15.0, False, None),
    ]


@pytest.fixture
def raw_records() -> list[dict]:
    return [
        {"transaction_id": "b", "date": "2025-03-02", "amount": 20, "isCredit": False,
         "category": "Coffee", "merchant_name": "Blue Bottle", "name": "Blue Bottle #12"},
        {"transaction_id": "a", "date": "2025-03-01", "amount": 1000, "isCredit": True,
         "category": "Income", "name": "Payroll"},
        {"transaction_id": "c", "date": "2025-03-02", "amount": "$1,250.00", "isCredit": "false"},
    ]


@pytest.fixture
def client(raw_records):
    store = TransactionStore(StaticSource(raw_records))
    with TestClient(create_app(store)) as c:
        yield c
