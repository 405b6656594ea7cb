"""
Transaction sources — the injected capability the store reads raw records from.

Provider clients live outside this package; anything that can hand back a
list of raw records satisfies ``TransactionSource``.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Protocol, Sequence

import pandas as pd

from spendsight.data.schemas import Polarity


class TransactionSource(Protocol):
    """Anything that yields raw transaction records plus their sign convention."""

    polarity: Polarity

    def fetch(self) -> list[dict[str, Any]]:
        ...


class StaticSource:
    """In-memory records, mainly for tests and embedding."""

    def __init__(self, records: Sequence[dict[str, Any]], polarity: Polarity | str = Polarity.EXPLICIT) -> None:
        self.records = list(records)
        self.polarity = Polarity(polarity)

    def fetch(self) -> list[dict[str, Any]]:
        return [dict(r) for r in self.records]


class FileSource:
    """Records from a CSV or JSON export on disk.

    JSON may be a bare list of records or an object with a ``transactions``
    (or ``chartData``) list.
    """

    def __init__(self, path: str | Path, polarity: Polarity | str = Polarity.EXPLICIT) -> None:
        self.path = Path(path)
        self.polarity = Polarity(polarity)

    def fetch(self) -> list[dict[str, Any]]:
        if not self.path.exists():
            raise FileNotFoundError(f"Transaction file not found: {self.path}")

        suffix = self.path.suffix.lower()
        if suffix == ".csv":
            df = pd.read_csv(self.path, dtype=str, keep_default_na=False)
            df = df.astype(object).where(df != "", None)
            return df.to_dict("records")
        if suffix == ".json":
            payload = json.loads(self.path.read_text())
            if isinstance(payload, dict):
                payload = payload.get("transactions", payload.get("chartData", []))
            if not isinstance(payload, list):
                raise ValueError(f"{self.path.name}: expected a list of transactions")
            return payload
        raise ValueError(f"Unsupported transaction file type: {self.path.suffix}")
