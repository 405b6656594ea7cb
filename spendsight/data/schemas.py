"""
Transaction value type, polarity policy, and core error types.
"""
from __future__ import annotations

import datetime as dt
from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Any, Mapping, Optional

from spendsight.config import COLUMN_MAP, UNKNOWN, WIRE_NAMES

# category key -> percentage (100 = unchanged, 0 = fully suppressed)
ProjectionConfig = Mapping[str, float]


class SpendSightError(Exception):
    """Base class for errors raised by the core."""


class MalformedRecord(SpendSightError, ValueError):
    """A raw record could not be turned into a Transaction."""

    def __init__(self, message: str, index: int | None = None, field: str | None = None) -> None:
        self.index = index
        self.field = field
        if index is not None:
            message = f"record {index}: {message}"
        super().__init__(message)


class InvalidConfig(SpendSightError, ValueError):
    """A projection config value could not be read as a number."""


class Polarity(str, Enum):
    """How a data source encodes money in vs money out.

    Resolved once at normalization; downstream code only sees ``is_credit``.
    """
    EXPLICIT = "explicit"                # isCredit flag, amount is a magnitude
    DEBIT_POSITIVE = "debit_positive"    # signed amount, positive = money out
    CREDIT_POSITIVE = "credit_positive"  # signed amount, positive = money in
    TYPE_FIELD = "type_field"            # "type" column, CREDIT = money in


@dataclass(frozen=True)
class Transaction:
    """One canonical account movement.

    ``amount`` is always a non-negative magnitude; direction lives in
    ``is_credit``. Derived totals are ``None`` until an engine fills them.
    """
    id: str
    date: dt.date
    amount: float
    is_credit: bool
    category: Optional[str] = UNKNOWN
    merchant_name: str = UNKNOWN
    name: str = UNKNOWN
    account_id: str = ""
    pending: bool = False
    # Derived
    overall_total: Optional[float] = None
    minimized_total: Optional[float] = None
    total_value: Optional[float] = None

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise MalformedRecord(f"amount must be non-negative, got {self.amount}", field="amount")

    @property
    def signed_amount(self) -> float:
        return self.amount if self.is_credit else -self.amount

    def with_totals(self, **totals: float) -> "Transaction":
        return replace(self, **totals)

    def to_dict(self) -> dict[str, Any]:
        """Wire form: camelCase derived fields, ISO date, unset totals omitted."""
        out: dict[str, Any] = {}
        for key, value in asdict(self).items():
            if value is None and key in ("overall_total", "minimized_total", "total_value"):
                continue
            if isinstance(value, dt.date):
                value = value.isoformat()
            out[WIRE_NAMES.get(key, key)] = value
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Transaction":
        """Inverse of ``to_dict`` for already-canonical records."""
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            key = COLUMN_MAP.get(key, key)
            if key in known:
                kwargs[key] = value
        if isinstance(kwargs.get("date"), str):
            kwargs["date"] = dt.date.fromisoformat(kwargs["date"][:10])
        return cls(**kwargs)
