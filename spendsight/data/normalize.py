"""
Raw record → canonical Transaction: column aliases, sign convention, ordering.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping

import numpy as np
import pandas as pd

from spendsight.config import COLUMN_MAP, CREDIT_TYPE_VALUES, UNKNOWN
from spendsight.data.schemas import MalformedRecord, Polarity, Transaction
from spendsight.logging_setup import get_logger

logger = get_logger(__name__)

_TRUE_STRINGS = {"true", "1", "yes", "y", "t"}
_FALSE_STRINGS = {"false", "0", "no", "n", "f"}
_DERIVED_COLS = ["overall_total", "minimized_total", "total_value"]


# ---------------------------------------------------------------------------
# Column normalisation
# ---------------------------------------------------------------------------

def _to_frame(records: Iterable[Mapping[str, Any]] | pd.DataFrame) -> pd.DataFrame:
    if isinstance(records, pd.DataFrame):
        df = records.copy()
    else:
        rows = list(records)
        for i, row in enumerate(rows):
            if not isinstance(row, Mapping):
                raise MalformedRecord(f"expected an object, got {type(row).__name__}", index=i)
        df = pd.DataFrame.from_records(rows)
    return df.reset_index(drop=True)


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Rename raw record keys to internal names."""
    rename = {k: v for k, v in COLUMN_MAP.items() if k in df.columns and v not in df.columns}
    return df.rename(columns=rename)


def _first_bad(mask: pd.Series) -> int:
    return int(mask.idxmax())


# ---------------------------------------------------------------------------
# Field parsing
# ---------------------------------------------------------------------------

def parse_dates(df: pd.DataFrame) -> pd.Series:
    """Parse the date column; any missing or unparseable value rejects its record."""
    if "date" not in df.columns:
        raise MalformedRecord("missing date", index=0, field="date")

    text = df["date"].astype(str)
    try:
        parsed = pd.to_datetime(text, format="mixed", errors="coerce")
    except ValueError:
        # mixed UTC offsets in one batch
        parsed = None
    if parsed is None or not pd.api.types.is_datetime64_any_dtype(parsed):
        parsed = text.map(lambda v: pd.to_datetime(v, errors="coerce"))

    bad = parsed.isna()
    if bad.any():
        i = _first_bad(bad)
        raise MalformedRecord(f"unparseable date {df.at[i, 'date']!r}", index=i, field="date")
    # Calendar date in each timestamp's own offset
    return parsed.map(lambda ts: ts.date())


def parse_amounts(df: pd.DataFrame) -> pd.Series:
    """Signed numeric amounts; currency symbols and thousands separators are stripped."""
    if "amount" not in df.columns:
        raise MalformedRecord("missing amount", index=0, field="amount")

    raw = df["amount"]
    cleaned = raw.where(raw.isna(), raw.astype(str).str.replace(r"[\$,\s]", "", regex=True))
    numbers = pd.to_numeric(cleaned, errors="coerce")
    bad = numbers.isna() | np.isinf(numbers)
    if bad.any():
        i = _first_bad(bad)
        raise MalformedRecord(f"non-numeric amount {raw.iloc[i]!r}", index=i, field="amount")
    return numbers.astype(float)


def _coerce_flag(value: Any) -> bool | None:
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, (int, float, np.integer, np.floating)) and not pd.isna(value):
        return bool(value)
    if isinstance(value, str):
        s = value.strip().lower()
        if s in _TRUE_STRINGS:
            return True
        if s in _FALSE_STRINGS:
            return False
    return None


def credit_flags(df: pd.DataFrame, amounts: pd.Series, polarity: Polarity) -> pd.Series:
    """Map the source's sign convention onto ``is_credit``."""
    if polarity == Polarity.DEBIT_POSITIVE:
        return amounts < 0
    if polarity == Polarity.CREDIT_POSITIVE:
        return amounts > 0
    if polarity == Polarity.TYPE_FIELD:
        if "type" not in df.columns:
            raise MalformedRecord("missing type", index=0, field="type")
        return df["type"].fillna("").astype(str).str.strip().str.upper().isin(CREDIT_TYPE_VALUES)

    if "is_credit" not in df.columns:
        raise MalformedRecord("missing isCredit", index=0, field="is_credit")
    flags = df["is_credit"].map(_coerce_flag)
    bad = flags.isna()
    if bad.any():
        i = _first_bad(bad)
        raise MalformedRecord(f"invalid isCredit {df.at[i, 'is_credit']!r}", index=i, field="is_credit")
    return flags.astype(bool)


def _text(df: pd.DataFrame, col: str) -> pd.Series:
    if col not in df.columns:
        return pd.Series([None] * len(df), index=df.index, dtype=object)
    s = df[col].astype(object).where(df[col].notna(), None)
    return s.map(lambda v: None if v is None or str(v).strip() == "" else str(v))


def fill_descriptive(df: pd.DataFrame) -> pd.DataFrame:
    """Fill missing category/merchant/name/id with sentinels."""
    category = _text(df, "category")
    merchant = _text(df, "merchant_name")
    name = _text(df, "name")

    df["category"] = category.fillna(UNKNOWN)
    df["merchant_name"] = merchant.fillna(name).fillna(UNKNOWN)
    df["name"] = name.fillna(merchant).fillna(UNKNOWN)

    ids = _text(df, "id")
    df["id"] = [v if v is not None else f"txn-{i}" for i, v in zip(df.index, ids)]

    if "account_id" in df.columns:
        df["account_id"] = df["account_id"].fillna("").astype(str)
    else:
        df["account_id"] = ""
    if "pending" in df.columns:
        df["pending"] = df["pending"].map(_coerce_flag).fillna(False).astype(bool)
    else:
        df["pending"] = False
    return df


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def _row_to_transaction(row: dict, keep_totals: bool) -> Transaction:
    totals = {}
    if keep_totals:
        for col in _DERIVED_COLS:
            value = row.get(col)
            if value is not None and not pd.isna(value):
                totals[col] = float(value)
    return Transaction(
        id=str(row["id"]),
        date=row["date"],
        amount=float(row["amount"]),
        is_credit=bool(row["is_credit"]),
        category=str(row["category"]),
        merchant_name=str(row["merchant_name"]),
        name=str(row["name"]),
        account_id=str(row["account_id"]),
        pending=bool(row["pending"]),
        **totals,
    )


def normalize_transactions(
    records: Iterable[Mapping[str, Any]] | pd.DataFrame,
    polarity: Polarity | str = Polarity.EXPLICIT,
    *,
    sort: bool = True,
) -> list[Transaction]:
    """Convert raw records into canonical Transactions.

    With ``sort=True`` (default) the result is a stable ascending sort by
    date and any incoming running totals are dropped, since they depend on
    the original order. With ``sort=False`` input order and totals are kept;
    the projection endpoint uses this for payloads that are already ordered.

    Raises MalformedRecord for the first record with a bad date, amount or
    credit flag.
    """
    polarity = Polarity(polarity)
    df = _to_frame(records)
    if len(df) == 0:
        return []

    df = normalize_columns(df)
    out = pd.DataFrame(index=df.index)
    out["date"] = parse_dates(df)
    signed = parse_amounts(df)
    out["is_credit"] = credit_flags(df, signed, polarity)
    out["amount"] = signed.abs()

    desc = fill_descriptive(df.copy())
    for col in ["id", "category", "merchant_name", "name", "account_id", "pending"]:
        out[col] = desc[col]
    for col in _DERIVED_COLS:
        if col in df.columns:
            out[col] = pd.to_numeric(df[col], errors="coerce")

    if sort:
        out = out.sort_values("date", kind="stable")

    txns = [_row_to_transaction(row, keep_totals=not sort) for row in out.to_dict("records")]
    logger.debug("normalized %d records (polarity=%s, sort=%s)", len(txns), polarity.value, sort)
    return txns
