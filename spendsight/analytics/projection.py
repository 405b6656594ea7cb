"""
Projection analytics — running balance under a per-category spending adjustment.

Polarity comes only from ``Transaction.is_credit``; amounts are magnitudes.
Credits are never scaled. Inputs are taken in the order given.
"""
from __future__ import annotations

import math
from dataclasses import replace
from typing import Sequence

import numpy as np
import pandas as pd

from spendsight.analytics.common import sanitize_for_json, pct_of_total
from spendsight.config import NO_CHANGE_PERCENT, UNKNOWN
from spendsight.data.schemas import InvalidConfig, ProjectionConfig, Transaction
from spendsight.logging_setup import get_logger

logger = get_logger(__name__)


def coerce_config(config: ProjectionConfig | None) -> dict[str, float]:
    """Numeric coercion only; out-of-range percentages are kept as given."""
    if not config:
        return {}
    out = {}
    for category, value in config.items():
        try:
            pct = float(value)
        except (TypeError, ValueError):
            raise InvalidConfig(f"percentage for {category!r} is not a number: {value!r}")
        if math.isnan(pct) or math.isinf(pct):
            raise InvalidConfig(f"percentage for {category!r} is not finite: {value!r}")
        out[str(category)] = pct
    return out


def _is_adjustable(category: str | None) -> bool:
    """Absent categories (None or the UNKNOWN sentinel) always keep their full amount."""
    return bool(category) and category != UNKNOWN


def _factors(transactions: Sequence[Transaction], config: dict[str, float]) -> np.ndarray:
    return np.array(
        [config[t.category] / 100 if _is_adjustable(t.category) and t.category in config else 1.0
         for t in transactions],
        dtype=float,
    )


def _signed_flows(
    transactions: Sequence[Transaction],
    config: dict[str, float],
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return (actual, adjusted, factors) signed per-transaction flows."""
    amounts = np.array([t.amount for t in transactions], dtype=float)
    credits = np.array([t.is_credit for t in transactions], dtype=bool)
    factors = _factors(transactions, config)

    signs = np.where(credits, 1.0, -1.0)
    reduce = (factors < 1) & ~credits
    impact = np.where(reduce, amounts * factors, amounts)
    return signs * amounts, signs * impact, factors


# ---------------------------------------------------------------------------
# Running totals
# ---------------------------------------------------------------------------

def with_running_total(transactions: Sequence[Transaction]) -> list[Transaction]:
    """Copies carrying the unadjusted running balance as ``overall_total``."""
    if not transactions:
        return []
    actual, _, _ = _signed_flows(transactions, {})
    overall = np.cumsum(actual) + 0.0
    return [replace(t, overall_total=float(o)) for t, o in zip(transactions, overall)]


def project(
    transactions: Sequence[Transaction],
    config: ProjectionConfig | None = None,
) -> list[Transaction]:
    """Running ``minimized_total`` under ``config`` alongside ``overall_total``.

    A debit in a category whose percentage is below 100 contributes
    ``amount * pct / 100``; everything else contributes its full amount.
    ``overall_total`` is filled only where the input did not already carry one.
    """
    if not transactions:
        return []

    cfg = coerce_config(config)
    actual, adjusted, _ = _signed_flows(transactions, cfg)
    # + 0.0 turns the -0.0 left by fully suppressed debits into 0.0
    overall = np.cumsum(actual) + 0.0
    minimized = np.cumsum(adjusted) + 0.0

    return [
        replace(
            t,
            minimized_total=float(m),
            overall_total=t.overall_total if t.overall_total is not None else float(o),
        )
        for t, o, m in zip(transactions, overall, minimized)
    ]


def savings_series(projected: Sequence[Transaction]) -> list[Transaction]:
    """Adds ``total_value``: how far the adjusted balance is ahead of the actual one."""
    return [
        replace(t, total_value=(t.minimized_total or 0.0) - (t.overall_total or 0.0))
        for t in projected
    ]


# ---------------------------------------------------------------------------
# Default plan
# ---------------------------------------------------------------------------

def adjustable_categories(transactions: Sequence[Transaction]) -> list[str]:
    """Sorted categories with at least one debit; credit-only ones cannot be cut."""
    return sorted({
        t.category for t in transactions
        if not t.is_credit and _is_adjustable(t.category)
    })


def default_config(transactions: Sequence[Transaction]) -> dict[str, float]:
    """Every adjustable category at 100 (no change)."""
    return {c: float(NO_CHANGE_PERCENT) for c in adjustable_categories(transactions)}


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------

def projection_summary(
    transactions: Sequence[Transaction],
    config: ProjectionConfig | None = None,
) -> dict:
    """Final balances, total saved, and per-category debit breakdown."""
    cfg = coerce_config(config)
    if not transactions:
        return {
            "transactions": 0,
            "final_balance": 0.0,
            "projected_balance": 0.0,
            "total_saved": 0.0,
            "total_income": 0.0,
            "total_spent": 0.0,
            "adjusted_debits": 0,
            "by_category": [],
        }

    actual, adjusted, factors = _signed_flows(transactions, cfg)

    df = pd.DataFrame({
        "category": [t.category or UNKNOWN for t in transactions],
        "is_credit": [t.is_credit for t in transactions],
        "spent": -actual,
        "projected_spend": -adjusted,
        "adjusted": (factors < 1),
    })
    debits = df[~df["is_credit"]]
    income = float(actual[df["is_credit"].to_numpy()].sum())

    by_cat = debits.groupby("category").agg(
        spent=("spent", "sum"),
        projected_spend=("projected_spend", "sum"),
        transactions=("spent", "size"),
    ).reset_index()
    by_cat["saved"] = by_cat["spent"] - by_cat["projected_spend"]
    by_cat["percentage"] = by_cat["category"].map(
        lambda c: cfg.get(c, NO_CHANGE_PERCENT) if _is_adjustable(c) else NO_CHANGE_PERCENT
    )
    total_spent = float(debits["spent"].sum())
    by_cat["pct_of_spend"] = by_cat["spent"].map(lambda s: round(pct_of_total(s, total_spent), 1))
    by_cat = by_cat.sort_values(["saved", "spent"], ascending=False)

    final_balance = float(actual.sum())
    projected_balance = float(adjusted.sum()) + 0.0
    summary = {
        "transactions": len(transactions),
        "final_balance": round(final_balance, 2),
        "projected_balance": round(projected_balance, 2),
        "total_saved": round(projected_balance - final_balance, 2),
        "total_income": round(income, 2),
        "total_spent": round(total_spent, 2),
        "adjusted_debits": int((debits["adjusted"]).sum()),
        "by_category": by_cat.round(2).to_dict("records"),
    }
    logger.debug("projection summary: saved %.2f over %d transactions", summary["total_saved"], len(transactions))
    return sanitize_for_json(summary)
