from __future__ import annotations

import pytest

from spendsight.analytics.projection import (
    adjustable_categories,
    coerce_config,
    default_config,
    project,
    projection_summary,
    savings_series,
    with_running_total,
)
from spendsight.data.normalize import normalize_transactions
from spendsight.data.schemas import InvalidConfig

from conftest import make_txn


def _minimized(rows):
    return [t.minimized_total for t in rows]


def _overall(rows):
    return [t.overall_total for t in rows]


def test_empty_input_returns_empty_list():
    assert project([], {"Dining": 50}) == []
    assert with_running_total([]) == []


@pytest.mark.parametrize("config", [None, {}, {"Dining": 100}, {"Groceries": 40}, {"Dining": 100, "Shopping": 100}])
def test_no_op_config_matches_actual_balance(month_of_spending, config):
    rows = project(month_of_spending, config)
    assert _minimized(rows) == _overall(rows)


def test_credit_then_debit_running_totals():
    txns = [make_txn(0, 100, True), make_txn(1, 50, False)]
    rows = project(txns, {})
    assert _minimized(rows) == [100, 50]
    assert _overall(rows) == [100, 50]


def test_category_reduction_halves_debit():
    rows = project([make_txn(0, 200, False, "Dining")], {"Dining": 50})
    assert rows[0].minimized_total == -100
    assert rows[0].overall_total == -200


def test_end_to_end_food_fully_suppressed():
    raw = [
        {"date": "2025-01-01", "amount": 50, "isCredit": False, "category": "Food"},
        {"date": "2025-01-02", "amount": 1000, "isCredit": True, "category": "Income"},
    ]
    rows = project(normalize_transactions(raw), {"Food": 0})
    assert _minimized(rows) == [0, 1000]
    assert _overall(rows) == [-50, 950]


def test_credits_are_never_reduced():
    rows = project([make_txn(0, 500, True, "Income")], {"Income": 10})
    assert rows[0].minimized_total == 500


def test_percentage_above_100_leaves_debit_unchanged():
    rows = project([make_txn(0, 80, False, "Dining")], {"Dining": 150})
    assert rows[0].minimized_total == -80


def test_missing_category_is_never_adjusted():
    rows = project([make_txn(0, 30, False, None)], {"UNKNOWN": 0, "None": 0})
    assert rows[0].minimized_total == -30


def test_normalized_missing_category_ignores_unknown_key():
    txns = normalize_transactions([{"date": "2025-01-01", "amount": 30, "isCredit": False}])
    assert txns[0].category == "UNKNOWN"
    rows = project(txns, {"UNKNOWN": 0})
    assert _minimized(rows) == [-30]
    assert projection_summary(txns, {"UNKNOWN": 0})["total_saved"] == 0


def test_fully_suppressed_debit_is_positive_zero():
    rows = project([make_txn(0, 30, False, "Dining")], {"Dining": 0})
    assert rows[0].minimized_total == 0
    assert str(rows[0].minimized_total) == "0.0"


def test_order_is_preserved_not_resorted():
    txns = [make_txn(0, 10, False, day=5), make_txn(1, 100, True, day=1)]
    rows = project(txns, {})
    assert [t.id for t in rows] == ["t0", "t1"]
    assert _overall(rows) == [-10, 90]


def test_existing_overall_total_is_kept():
    txn = make_txn(0, 10, False).with_totals(overall_total=990.0)
    rows = project([txn], {})
    assert rows[0].overall_total == 990.0
    assert rows[0].minimized_total == -10


def test_inputs_are_not_mutated(month_of_spending):
    before = list(month_of_spending)
    project(month_of_spending, {"Dining": 0})
    assert month_of_spending == before
    assert all(t.minimized_total is None for t in month_of_spending)


def test_mixed_plan(month_of_spending):
    rows = project(month_of_spending, {"Dining": 50, "Shopping": 0})
    # Dining 42.5 + 18 halved (30.25 saved), Shopping 60 + 89.99 dropped
    saved = rows[-1].minimized_total - rows[-1].overall_total
    assert saved == pytest.approx(30.25 + 149.99)


def test_savings_series_is_gap_between_balances(month_of_spending):
    rows = savings_series(project(month_of_spending, {"Rent": 90}))
    assert [t.total_value for t in rows] == pytest.approx(
        [t.minimized_total - t.overall_total for t in rows]
    )
    assert rows[0].total_value == 0
    assert rows[-1].total_value == pytest.approx(120.0)


def test_coerce_config_accepts_numeric_strings():
    assert coerce_config({"Dining": "75"}) == {"Dining": 75.0}


@pytest.mark.parametrize("value", ["lots", None, float("nan")])
def test_coerce_config_rejects_non_numbers(value):
    with pytest.raises(InvalidConfig):
        coerce_config({"Dining": value})


def test_summary_breakdown(month_of_spending):
    s = projection_summary(month_of_spending, {"Dining": 50, "Shopping": 0})
    assert s["transactions"] == 8
    assert s["total_income"] == 2525.0
    assert s["total_spent"] == pytest.approx(1425.49)
    assert s["total_saved"] == pytest.approx(180.24)
    assert s["adjusted_debits"] == 4

    by_cat = {c["category"]: c for c in s["by_category"]}
    assert by_cat["Shopping"]["saved"] == pytest.approx(149.99)
    assert by_cat["Dining"]["projected_spend"] == pytest.approx(30.25)
    assert by_cat["Rent"]["percentage"] == 100
    assert s["by_category"][0]["category"] == "Shopping"


def test_summary_of_nothing():
    s = projection_summary([], {"Dining": 50})
    assert s["by_category"] == []
    assert s["total_saved"] == 0.0


def test_summary_reports_unknown_as_unchanged(month_of_spending):
    s = projection_summary(month_of_spending, {"UNKNOWN": 0})
    by_cat = {c["category"]: c for c in s["by_category"]}
    assert by_cat["UNKNOWN"]["percentage"] == 100
    assert by_cat["UNKNOWN"]["saved"] == 0


def test_adjustable_categories_skip_credit_only_and_unknown(month_of_spending):
    # Income and Refund only ever appear as credits
    assert adjustable_categories(month_of_spending) == ["Dining", "Rent", "Shopping"]


def test_default_config_is_a_no_change_plan(month_of_spending):
    plan = default_config(month_of_spending)
    assert plan == {"Dining": 100.0, "Rent": 100.0, "Shopping": 100.0}
    assert _minimized(project(month_of_spending, plan)) == _overall(project(month_of_spending))


def test_category_with_a_debit_is_adjustable_even_with_credits():
    txns = [make_txn(0, 20, True, "Dining"), make_txn(1, 5, False, "Dining")]
    assert adjustable_categories(txns) == ["Dining"]
