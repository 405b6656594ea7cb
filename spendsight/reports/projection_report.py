"""
Projection Report — actual vs projected balance, savings by category.
"""
from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd

from spendsight.analytics.common import sanitize_for_json
from spendsight.analytics.projection import project, projection_summary, savings_series
from spendsight.data.schemas import ProjectionConfig, Transaction
from spendsight.excel.writer import ExcelWriter


CATEGORY_COLS = [
    ("category", "text", "Category"),
    ("percentage", "percent", "Kept %"),
    ("transactions", "number", "Debits"),
    ("spent", "currency", "Spent"),
    ("projected_spend", "currency", "Projected Spend"),
    ("saved", "currency", "Saved"),
    ("pct_of_spend", "percent", "% of Spend"),
]

TRANSACTION_COLS = [
    ("date", "date", "Date"),
    ("name", "text", "Description"),
    ("category", "text", "Category"),
    ("signed_amount", "currency", "Amount"),
    ("overall_total", "currency", "Actual Balance"),
    ("minimized_total", "currency", "Projected Balance"),
    ("total_value", "currency", "Saved So Far"),
]


def generate_json(transactions: Sequence[Transaction], config: ProjectionConfig | None = None) -> dict:
    rows = savings_series(project(transactions, config))
    date_range = f"{rows[0].date} to {rows[-1].date}" if rows else "N/A"
    return sanitize_for_json({
        "date_range": date_range,
        "config": dict(config or {}),
        "summary": projection_summary(transactions, config),
        "transactions": [
            {
                "date": t.date,
                "name": t.name,
                "category": t.category,
                "is_credit": t.is_credit,
                "signed_amount": t.signed_amount,
                "overall_total": t.overall_total,
                "minimized_total": t.minimized_total,
                "total_value": t.total_value,
            }
            for t in rows
        ],
    })


def generate_excel(
    transactions: Sequence[Transaction],
    output_path: str | Path,
    config: ProjectionConfig | None = None,
) -> Path:
    data = generate_json(transactions, config)
    s = data["summary"]
    ew = ExcelWriter()

    ws = ew.add_sheet("Summary")
    ew.write_title(ws, "SPENDSIGHT",
                   f"Balance Projection  |  {data['date_range']}  |  Generated {pd.Timestamp.now():%B %d, %Y}")

    row = ew.write_section(ws, 5, "BALANCE")
    row = ew.write_kpis(ws, row, [
        (s["final_balance"], "ACTUAL BALANCE", "currency"),
        (s["projected_balance"], "PROJECTED BALANCE", "currency"),
        (s["total_income"], "INCOME", "currency"),
        (s["total_spent"], "SPENT", "currency"),
    ])
    row = ew.write_section(ws, row, "SAVINGS")
    ew.write_kpis(ws, row, [(s["total_saved"], "SAVED UNDER PLAN", "signed")])

    ws_c = ew.add_sheet("By Category")
    ew.write_table(ws_c, 1, CATEGORY_COLS, s["by_category"], total_label="TOTAL")

    ws_t = ew.add_sheet("Transactions")
    ew.write_table(
        ws_t, 1, TRANSACTION_COLS, data["transactions"],
        highlight_fn=lambda r: "credit" if r["is_credit"] else None,
    )

    return ew.save(output_path)
