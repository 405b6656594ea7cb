"""
Budget projection endpoints — minimized running balance and savings summary.

Bodies are read by hand rather than through a pydantic model so that a
missing or empty ``chartData`` answers 400 ``{"error": ...}`` instead of 422.
"""
from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from spendsight.analytics.projection import project, projection_summary, savings_series
from spendsight.api.dependencies import error_response
from spendsight.api.response_models import SummaryResponse
from spendsight.config import MISSING_BODY_ERROR, MISSING_CHART_DATA_ERROR, PROJECTION_FAILED_ERROR
from spendsight.data.normalize import normalize_transactions
from spendsight.data.schemas import SpendSightError
from spendsight.logging_setup import get_logger

router = APIRouter(prefix="/api/budget", tags=["budget"])
logger = get_logger(__name__)


class _BadRequest(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


async def _read_body(request: Request) -> tuple[list[dict[str, Any]], dict[str, Any]]:
    """Return (chartData, chartConfig) or raise _BadRequest."""
    raw = await request.body()
    if not raw:
        raise _BadRequest(MISSING_BODY_ERROR)
    try:
        payload = json.loads(raw)
    except ValueError:
        raise _BadRequest(MISSING_BODY_ERROR)
    if not isinstance(payload, dict):
        raise _BadRequest(MISSING_BODY_ERROR)

    chart_data = payload.get("chartData")
    if not chart_data:
        raise _BadRequest(MISSING_CHART_DATA_ERROR)
    if not isinstance(chart_data, list):
        raise _BadRequest("chartData must be a list")

    chart_config = payload.get("chartConfig") or {}
    if not isinstance(chart_config, dict):
        raise _BadRequest("chartConfig must be an object")
    return chart_data, chart_config


def _derived(txn) -> dict[str, float]:
    out = {"overallTotal": txn.overall_total, "minimizedTotal": txn.minimized_total}
    if txn.total_value is not None:
        out["totalValue"] = txn.total_value
    return out


@router.post("/minimize")
async def minimize(
    request: Request,
    include_savings: bool = Query(False, description="Also return totalValue per row"),
):
    """Running balance with category reductions applied, in the order given."""
    try:
        chart_data, chart_config = await _read_body(request)
        txns = normalize_transactions(chart_data, sort=False)
        projected = project(txns, chart_config)
        if include_savings:
            projected = savings_series(projected)
    except _BadRequest as exc:
        return error_response(400, exc.message)
    except SpendSightError as exc:
        return error_response(400, str(exc))
    except Exception:
        logger.exception("Error generating budget projection")
        return error_response(500, PROJECTION_FAILED_ERROR)

    # Caller's own fields pass through untouched; only totals are added.
    return JSONResponse(content=[{**raw, **_derived(t)} for raw, t in zip(chart_data, projected)])


@router.post("/summary")
async def summary(request: Request):
    """Final balances and per-category savings for the same request body."""
    try:
        chart_data, chart_config = await _read_body(request)
        txns = normalize_transactions(chart_data, sort=False)
        data = projection_summary(txns, chart_config)
    except _BadRequest as exc:
        return error_response(400, exc.message)
    except SpendSightError as exc:
        return error_response(400, str(exc))
    except Exception:
        logger.exception("Error generating budget summary")
        return error_response(500, PROJECTION_FAILED_ERROR)
    return SummaryResponse(**data)
