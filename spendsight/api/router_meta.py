"""
Meta endpoints: health, transactions, categories, reload.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from spendsight.analytics.projection import adjustable_categories, default_config
from spendsight.api.dependencies import error_response, get_store, get_store_or_empty
from spendsight.api.response_models import CategoriesResponse, HealthResponse, ReloadResponse
from spendsight.data.store import TransactionStore
from spendsight.logging_setup import get_logger

router = APIRouter(prefix="/api", tags=["meta"])
logger = get_logger(__name__)


@router.get("/health", response_model=HealthResponse)
def health(store: TransactionStore = Depends(get_store_or_empty)):
    return HealthResponse(
        status="ok" if store.is_loaded else "loading",
        transactions=store.row_count(),
        categories=len(store.categories()),
        date_range=store.date_range(),
    )


@router.get("/transactions")
def list_transactions(store: TransactionStore = Depends(get_store)):
    """Chronological transactions with the actual running balance."""
    return JSONResponse(content=[t.to_dict() for t in store.transactions])


@router.get("/categories", response_model=CategoriesResponse)
def list_categories(store: TransactionStore = Depends(get_store)):
    """All categories, the ones with debits to adjust, and the no-change plan over those."""
    return CategoriesResponse(
        categories=store.categories(),
        adjustable=adjustable_categories(store.transactions),
        default_config=default_config(store.transactions),
    )


@router.post("/reload", response_model=ReloadResponse)
def reload_data(store: TransactionStore = Depends(get_store_or_empty)):
    """Re-read the configured source."""
    try:
        store.load()
    except (OSError, ValueError) as exc:
        logger.error("Reload failed: %s", exc)
        return error_response(500, f"Reload failed: {exc}")
    logger.info("Reload complete — %d transactions", store.row_count())
    return ReloadResponse(status="reloaded", transactions=store.row_count())
