"""
FastAPI dependencies — TransactionStore singleton, JSON error responses.
"""
from __future__ import annotations

from fastapi import HTTPException
from fastapi.responses import JSONResponse

from spendsight.data.store import TransactionStore

# ---------------------------------------------------------------------------
# Global store singleton (set during startup)
# ---------------------------------------------------------------------------
_store: TransactionStore | None = None


def set_store(store: TransactionStore) -> None:
    global _store
    _store = store


def get_store() -> TransactionStore:
    if _store is None or not _store.is_loaded:
        raise HTTPException(503, "Data not loaded yet")
    return _store


def get_store_or_empty() -> TransactionStore:
    """Return the store even if it has not loaded (for health/reload endpoints)."""
    if _store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _store


# ---------------------------------------------------------------------------
# Error bodies
# ---------------------------------------------------------------------------

def error_response(status_code: int, message: str) -> JSONResponse:
    """``{"error": message}`` with the given status."""
    return JSONResponse(status_code=status_code, content={"error": message})
