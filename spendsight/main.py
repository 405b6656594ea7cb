"""
SpendSight — FastAPI app factory with startup data loading.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from spendsight.api.dependencies import set_store
from spendsight.api.router_budget import router as budget_router
from spendsight.api.router_meta import router as meta_router
from spendsight.data.sources import FileSource
from spendsight.data.store import TransactionStore
from spendsight.logging_setup import configure_logging, get_logger

logger = get_logger(__name__)


def _default_store() -> TransactionStore:
    from spendsight.config import DATA_FILE, DATA_POLARITY

    if DATA_FILE is None:
        return TransactionStore()
    print(f"  SPENDSIGHT_DATA_FILE = {DATA_FILE} ({DATA_POLARITY})")
    return TransactionStore(FileSource(DATA_FILE, DATA_POLARITY))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load transactions at startup."""
    store: TransactionStore = app.state.store or _default_store()
    store.load()
    set_store(store)

    if store.row_count() > 0:
        print(f"\nSpendSight ready — {store.row_count():,} transactions, "
              f"{len(store.categories())} categories ({store.date_range()})\n")
    else:
        print("\nSpendSight ready — no stored transactions. POST chartData to /api/budget/minimize.\n")
    yield


def create_app(store: Optional[TransactionStore] = None) -> FastAPI:
    configure_logging()

    app = FastAPI(
        title="SpendSight API",
        description="Balance projection under category spending reductions",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(budget_router)
    return app


app = create_app()
