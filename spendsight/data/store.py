"""
TransactionStore — in-memory, normalized transactions from an injected source.

Loaded once at startup (or on /api/reload), read on every request.
"""
from __future__ import annotations

from typing import Optional

from spendsight.data.normalize import normalize_transactions
from spendsight.data.schemas import Transaction
from spendsight.data.sources import TransactionSource
from spendsight.logging_setup import get_logger

logger = get_logger(__name__)


class TransactionStore:
    """Chronological transactions with the actual running balance attached."""

    def __init__(self, source: Optional[TransactionSource] = None) -> None:
        self.source = source
        self.transactions: list[Transaction] = []
        self._loaded = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> "TransactionStore":
        """Fetch from the source, normalize, attach running totals."""
        if self.source is None:
            logger.info("No transaction source configured — starting with empty dataset")
            self.transactions = []
        else:
            from spendsight.analytics.projection import with_running_total

            records = self.source.fetch()
            normalized = normalize_transactions(records, self.source.polarity)
            self.transactions = with_running_total(normalized)
            logger.info("Loaded %d transactions (%s polarity)", len(self.transactions), self.source.polarity.value)
        self._loaded = True
        return self

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def row_count(self) -> int:
        return len(self.transactions)

    def categories(self) -> list[str]:
        """Distinct category keys, sorted."""
        return sorted({t.category for t in self.transactions if t.category})

    def date_range(self) -> str:
        if not self.transactions:
            return "N/A"
        return f"{self.transactions[0].date} to {self.transactions[-1].date}"
