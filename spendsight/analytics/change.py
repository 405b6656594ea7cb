"""
Change detection — cheap checks that gate projection and window recomputation.

``changed`` samples a handful of positions instead of comparing every
element, so edits confined to unsampled middle elements go unnoticed.
Cost per call is O(1) in the series length.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Generic, Optional, Sequence, TypeVar

from spendsight.config import CHANGE_SAMPLE_QUANTILES, CHANGE_SAMPLE_THRESHOLD
from spendsight.data.schemas import ProjectionConfig, Transaction

T = TypeVar("T")


def sample_indices(n: int, threshold: int = CHANGE_SAMPLE_THRESHOLD) -> list[int]:
    """Positions compared by ``changed`` for a series of length n."""
    if n == 0:
        return []
    idx = [0, n - 1]
    if n > threshold:
        idx.extend(math.floor(n * q) for q in CHANGE_SAMPLE_QUANTILES)
    return sorted(set(idx))


def changed(
    prev: Optional[Sequence[Any]],
    new: Optional[Sequence[Any]],
    *,
    threshold: int = CHANGE_SAMPLE_THRESHOLD,
) -> bool:
    """True if ``new`` differs from ``prev`` at length or at a sampled position."""
    if prev is None or new is None:
        return True
    if len(prev) != len(new):
        return True
    return any(prev[i] != new[i] for i in sample_indices(len(new), threshold))


# ---------------------------------------------------------------------------
# Recompute gates
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CalcInputs:
    """Key parameters of the last window computation."""
    series_length: int
    zoom_level: float
    zoom_center: float


class RecomputeGate:
    """Remembers the last accepted inputs; lets a caller skip identical work."""

    def __init__(self) -> None:
        self.last: Optional[CalcInputs] = None

    def should_recompute(self, inputs: CalcInputs) -> bool:
        if inputs == self.last:
            return False
        self.last = inputs
        return True

    def invalidate(self) -> None:
        """Force the next ``should_recompute`` to return True (e.g. after a resize)."""
        self.last = None


class ProjectionMemo(Generic[T]):
    """Caches one projection result keyed on sampled data identity and config."""

    def __init__(self, compute) -> None:
        self._compute = compute
        self._transactions: Optional[list[Transaction]] = None
        self._config: Optional[dict] = None
        self._result: Optional[T] = None
        self.computations = 0

    def __call__(self, transactions: Sequence[Transaction], config: ProjectionConfig | None = None) -> T:
        cfg = dict(config or {})
        if self._result is None or changed(self._transactions, transactions) or cfg != self._config:
            self._result = self._compute(transactions, cfg)
            self._transactions = list(transactions)
            self._config = cfg
            self.computations += 1
        return self._result

    def clear(self) -> None:
        self._transactions = None
        self._config = None
        self._result = None
