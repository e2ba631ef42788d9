"""
Scoring helpers for ranking candidate models against observed data.

These sit outside the search engine: the engine only builds models, the
caller decides how to score them.
"""

from __future__ import annotations

from typing import Any, Iterable

import numpy as np


def sample_model(model: Any, xs: Iterable[float]) -> np.ndarray:
    """Evaluate `model` at every x. Unmatched inputs come back as NaN."""
    return np.asarray([model.evaluate(float(x)) for x in xs], dtype=np.float64)


def _pair(a: Iterable[float], b: Iterable[float]) -> tuple[np.ndarray, np.ndarray]:
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    if a.shape != b.shape or a.size == 0:
        raise ValueError("Arrays must have same non-zero size")
    return a, b


def pearson_correlation(a: Iterable[float], b: Iterable[float]) -> float:
    """
    Pearson correlation of two equally sized samples.

    Raises ValueError on size mismatch or when either side has zero variance.
    NaNs propagate (a model with holes scores NaN and never wins).
    """
    a, b = _pair(a, b)
    da = a - a.mean()
    db = b - b.mean()
    denominator = float(np.sqrt(np.sum(da * da) * np.sum(db * db)))
    if denominator == 0.0:
        raise ValueError("Zero variance in data")
    return float(np.sum(da * db) / denominator)


def mean_squared_error(a: Iterable[float], b: Iterable[float]) -> float:
    a, b = _pair(a, b)
    return float(np.mean((a - b) ** 2))
