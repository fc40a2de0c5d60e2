"""Semantic score taken from the vector provider's similarity"""

from .models import SearchResult


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def semantic_score(result: SearchResult) -> float:
    """
    Clamp the provider similarity into [0, 1].

    No rescaling is applied: upstream metrics are not guaranteed to be
    cosine-bounded, values outside the range are simply cut off.
    """
    return clamp(result.similarity)
