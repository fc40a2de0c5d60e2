"""
Weight normalization for score fusion.

Raw weights become a convex combination (components sum to 1.0).
Negative weights are treated as 0; an all-zero input falls back to the
documented default split instead of dividing by zero.
"""

from typing import Tuple

from .config import (
    DEFAULT_BM25_WEIGHT,
    DEFAULT_KEYWORD_WEIGHT,
    DEFAULT_SEMANTIC_WEIGHT,
    DEFAULT_TFIDF_WEIGHT,
    DEFAULT_VECTOR_WEIGHT,
)


def normalize_weights(keyword_weight: float, vector_weight: float) -> Tuple[float, float]:
    """
    Normalize a keyword/vector weight pair so it sums to 1.0.

    Example:
        >>> normalize_weights(2, 3)
        (0.4, 0.6)
        >>> normalize_weights(0, 0)
        (0.3, 0.7)
    """
    keyword_weight = max(0.0, float(keyword_weight))
    vector_weight = max(0.0, float(vector_weight))
    total = keyword_weight + vector_weight

    if total == 0:
        return DEFAULT_KEYWORD_WEIGHT, DEFAULT_VECTOR_WEIGHT

    return keyword_weight / total, vector_weight / total


def normalize_weight_triple(
    tfidf_weight: float,
    bm25_weight: float,
    semantic_weight: float,
) -> Tuple[float, float, float]:
    """Normalize TF-IDF/BM25/semantic weights; all-zero gives (0.2, 0.3, 0.5)"""
    tfidf_weight = max(0.0, float(tfidf_weight))
    bm25_weight = max(0.0, float(bm25_weight))
    semantic_weight = max(0.0, float(semantic_weight))
    total = tfidf_weight + bm25_weight + semantic_weight

    if total == 0:
        return DEFAULT_TFIDF_WEIGHT, DEFAULT_BM25_WEIGHT, DEFAULT_SEMANTIC_WEIGHT

    return tfidf_weight / total, bm25_weight / total, semantic_weight / total
