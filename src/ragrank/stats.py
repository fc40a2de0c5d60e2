"""
Score normalization and distribution diagnostics.
"""

from typing import List, Sequence, TypeVar

import numpy as np

from .models import RankedSearchResult, ScoredSearchResult, ScoreStats

ResultT = TypeVar("ResultT", ScoredSearchResult, RankedSearchResult)


def normalize_score(score: float, min_score: float, max_score: float) -> float:
    """
    Linearly scale score from [min_score, max_score] to [0, 1].

    Out-of-range scores are clamped; a degenerate range returns 0.

    Example:
        >>> normalize_score(5, 0, 10)
        0.5
        >>> normalize_score(3, 3, 3)
        0.0
    """
    if max_score == min_score:
        return 0.0
    return max(0.0, min(1.0, (score - min_score) / (max_score - min_score)))


def normalize_scores(results: Sequence[ScoredSearchResult]) -> List[ScoredSearchResult]:
    """
    Min-max rescale combined_score across the list to [0, 1].

    Useful before applying absolute thresholds to scores from different
    queries. Order and the keyword/vector scores are unchanged.
    """
    if not results:
        return []

    scores = [r.combined_score for r in results]
    low, high = min(scores), max(scores)
    return [
        r.model_copy(update={"combined_score": normalize_score(r.combined_score, low, high)})
        for r in results
    ]


def score_stats(results: Sequence[ResultT]) -> ScoreStats:
    """
    Min, max, mean, median and population standard deviation of relevance.

    Returns all zeros for an empty list; std_dev is 0 for a single result.
    """
    if not results:
        return ScoreStats()

    scores = np.array([r.relevance for r in results], dtype=float)
    return ScoreStats(
        min=float(scores.min()),
        max=float(scores.max()),
        mean=float(scores.mean()),
        median=float(np.median(scores)),
        std_dev=float(scores.std()),
    )
