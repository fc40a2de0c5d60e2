"""
Hybrid merge of keyword-index and vector-index results.

Both providers return chunks independently. Chunks are identified by
(document_id, chunk_index); a chunk found by both providers is merged into
one entry carrying both scores, a chunk found by one provider gets 0 for
the other side:

    combined_score = keyword_weight × keyword_score + vector_weight × vector_score

Weights are normalized to sum to 1 (default 0.3 / 0.7).
"""

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .config import HybridSearchOptions, RankingSettings, resolve
from .lexical.relevance import keyword_relevance
from .models import ScoredSearchResult, SearchResult
from .weights import normalize_weights

logger = logging.getLogger(__name__)


def _keep_max(current: Optional[float], candidate: float) -> float:
    return candidate if current is None else max(current, candidate)


def merge_results(
    query: str,
    keyword_results: Sequence[SearchResult],
    vector_results: Sequence[SearchResult],
    keyword_weight: float,
    vector_weight: float,
    rescore_keywords: bool = False,
) -> List[ScoredSearchResult]:
    """
    Merge both lists by (document_id, chunk_index) and compute combined scores.

    Weights must already be normalized. Output order is first appearance:
    keyword results in input order, then vector-only results in input order.
    A key repeated inside one list keeps its highest score.

    Args:
        query: Search query (used only when rescore_keywords is set)
        keyword_results: Keyword provider hits; similarity is the keyword score
        vector_results: Vector provider hits; similarity is the vector score
        keyword_weight: Normalized keyword weight
        vector_weight: Normalized vector weight
        rescore_keywords: Replace keyword provider scores with keyword_relevance()

    Returns:
        Unsorted merged results
    """
    merged: Dict[Tuple[str, int], dict] = {}

    for result in keyword_results:
        if rescore_keywords:
            score = keyword_relevance(query, result.chunk_content)
        else:
            score = result.similarity
        entry = merged.setdefault(result.key, {"result": result, "keyword": None, "vector": None})
        entry["keyword"] = _keep_max(entry["keyword"], score)

    for result in vector_results:
        entry = merged.setdefault(result.key, {"result": result, "keyword": None, "vector": None})
        entry["vector"] = _keep_max(entry["vector"], result.similarity)

    scored = []
    for entry in merged.values():
        keyword_score = entry["keyword"] if entry["keyword"] is not None else 0.0
        vector_score = entry["vector"] if entry["vector"] is not None else 0.0
        scored.append(
            ScoredSearchResult.from_result(
                entry["result"],
                keyword_score=keyword_score,
                vector_score=vector_score,
                combined_score=keyword_weight * keyword_score + vector_weight * vector_score,
            )
        )

    return scored


def hybrid_search(
    query: str,
    keyword_results: Sequence[SearchResult],
    vector_results: Sequence[SearchResult],
    options: Optional[HybridSearchOptions] = None,
    settings: Optional[RankingSettings] = None,
) -> List[ScoredSearchResult]:
    """
    Fuse keyword and vector results into one ranked list.

    Steps:
    1. Normalize weights
    2. Merge by (document_id, chunk_index)
    3. Stable sort by combined_score descending (ties keep merge order)
    4. Drop results below min_score
    5. Truncate to limit (when limit > 0)

    Args:
        query: Search query
        keyword_results: Results from the keyword (full-text) provider
        vector_results: Results from the vector (embedding) provider
        options: Per-call weights, min_score, limit (None = settings)
        settings: Engine defaults (None = RankingSettings())

    Returns:
        New list of ScoredSearchResult, empty when both inputs are empty

    Example:
        >>> results = hybrid_search(
        ...     "react hooks",
        ...     keyword_results,
        ...     vector_results,
        ...     HybridSearchOptions(keyword_weight=0.3, vector_weight=0.7),
        ... )
    """
    if not keyword_results and not vector_results:
        return []

    settings = settings or RankingSettings()
    options = options or HybridSearchOptions()

    keyword_weight, vector_weight = normalize_weights(
        resolve(options.keyword_weight, settings.keyword_weight),
        resolve(options.vector_weight, settings.vector_weight),
    )
    min_score = resolve(options.min_score, settings.min_score)

    merged = merge_results(
        query,
        keyword_results,
        vector_results,
        keyword_weight,
        vector_weight,
        rescore_keywords=options.rescore_keywords,
    )
    merged.sort(key=lambda r: r.combined_score, reverse=True)

    filtered = [r for r in merged if r.combined_score >= min_score]

    if options.limit is not None and options.limit > 0:
        filtered = filtered[:options.limit]

    logger.debug(
        f"Hybrid merge: {len(keyword_results)} keyword + {len(vector_results)} vector "
        f"→ {len(merged)} unique → {len(filtered)} returned "
        f"(weights kw={keyword_weight:.2f}, vec={vector_weight:.2f}, min_score={min_score})"
    )
    return filtered
