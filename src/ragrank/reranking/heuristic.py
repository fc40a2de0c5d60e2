"""
Heuristic reranking: diversity penalty, recency bonus, position bonus.

adjusted = combined_score
           - diversity_weight × min(step × same_doc_before, cap)
           + recency_weight   × tier_bonus(age of metadata.date)
           + position_weight  × max_bonus × (1 - index / top)     (top 10% only)

The adjusted score is clamped to [0, 1] and replaces combined_score;
keyword_score and vector_score are carried over untouched. Every weight
defaults to 0, in which case the scores are unchanged and only the sort
is applied.
"""

import logging
import math
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from ..config import RankingSettings, RerankOptions, resolve
from ..models import ScoredSearchResult
from ..semantic import clamp
from .base import BaseReranker

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 60 * 60 * 24


def calculate_diversity_penalty(
    results: Sequence[ScoredSearchResult],
    index: int,
    settings: RankingSettings,
) -> float:
    """Penalty for chunks whose document already appeared earlier in the list"""
    document_id = results[index].document_id
    count = sum(1 for earlier in results[:index] if earlier.document_id == document_id)
    return min(count * settings.diversity_penalty_step, settings.diversity_penalty_cap)


def calculate_recency_bonus(
    result: ScoredSearchResult,
    now: datetime,
    settings: RankingSettings,
) -> float:
    """Tiered bonus from metadata.date; 0 when the chunk carries no date"""
    published = result.metadata.date
    if published is None:
        return 0.0

    age_days = (now - published).total_seconds() / SECONDS_PER_DAY
    for tier in settings.recency_tiers:
        if age_days <= tier.max_age_days:
            return tier.bonus
    return 0.0


def calculate_position_bonus(index: int, total: int, settings: RankingSettings) -> float:
    """Bonus for the top fraction of the incoming order, linearly decreasing"""
    top = math.ceil(total * settings.position_bonus_fraction)
    if index < top:
        return settings.position_bonus_max * (1 - index / top)
    return 0.0


def rerank_results(
    query: str,
    results: Sequence[ScoredSearchResult],
    options: Optional[RerankOptions] = None,
    settings: Optional[RankingSettings] = None,
    now: Optional[datetime] = None,
) -> List[ScoredSearchResult]:
    """
    Apply diversity, recency and position adjustments, then re-sort.

    Args:
        query: Search query (kept for interface parity with other rerankers)
        results: Scored results in their current order; the diversity
            penalty counts earlier entries of this order
        options: Per-call weights (None = settings)
        settings: Engine defaults (None = RankingSettings())
        now: Reference time for recency (default: current UTC time);
            naive values are treated as UTC

    Returns:
        New list sorted by adjusted combined_score descending

    Example:
        >>> reranked = rerank_results("react hooks", results, RerankOptions(
        ...     diversity_weight=0.2, recency_weight=0.1,
        ... ))
    """
    settings = settings or RankingSettings()
    options = options or RerankOptions()

    diversity_weight = resolve(options.diversity_weight, settings.diversity_weight)
    recency_weight = resolve(options.recency_weight, settings.recency_weight)
    position_weight = resolve(options.position_weight, settings.position_weight)

    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    reranked = []
    for index, result in enumerate(results):
        adjusted = result.combined_score

        if diversity_weight > 0:
            adjusted -= calculate_diversity_penalty(results, index, settings) * diversity_weight

        if recency_weight > 0:
            adjusted += calculate_recency_bonus(result, now, settings) * recency_weight

        if position_weight > 0:
            adjusted += calculate_position_bonus(index, len(results), settings) * position_weight

        if adjusted != result.combined_score:
            result = result.model_copy(update={"combined_score": clamp(adjusted)})
        reranked.append(result)

    reranked.sort(key=lambda r: r.combined_score, reverse=True)

    logger.debug(
        f"Reranked {len(reranked)} results for query '{query}' "
        f"(diversity={diversity_weight}, recency={recency_weight}, position={position_weight})"
    )
    return reranked


class HeuristicReranker(BaseReranker):
    """Reranker wrapping rerank_results with fixed weights"""

    def __init__(self, settings: Optional[RankingSettings] = None, options: Optional[RerankOptions] = None):
        self.settings = settings or RankingSettings()
        self.options = options or RerankOptions()

    def rerank(
        self,
        query: str,
        results: Sequence[ScoredSearchResult],
        top_k: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> List[ScoredSearchResult]:
        reranked = rerank_results(query, results, self.options, self.settings, now=now)
        if top_k is not None and top_k > 0:
            reranked = reranked[:top_k]
        return reranked

    def get_model_info(self) -> dict:
        return {
            "name": "heuristic",
            "type": "score_adjustment",
            "parameters": {
                "diversity_weight": resolve(self.options.diversity_weight, self.settings.diversity_weight),
                "recency_weight": resolve(self.options.recency_weight, self.settings.recency_weight),
                "position_weight": resolve(self.options.position_weight, self.settings.position_weight),
            },
        }
