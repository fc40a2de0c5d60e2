"""
Maximal Marginal Relevance (MMR) for diversity selection.

Greedily selects results balancing relevance against redundancy with what
has already been selected:

    MMR = λ × relevance - (1 - λ) × max_similarity_to_selected

Relevance is the result's `relevance` (combined_score for merged results,
ranking.combined for ranked results). Similarity is the Jaccard overlap of
chunk token sets, so two chunks of the same document only count as
redundant when their text overlaps.
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence, Set, TypeVar, Union

from ..config import RankingSettings, resolve
from ..lexical.relevance import jaccard_similarity
from ..lexical.tokenizer import tokenize
from ..models import RankedSearchResult, ScoredSearchResult
from ..semantic import clamp
from .base import BaseReranker

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", ScoredSearchResult, RankedSearchResult)


def apply_mmr(
    results: Sequence[ResultT],
    lambda_param: Optional[float] = None,
    max_results: Optional[int] = None,
    settings: Optional[RankingSettings] = None,
) -> List[ResultT]:
    """
    Select up to max_results diverse results using MMR.

    Args:
        results: Candidates (any order)
        lambda_param: Relevance vs diversity trade-off in [0, 1]
            1 = pure relevance, 0 = pure diversity; default 0.7
        max_results: Number of results to select; default 10
        settings: Engine defaults (None = RankingSettings())

    Returns:
        Selected results in selection order. The first pick is always the
        most relevant candidate; ties are broken by input order.

    Example:
        >>> diverse = apply_mmr(ranked, lambda_param=0.7, max_results=5)
    """
    settings = settings or RankingSettings()
    lambda_param = clamp(resolve(lambda_param, settings.mmr_lambda))
    max_results = resolve(max_results, settings.mmr_max_results)

    if not results or max_results <= 0:
        return []

    token_sets: List[Set[str]] = [set(tokenize(r.chunk_content)) for r in results]
    remaining = list(range(len(results)))

    # First pick: highest relevance, earliest on ties
    first = max(remaining, key=lambda i: (results[i].relevance, -i))
    selected = [first]
    remaining.remove(first)

    # Running max similarity of each candidate to the selected set
    max_similarity = {i: jaccard_similarity(token_sets[i], token_sets[first]) for i in remaining}

    while len(selected) < max_results and remaining:
        best_index = remaining[0]
        best_score = float("-inf")

        for i in remaining:
            mmr_score = lambda_param * results[i].relevance - (1 - lambda_param) * max_similarity[i]
            if mmr_score > best_score:
                best_score = mmr_score
                best_index = i

        selected.append(best_index)
        remaining.remove(best_index)

        for i in remaining:
            similarity = jaccard_similarity(token_sets[i], token_sets[best_index])
            if similarity > max_similarity[i]:
                max_similarity[i] = similarity

    logger.debug(
        f"MMR selected {len(selected)} of {len(results)} results (λ={lambda_param}, k={max_results})"
    )
    return [results[i] for i in selected]


class MMRReranker(BaseReranker):
    """Reranker selecting a diverse subset with apply_mmr"""

    def __init__(
        self,
        settings: Optional[RankingSettings] = None,
        lambda_param: Optional[float] = None,
    ):
        self.settings = settings or RankingSettings()
        self.lambda_param = resolve(lambda_param, self.settings.mmr_lambda)

    def rerank(
        self,
        query: str,
        results: Sequence[Union[ScoredSearchResult, RankedSearchResult]],
        top_k: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> List[ScoredSearchResult]:
        max_results = resolve(top_k, self.settings.mmr_max_results)
        return apply_mmr(results, self.lambda_param, max_results, self.settings)

    def get_model_info(self) -> dict:
        return {
            "name": "mmr",
            "type": "diversity_selection",
            "parameters": {
                "lambda": self.lambda_param,
                "max_results": self.settings.mmr_max_results,
                "similarity": "jaccard_tokens",
            },
        }
