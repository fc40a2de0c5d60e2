"""
Reranking strategies for merged search results.

Usage:
    # Functional API:
    from ragrank.reranking import rerank_results, apply_mmr

    reranked = rerank_results(query, results, RerankOptions(diversity_weight=0.2))
    diverse = apply_mmr(results, lambda_param=0.7, max_results=5)

    # Strategy selected by configuration:
    from ragrank.reranking import get_reranker

    reranker = get_reranker(settings)
    if reranker:
        results = reranker.rerank(query, results, top_k=5)
"""

from typing import Optional

from ..config import RankingSettings
from .base import BaseReranker
from .heuristic import HeuristicReranker, rerank_results
from .mmr import MMRReranker, apply_mmr
from .factory import RerankingFactory


def get_reranker(settings: Optional[RankingSettings] = None) -> Optional[BaseReranker]:
    """
    Get the configured reranker (factory convenience function).

    Returns None when settings.reranker_type is "none".
    """
    return RerankingFactory.create(settings)


__all__ = [
    'BaseReranker',
    'HeuristicReranker',
    'MMRReranker',
    'RerankingFactory',
    'rerank_results',
    'apply_mmr',
    'get_reranker',
]
