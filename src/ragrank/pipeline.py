"""
End-to-end selection of context chunks for one query.

Stages:
1. Hybrid merge of keyword and vector results
2. Near-duplicate removal within documents
3. Configured reranker (heuristic, MMR, or none)
4. Optional one chunk per document
5. top_k cut and token budget

The pipeline holds configuration only. Every run() is independent, so one
instance can serve concurrent requests.
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence

from .aggregation import select_top_chunk_per_document
from .config import HybridSearchOptions, RankingSettings
from .context import fit_to_token_budget
from .dedup import remove_duplicates
from .hybrid import hybrid_search
from .models import ScoredSearchResult, SearchResult
from .reranking import RerankingFactory
from .stats import score_stats

logger = logging.getLogger(__name__)


class RetrievalPipeline:
    """Select the chunks to place in the LLM context for a query"""

    def __init__(
        self,
        settings: Optional[RankingSettings] = None,
        hybrid_options: Optional[HybridSearchOptions] = None,
    ):
        self.settings = settings or RankingSettings()
        self.hybrid_options = hybrid_options or HybridSearchOptions()
        self.reranker = RerankingFactory.create(self.settings)

    def run(
        self,
        query: str,
        keyword_results: Sequence[SearchResult],
        vector_results: Sequence[SearchResult],
        top_k: Optional[int] = None,
        max_tokens: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> List[ScoredSearchResult]:
        """
        Run every stage and return the final ordered chunks.

        Args:
            query: Search query
            keyword_results: Keyword provider hits
            vector_results: Vector provider hits
            top_k: Maximum number of chunks (None = no cut)
            max_tokens: Context token budget (None = unlimited)
            now: Reference time for recency scoring

        Returns:
            Ordered chunks; empty means no relevant context was found
        """
        results = hybrid_search(
            query, keyword_results, vector_results, self.hybrid_options, self.settings
        )
        logger.debug(f"[pipeline] merged: {len(results)}")

        results = remove_duplicates(results, settings=self.settings)
        logger.debug(f"[pipeline] after dedup: {len(results)}")

        if self.reranker is not None:
            results = self.reranker.rerank(query, results, now=now)
            logger.debug(f"[pipeline] after {self.reranker.get_model_info()['name']} rerank: {len(results)}")

        if self.settings.top_chunk_per_document:
            results = select_top_chunk_per_document(results)
            logger.debug(f"[pipeline] one chunk per document: {len(results)}")

        if top_k is not None and top_k > 0:
            results = results[:top_k]

        if max_tokens is not None:
            results = fit_to_token_budget(results, max_tokens)

        stats = score_stats(results)
        logger.info(
            f"Selected {len(results)} chunks for query '{query}' "
            f"(scores min={stats.min:.3f}, max={stats.max:.3f}, mean={stats.mean:.3f})"
        )
        return results
