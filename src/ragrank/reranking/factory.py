"""
Factory to create reranker instances based on configuration.
"""

import logging
from typing import Optional

from ..config import RERANKER_TYPES, RankingSettings
from .base import BaseReranker
from .heuristic import HeuristicReranker
from .mmr import MMRReranker

logger = logging.getLogger(__name__)


class RerankingFactory:
    """Factory to create reranker instances based on configuration."""

    @classmethod
    def create(cls, settings: Optional[RankingSettings] = None) -> Optional[BaseReranker]:
        """
        Create the reranker selected by settings.reranker_type.

        Supported types:
            - heuristic: diversity/recency/position score adjustment (default)
            - mmr: Maximal Marginal Relevance diversity selection
            - none: no reranking

        Args:
            settings: Engine configuration (None = RankingSettings())

        Returns:
            Reranker instance, or None if reranking is disabled

        Raises:
            ValueError: Unknown reranker type
        """
        settings = settings or RankingSettings()
        reranker_type = settings.reranker_type.lower()

        if reranker_type == "none":
            logger.debug("Reranking disabled (reranker_type=none)")
            return None

        if reranker_type == "heuristic":
            logger.debug("Creating heuristic reranker")
            return HeuristicReranker(settings=settings)

        if reranker_type == "mmr":
            logger.debug(f"Creating MMR reranker (λ={settings.mmr_lambda})")
            return MMRReranker(settings=settings)

        raise ValueError(
            f"Unknown reranker type: {reranker_type}. "
            f"Valid options: {', '.join(RERANKER_TYPES)}"
        )
