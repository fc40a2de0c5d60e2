"""
Abstract base class for reranking strategies.

All rerankers take the hybrid merger's output and return a reordered copy,
so the retrieval pipeline can swap strategies through configuration.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence

from ..models import ScoredSearchResult


class BaseReranker(ABC):
    """
    Abstract base class for reranking implementations.

    Implementations must be pure: no mutation of the input, no I/O, and the
    same input always yields the same output.
    """

    @abstractmethod
    def rerank(
        self,
        query: str,
        results: Sequence[ScoredSearchResult],
        top_k: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> List[ScoredSearchResult]:
        """
        Reorder results for the query.

        Args:
            query: Search query text
            results: Merged results (combined_score set)
            top_k: Maximum number of results to return (None = strategy default)
            now: Reference time for time-aware strategies (None = current time)

        Returns:
            New list, best first
        """
        pass

    @abstractmethod
    def get_model_info(self) -> dict:
        """
        Describe the strategy and its parameters.

        Returns:
            Dict with keys: name, type, parameters
        """
        pass
