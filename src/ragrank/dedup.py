"""
Near-duplicate removal within a document.

Overlapping chunking often produces neighbouring chunks of the same document
with nearly identical text. Those are collapsed to the best-scoring one.
Chunks of different documents are never collapsed, even with identical
text: the same passage in two sources is corroboration, not noise.

Similarity measure: Jaccard overlap of the chunks' token sets.
"""

import logging
from typing import Dict, List, Optional, Sequence, Set

from .config import RankingSettings, resolve
from .lexical.relevance import jaccard_similarity
from .lexical.tokenizer import tokenize
from .models import ScoredSearchResult
from .semantic import clamp

logger = logging.getLogger(__name__)


def remove_duplicates(
    results: Sequence[ScoredSearchResult],
    similarity_threshold: Optional[float] = None,
    settings: Optional[RankingSettings] = None,
) -> List[ScoredSearchResult]:
    """
    Drop chunks that near-duplicate a higher-scored chunk of the same document.

    Args:
        results: Scored results (any order)
        similarity_threshold: Jaccard threshold in [0, 1], default 0.9
            Values outside the range are clamped
        settings: Engine defaults (None = RankingSettings())

    Returns:
        Deduplicated results sorted by combined_score descending

    Example:
        >>> unique = remove_duplicates(results, 0.9)
    """
    settings = settings or RankingSettings()
    threshold = clamp(resolve(similarity_threshold, settings.dedup_threshold))

    ordered = sorted(results, key=lambda r: r.combined_score, reverse=True)

    kept: List[ScoredSearchResult] = []
    kept_tokens: Dict[str, List[Set[str]]] = {}

    for result in ordered:
        tokens = set(tokenize(result.chunk_content))
        same_document = kept_tokens.setdefault(result.document_id, [])

        if any(jaccard_similarity(tokens, other) >= threshold for other in same_document):
            logger.debug(
                f"Dropping near-duplicate chunk {result.document_id}:{result.chunk_index} "
                f"(score {result.combined_score:.4f})"
            )
            continue

        same_document.append(tokens)
        kept.append(result)

    if len(kept) < len(ordered):
        logger.debug(f"Removed {len(ordered) - len(kept)} near-duplicate chunks")
    return kept
