"""
Rank aggregation: TF-IDF + BM25 + semantic similarity.

An alternative to the hybrid merger for a single candidate list. Every
result gets three signals and their weighted sum:

    combined = wt × tfidf + wb × bm25 + ws × semantic

with (wt, wb, ws) normalized to sum to 1. IDF and BM25 statistics come from
the caller's corpus, or from the chunk texts of the results themselves.
"""

import logging
from collections import Counter
from typing import List, Optional, Sequence

from .config import RankingOptions, RankingSettings, resolve
from .lexical.corpus import CorpusStatistics
from .lexical.scorer import BM25Scorer, tfidf
from .lexical.tokenizer import tokenize
from .models import RankedSearchResult, RankingScore, SearchResult
from .semantic import semantic_score
from .weights import normalize_weight_triple

logger = logging.getLogger(__name__)


def rank_results(
    query: str,
    results: Sequence[SearchResult],
    options: Optional[RankingOptions] = None,
    settings: Optional[RankingSettings] = None,
) -> List[RankedSearchResult]:
    """
    Score results with TF-IDF, BM25 and semantic similarity.

    Args:
        query: Search query
        results: Candidate chunks
        options: Per-call weights, average length and corpus (None = settings)
        settings: Engine defaults (None = RankingSettings())

    Returns:
        New RankedSearchResult list, sorted by ranking.combined descending
        (ties keep input order)

    Example:
        >>> ranked = rank_results("react hooks", results, RankingOptions(
        ...     tfidf_weight=0.2, bm25_weight=0.3, semantic_weight=0.5,
        ... ))
    """
    if not results:
        return []

    settings = settings or RankingSettings()
    options = options or RankingOptions()

    tfidf_weight, bm25_weight, semantic_weight = normalize_weight_triple(
        resolve(options.tfidf_weight, settings.tfidf_weight),
        resolve(options.bm25_weight, settings.bm25_weight),
        resolve(options.semantic_weight, settings.semantic_weight),
    )

    stem = settings.use_stemming
    corpus = options.corpus if options.corpus is not None else [r.chunk_content for r in results]
    stats = CorpusStatistics.from_texts(corpus, stem=stem)

    scorer = BM25Scorer(
        k1=settings.bm25_k1,
        b=settings.bm25_b,
        avg_doc_length=options.avg_doc_length,
        fallback_avg_length=settings.avg_doc_length,
    )
    query_terms = tokenize(query, stem=stem)

    ranked = []
    for result in results:
        doc_tokens = tokenize(result.chunk_content, stem=stem)
        tfidf_score = tfidf(query, result.chunk_content, stats, stem=stem)
        bm25_score = scorer.score(query_terms, Counter(doc_tokens), len(doc_tokens), stats)
        semantic = semantic_score(result)

        combined = (
            tfidf_weight * tfidf_score
            + bm25_weight * bm25_score
            + semantic_weight * semantic
        )
        ranking = RankingScore(
            tfidf=tfidf_score,
            bm25=bm25_score,
            semantic=semantic,
            combined=combined,
        )
        ranked.append(RankedSearchResult.from_result(result, ranking))

    ranked.sort(key=lambda r: r.ranking.combined, reverse=True)

    logger.debug(
        f"Ranked {len(ranked)} results for query '{query}' "
        f"(weights tfidf={tfidf_weight:.2f}, bm25={bm25_weight:.2f}, semantic={semantic_weight:.2f})"
    )
    return ranked
