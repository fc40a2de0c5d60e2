"""
Hybrid retrieval ranking engine for RAG context selection.

Given a query and two candidate lists (keyword index hits and vector index
hits), merges, scores, deduplicates, diversifies and selects the chunks that
go into the LLM context window.

Components:
- lexical: TF, IDF, TF-IDF, BM25, position and proximity scoring
- semantic: clamped vector similarity
- weights: convex weight normalization
- ranking: TF-IDF + BM25 + semantic rank aggregation
- hybrid: keyword/vector merge by (document_id, chunk_index)
- dedup: near-duplicate removal within a document
- reranking: diversity/recency reranker, MMR, strategy factory
- aggregation: per-document grouping and best-chunk selection
- query: synonym expansion and highlighting
- stats: score normalization and distribution statistics
- context: token budget helpers
- pipeline: all stages wired together

Every function is pure and synchronous; nothing is cached between calls.
"""

from .config import HybridSearchOptions, RankingOptions, RankingSettings, RerankOptions
from .models import (
    ChunkMetadata,
    RankedSearchResult,
    RankingScore,
    ScoredSearchResult,
    ScoreStats,
    SearchResult,
    SourceType,
)
from .weights import normalize_weight_triple, normalize_weights
from .lexical import bm25, idf, position_score, proximity_score, tf, tfidf, tokenize
from .semantic import semantic_score
from .ranking import rank_results
from .hybrid import hybrid_search
from .dedup import remove_duplicates
from .reranking import apply_mmr, get_reranker, rerank_results
from .aggregation import group_by_document, select_top_chunk_per_document
from .query import expand_query, highlight_query
from .stats import normalize_score, normalize_scores, score_stats
from .context import estimate_token_count, fit_to_token_budget, limit_tokens
from .pipeline import RetrievalPipeline

__version__ = "0.1.0"

__all__ = [
    "HybridSearchOptions",
    "RankingOptions",
    "RankingSettings",
    "RerankOptions",
    "ChunkMetadata",
    "RankedSearchResult",
    "RankingScore",
    "ScoredSearchResult",
    "ScoreStats",
    "SearchResult",
    "SourceType",
    "normalize_weights",
    "normalize_weight_triple",
    "tokenize",
    "tf",
    "idf",
    "tfidf",
    "bm25",
    "position_score",
    "proximity_score",
    "semantic_score",
    "rank_results",
    "hybrid_search",
    "remove_duplicates",
    "rerank_results",
    "apply_mmr",
    "get_reranker",
    "group_by_document",
    "select_top_chunk_per_document",
    "expand_query",
    "highlight_query",
    "normalize_score",
    "normalize_scores",
    "score_stats",
    "estimate_token_count",
    "limit_tokens",
    "fit_to_token_budget",
    "RetrievalPipeline",
]
