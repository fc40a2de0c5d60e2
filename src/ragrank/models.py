"""
Typed search result models shared by every ranking stage.

Results arrive from two upstream providers (keyword index, vector index) and
flow through merge, dedup, rerank and aggregation. Every model is frozen:
stages never mutate a result, they return copies via model_copy(update=...).

Field names are snake_case. camelCase aliases ("documentId", "chunkContent")
are accepted on input so payloads produced by the web client validate as-is.
"""

import logging
from datetime import date as calendar_date, datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)


class SourceType(str, Enum):
    """Where the chunk's document came from"""
    FILE = "file"
    URL = "url"
    MANUAL = "manual"
    SERVICE_DATA = "service_data"


class ChunkMetadata(BaseModel):
    """
    Chunk metadata with documented keys.

    Recognized keys:
        date: Publication/update date used for the recency bonus.
            ISO-8601 strings are parsed, naive values are treated as UTC.
            Unparsable values become None instead of failing validation.

    Any other key is kept as an extra attribute so producers can attach
    free-form data without it being dropped.
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    date: Optional[datetime] = None

    @field_validator("date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> Optional[datetime]:
        if value is None:
            return None

        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, calendar_date):
            parsed = datetime(value.year, value.month, value.day)
        elif isinstance(value, str):
            try:
                parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
            except ValueError:
                logger.debug(f"Ignoring unparsable metadata date: {value!r}")
                return None
        else:
            logger.debug(f"Ignoring metadata date of type {type(value).__name__}")
            return None

        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed


class SearchResult(BaseModel):
    """Raw chunk hit produced by a keyword or vector search provider"""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    document_id: str
    document_title: str = ""
    chunk_index: int
    chunk_content: str = ""
    similarity: float = 0.0
    metadata: ChunkMetadata = Field(default_factory=ChunkMetadata)
    source_type: SourceType = SourceType.MANUAL
    source_url: Optional[str] = None
    service_id: Optional[str] = None

    @field_validator("metadata", mode="before")
    @classmethod
    def _default_metadata(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def key(self) -> tuple:
        """Merge identity across keyword and vector lists"""
        return (self.document_id, self.chunk_index)

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "SearchResult":
        """
        Build a result from a database row (snake_case columns).

        Example:
            >>> SearchResult.from_row({
            ...     "document_id": "doc-1", "document_title": "Guide",
            ...     "chunk_index": 0, "chunk_content": "React hooks",
            ...     "similarity": 0.82, "metadata": None, "source_type": "file",
            ... })
        """
        return cls(
            document_id=row["document_id"],
            document_title=row.get("document_title") or "",
            chunk_index=row["chunk_index"],
            chunk_content=row.get("chunk_content") or "",
            similarity=row.get("similarity") or 0.0,
            metadata=row.get("metadata"),
            source_type=row.get("source_type") or SourceType.MANUAL,
            source_url=row.get("source_url"),
            service_id=row.get("service_id"),
        )


class ScoredSearchResult(SearchResult):
    """
    Result produced by the hybrid merger.

    Right after merging, combined_score = kw * keyword_score + vw * vector_score.
    Rerank stages may adjust combined_score; keyword_score and vector_score
    are never changed after the merge.
    """
    keyword_score: float = 0.0
    vector_score: float = 0.0
    combined_score: float = 0.0

    @property
    def relevance(self) -> float:
        return self.combined_score

    @classmethod
    def from_result(
        cls,
        result: SearchResult,
        keyword_score: float,
        vector_score: float,
        combined_score: float,
    ) -> "ScoredSearchResult":
        fields = {name: getattr(result, name) for name in SearchResult.model_fields}
        return cls(
            **fields,
            keyword_score=keyword_score,
            vector_score=vector_score,
            combined_score=combined_score,
        )


class RankingScore(BaseModel):
    """Per-signal scores computed by the rank aggregator"""
    model_config = ConfigDict(frozen=True)

    tfidf: float = 0.0
    bm25: float = 0.0
    semantic: float = 0.0
    combined: float = 0.0


class RankedSearchResult(SearchResult):
    """Result produced by rank_results (TF-IDF + BM25 + semantic fusion)"""
    ranking: RankingScore = Field(default_factory=RankingScore)

    @property
    def relevance(self) -> float:
        return self.ranking.combined

    @classmethod
    def from_result(cls, result: SearchResult, ranking: RankingScore) -> "RankedSearchResult":
        fields = {name: getattr(result, name) for name in SearchResult.model_fields}
        return cls(**fields, ranking=ranking)


class ScoreStats(BaseModel):
    """Distribution of relevance scores over a result list"""
    model_config = ConfigDict(frozen=True)

    min: float = 0.0
    max: float = 0.0
    mean: float = 0.0
    median: float = 0.0
    std_dev: float = 0.0
