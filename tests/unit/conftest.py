"""Unit test fixtures - search results built like the upstream providers return them"""

from datetime import datetime, timezone

import pytest

from ragrank.models import ScoredSearchResult, SearchResult


def build_result(
    document_id: str,
    chunk_index: int = 0,
    chunk_content: str = "",
    similarity: float = 0.8,
    metadata: dict = None,
) -> SearchResult:
    return SearchResult(
        document_id=document_id,
        document_title=f"Document {document_id}",
        chunk_index=chunk_index,
        chunk_content=chunk_content,
        similarity=similarity,
        metadata=metadata or {},
        source_type="manual",
    )


def build_scored(
    document_id: str,
    chunk_index: int = 0,
    chunk_content: str = "",
    combined_score: float = 0.5,
    metadata: dict = None,
) -> ScoredSearchResult:
    return ScoredSearchResult.from_result(
        build_result(document_id, chunk_index, chunk_content, metadata=metadata),
        keyword_score=combined_score,
        vector_score=combined_score,
        combined_score=combined_score,
    )


@pytest.fixture
def make_result():
    """Factory for raw provider hits"""
    return build_result


@pytest.fixture
def make_scored():
    """Factory for merged results with combined_score set"""
    return build_scored


@pytest.fixture
def keyword_results():
    """Keyword provider hits (similarity = keyword score)"""
    return [
        build_result("doc-1", 0, "React hooks are great for state management", 0.9),
        build_result("doc-2", 0, "Vue composition API is similar to React hooks", 0.7),
    ]


@pytest.fixture
def vector_results():
    """Vector provider hits (similarity = cosine similarity)"""
    return [
        build_result("doc-1", 0, "React hooks are great for state management", 0.95),
        build_result("doc-3", 0, "Angular services handle state differently", 0.8),
    ]


@pytest.fixture
def fixed_now():
    return datetime(2025, 6, 1, tzinfo=timezone.utc)
