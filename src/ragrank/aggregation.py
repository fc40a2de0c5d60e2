"""Document-level aggregation of chunk results"""

from typing import Dict, List, Sequence, TypeVar

from .models import RankedSearchResult, ScoredSearchResult

ResultT = TypeVar("ResultT", ScoredSearchResult, RankedSearchResult)


def group_by_document(results: Sequence[ResultT]) -> Dict[str, List[ResultT]]:
    """
    Group results by document_id.

    Groups appear in first-seen order and keep the input order inside.

    Example:
        >>> grouped = group_by_document(results)
        >>> list(grouped)
        ['doc-1', 'doc-2']
    """
    groups: Dict[str, List[ResultT]] = {}
    for result in results:
        groups.setdefault(result.document_id, []).append(result)
    return groups


def select_top_chunk_per_document(results: Sequence[ResultT]) -> List[ResultT]:
    """
    Keep only the most relevant chunk of each document.

    The earliest chunk wins a tie inside a document. The output holds at most
    one entry per document, sorted by relevance descending.
    """
    top_chunks = []
    for chunks in group_by_document(results).values():
        best = chunks[0]
        for chunk in chunks[1:]:
            if chunk.relevance > best.relevance:
                best = chunk
        top_chunks.append(best)

    top_chunks.sort(key=lambda r: r.relevance, reverse=True)
    return top_chunks
