"""
Lightweight keyword relevance for re-scoring keyword-index hits.

Combines three corpus-free signals:
    0.5 × Jaccard overlap of query and chunk token sets
    0.3 × order score (share of query tokens found in query order)
    0.2 × position score (early occurrence)

Used by hybrid_search when the keyword provider's own score should be
replaced by a lexical one computed against the query (rescore_keywords).
"""

from typing import List, Set

from .position import position_score
from .tokenizer import tokenize

JACCARD_WEIGHT = 0.5
ORDER_WEIGHT = 0.3
POSITION_WEIGHT = 0.2


def jaccard_similarity(left: Set[str], right: Set[str]) -> float:
    """|A ∩ B| / |A ∪ B|; 0 when both sets are empty"""
    union = left | right
    if not union:
        return 0.0
    return len(left & right) / len(union)


def text_similarity(text1: str, text2: str) -> float:
    """Jaccard similarity of two texts' token sets"""
    return jaccard_similarity(set(tokenize(text1)), set(tokenize(text2)))


def order_score(query_tokens: List[str], doc_tokens: List[str]) -> float:
    """Share of query tokens found after the previously matched one"""
    if not query_tokens:
        return 0.0

    last_index = -1
    ordered = 0
    for token in query_tokens:
        try:
            last_index = doc_tokens.index(token, last_index + 1)
        except ValueError:
            continue
        ordered += 1

    return ordered / len(query_tokens)


def keyword_relevance(query: str, document: str) -> float:
    """
    Relevance of a chunk for a query in [0, 1].

    Example:
        >>> keyword_relevance("react hooks", "react hooks are great") > 0.5
        True
        >>> keyword_relevance("react", "")
        0.0
    """
    query_tokens = tokenize(query)
    doc_tokens = tokenize(document)
    if not query_tokens or not doc_tokens:
        return 0.0

    score = (
        JACCARD_WEIGHT * jaccard_similarity(set(query_tokens), set(doc_tokens))
        + ORDER_WEIGHT * order_score(query_tokens, doc_tokens)
        + POSITION_WEIGHT * position_score(query, document)
    )
    return min(score, 1.0)
