"""
Position and proximity signals.

position_score: query terms that appear early in a chunk score higher.
proximity_score: query terms that appear close to each other score higher.
Both return values in [0, 1].
"""

import math
from typing import List

from .tokenizer import tokenize, unique_terms


def position_score(query: str, document: str, stem: bool = False) -> float:
    """
    Average early-occurrence score over matched query terms.

    Each matched term contributes exp(-first_index / token_count), so a term
    at the very start scores 1.0 and the score decays towards e^-1 at the end.

    Returns:
        0.0 when the query is empty or no term occurs in the document

    Example:
        >>> position_score("react", "react hooks are great")
        1.0
    """
    query_terms = unique_terms(query, stem=stem)
    doc_tokens = tokenize(document, stem=stem)
    if not query_terms or not doc_tokens:
        return 0.0

    first_index = {}
    for index, token in enumerate(doc_tokens):
        first_index.setdefault(token, index)

    scores = [
        math.exp(-first_index[term] / len(doc_tokens))
        for term in query_terms
        if term in first_index
    ]
    if not scores:
        return 0.0

    return sum(scores) / len(scores)


def _min_distance(left: List[int], right: List[int]) -> int:
    """Smallest |a - b| for a in left, b in right (both sorted ascending)"""
    i = j = 0
    best = math.inf
    while i < len(left) and j < len(right):
        distance = abs(left[i] - right[j])
        if distance < best:
            best = distance
        if left[i] < right[j]:
            i += 1
        else:
            j += 1
    return best


def proximity_score(query: str, document: str, stem: bool = False) -> float:
    """
    Closeness of consecutive query terms inside the document.

    Score = 1 / (1 + gap), where gap is the smallest number of tokens between
    an occurrence of a query term and an occurrence of the next query term.
    Adjacent terms give 1.0.

    Conventions:
        - empty query → 0.0
        - single-term query → 1.0
        - any query term missing from the document → 0.0

    Example:
        >>> proximity_score("react hooks", "react hooks are great")
        1.0
        >>> proximity_score("react state", "react hooks manage state")
        0.3333333333333333
    """
    query_terms = unique_terms(query, stem=stem)
    if not query_terms:
        return 0.0
    if len(query_terms) == 1:
        return 1.0

    positions = {term: [] for term in query_terms}
    for index, token in enumerate(tokenize(document, stem=stem)):
        if token in positions:
            positions[token].append(index)

    if any(not term_positions for term_positions in positions.values()):
        return 0.0

    min_gap = min(
        _min_distance(positions[first], positions[second]) - 1
        for first, second in zip(query_terms, query_terms[1:])
    )
    return 1.0 / (1.0 + max(min_gap, 0))
