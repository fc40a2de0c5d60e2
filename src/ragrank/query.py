"""
Query helpers: synonym expansion and match highlighting.
"""

import html
import logging
import re
from typing import Dict, List, Mapping, Sequence

from .lexical.tokenizer import unique_terms

logger = logging.getLogger(__name__)


def expand_query(query: str, synonym_map: Mapping[str, Sequence[str]]) -> str:
    """
    Append synonyms of the query's tokens to the query.

    The query is tokenized (lowercase, punctuation stripped); synonyms of
    matching tokens are appended after all original tokens, lowercased and
    deduplicated. Map keys match case-insensitively.

    Args:
        query: Original query
        synonym_map: token → list of synonyms

    Returns:
        Expanded query string; the query unchanged when the map is empty or
        no token has synonyms

    Example:
        >>> expand_query("React state", {"react": ["ReactJS", "react.js"]})
        'react state reactjs react.js'
    """
    if not synonym_map:
        return query

    terms = unique_terms(query)

    lookup: Dict[str, List[str]] = {}
    for key, synonyms in synonym_map.items():
        lookup.setdefault(key.lower(), []).extend(synonyms)

    expanded = dict.fromkeys(terms)
    for term in terms:
        for synonym in lookup.get(term, []):
            synonym = synonym.strip().lower()
            if synonym:
                expanded.setdefault(synonym)

    if len(expanded) == len(terms):
        return query

    logger.debug(f"Expanded query '{query}' with {len(expanded) - len(terms)} synonyms")
    return " ".join(expanded)


def highlight_query(text: str, query: str, tag: str = "mark") -> str:
    """
    Wrap case-insensitive occurrences of query tokens in an HTML tag.

    The result is always HTML: matching runs on the raw text and every
    piece is escaped afterwards, so chunk content cannot inject markup and
    a term like "lt" never lands inside an entity.

    Example:
        >>> highlight_query("React hooks are great", "hooks")
        'React <mark>hooks</mark> are great'
        >>> highlight_query("a < b", "zzz")
        'a &lt; b'
    """
    if not text:
        return text

    terms = unique_terms(query) if query else []
    if not terms:
        return html.escape(text, quote=False)

    # Longest first so "react" doesn't split "reactjs"
    alternation = "|".join(re.escape(t) for t in sorted(terms, key=len, reverse=True))
    pattern = re.compile(f"({alternation})", re.IGNORECASE)
    # split() with one capturing group puts the matches at odd indexes
    pieces = pattern.split(text)
    return "".join(
        f"<{tag}>{html.escape(piece, quote=False)}</{tag}>" if i % 2 else html.escape(piece, quote=False)
        for i, piece in enumerate(pieces)
    )
