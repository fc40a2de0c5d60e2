"""
TF, IDF, TF-IDF and Okapi BM25 scoring.

Formulas:
    TF(t, d)     = count(t in d) / |d|
    IDF(t)       = ln((N - n_t + 0.5) / (n_t + 0.5) + 1)      (0 when n_t == 0)
    TF-IDF(q, d) = Σ_{t in q} TF(t, d) × IDF(t)
    BM25(q, d)   = Σ_{t in q} IDF(t) × (tf × (k1 + 1)) / (tf + k1 × (1 - b + b × |d|/avgdl))

Where:
    N    = number of corpus documents
    n_t  = number of corpus documents containing t
    k1   = term frequency saturation (default: 1.5)
    b    = length normalization (default: 0.75)
    avgdl = average document length; defaults to the corpus mean, 500 tokens
            when the corpus is empty

The IDF variant is the smoothed BM25 one, so it stays positive even for terms
present in every document. Only relative ordering is contractual, not the
exact numbers.
"""

import math
from collections import Counter
from typing import Dict, List, Optional, Sequence, Union

from ..config import BM25_B, BM25_K1, DEFAULT_AVG_DOC_LENGTH
from .corpus import CorpusStatistics
from .tokenizer import tokenize

Corpus = Union[Sequence[str], CorpusStatistics]


def _as_statistics(corpus: Corpus, stem: bool) -> CorpusStatistics:
    if isinstance(corpus, CorpusStatistics):
        return corpus
    return CorpusStatistics.from_texts(corpus, stem=stem)


def _normalize_term(term: str, stem: bool) -> str:
    tokens = tokenize(term, stem=stem)
    return tokens[0] if len(tokens) == 1 else term.lower()


def tf(term: str, document: str, stem: bool = False) -> float:
    """
    Term frequency: share of the document's tokens equal to term.

    term must be a single token. Text that tokenizes into several tokens
    ("react.js" → "react", "js") matches no document token and scores 0;
    score such phrases with tfidf(), which works per query token.

    Examples:
        >>> tf("x", "x x x")
        1.0
        >>> tf("react", "")
        0.0
    """
    tokens = tokenize(document, stem=stem)
    if not tokens:
        return 0.0

    term = _normalize_term(term, stem)
    return tokens.count(term) / len(tokens)


def idf_from_statistics(term: str, stats: CorpusStatistics) -> float:
    docs_with_term = stats.document_frequency(term)
    if docs_with_term == 0:
        return 0.0

    total_docs = stats.document_count
    return math.log((total_docs - docs_with_term + 0.5) / (docs_with_term + 0.5) + 1)


def idf(term: str, corpus: Corpus, stem: bool = False) -> float:
    """
    Inverse document frequency of term across the corpus.

    Returns 0 when no corpus document contains the term. Like tf(), term
    must be a single token; multi-token text such as "react.js" returns 0.
    """
    stats = _as_statistics(corpus, stem)
    return idf_from_statistics(_normalize_term(term, stem), stats)


def tfidf(query: str, document: str, corpus: Corpus, stem: bool = False) -> float:
    """
    TF-IDF relevance of a document for a query.

    Sum over query tokens of TF × IDF. Empty query scores 0.

    Example:
        >>> corpus = ["react hooks guide", "vue composition api", "angular services"]
        >>> tfidf("react hooks", corpus[0], corpus) > tfidf("react hooks", corpus[1], corpus)
        True
    """
    query_terms = tokenize(query, stem=stem)
    if not query_terms:
        return 0.0

    stats = _as_statistics(corpus, stem)
    doc_tokens = tokenize(document, stem=stem)
    if not doc_tokens:
        return 0.0

    counts = Counter(doc_tokens)
    doc_length = len(doc_tokens)

    score = 0.0
    for term in query_terms:
        score += (counts.get(term, 0) / doc_length) * idf_from_statistics(term, stats)
    return score


class BM25Scorer:
    """
    Okapi BM25 with corpus IDF.

    Term frequency saturates through k1 and documents longer than the
    average are penalized through b, so doubling a document's length with
    the same term counts lowers (never doubles) its score.
    """

    def __init__(
        self,
        k1: float = BM25_K1,
        b: float = BM25_B,
        avg_doc_length: Optional[float] = None,
        fallback_avg_length: float = DEFAULT_AVG_DOC_LENGTH,
    ):
        """
        Args:
            k1: Term frequency saturation parameter
                Higher = more weight to repeated terms
                Typical range: 1.2 - 2.0
            b: Length normalization parameter
                0 = no length penalty, 1 = full normalization
            avg_doc_length: Average document length in tokens
                None = use the corpus average
            fallback_avg_length: Used when the corpus has no tokens
        """
        self.k1 = k1
        self.b = b
        self.avg_doc_length = avg_doc_length
        self.fallback_avg_length = fallback_avg_length

    def resolve_avg_doc_length(self, stats: CorpusStatistics) -> float:
        if self.avg_doc_length is not None and self.avg_doc_length > 0:
            return float(self.avg_doc_length)
        if stats.average_length > 0:
            return stats.average_length
        if self.fallback_avg_length > 0:
            return float(self.fallback_avg_length)
        return DEFAULT_AVG_DOC_LENGTH

    def score(
        self,
        query_terms: List[str],
        doc_term_frequencies: Dict[str, int],
        token_count: int,
        stats: CorpusStatistics,
    ) -> float:
        """
        Compute BM25 for pre-tokenized input.

        Args:
            query_terms: Tokenized query
            doc_term_frequencies: Term counts of the document {term: count}
            token_count: Number of tokens in the document
            stats: Corpus statistics for IDF and the default average length

        Returns:
            BM25 score (0 when nothing matches)
        """
        if not query_terms or not doc_term_frequencies:
            return 0.0

        avgdl = self.resolve_avg_doc_length(stats)
        length_norm = 1 - self.b + self.b * (token_count / avgdl)

        score = 0.0
        for term in query_terms:
            term_freq = doc_term_frequencies.get(term, 0)
            if term_freq == 0:
                continue

            numerator = term_freq * (self.k1 + 1)
            denominator = term_freq + self.k1 * length_norm
            score += idf_from_statistics(term, stats) * (numerator / denominator)

        return score


def bm25(
    query: str,
    document: str,
    corpus: Corpus,
    avg_doc_length: Optional[float] = None,
    k1: float = BM25_K1,
    b: float = BM25_B,
    stem: bool = False,
) -> float:
    """
    BM25 relevance of a document for a query.

    Example:
        >>> corpus = ["react hooks", "react hooks react hooks state", "vue"]
        >>> bm25("hooks", corpus[0], corpus) > 0
        True
    """
    query_terms = tokenize(query, stem=stem)
    doc_tokens = tokenize(document, stem=stem)
    stats = _as_statistics(corpus, stem)

    scorer = BM25Scorer(k1=k1, b=b, avg_doc_length=avg_doc_length)
    return scorer.score(query_terms, Counter(doc_tokens), len(doc_tokens), stats)
