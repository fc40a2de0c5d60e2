"""
Lexical scoring for hybrid ranking.

Components:
- tokenizer: lowercase word tokenization with optional Snowball stemming
- corpus: request-scoped document frequencies and average length
- scorer: TF, IDF, TF-IDF and Okapi BM25
- position: early-occurrence and term proximity signals
- relevance: corpus-free keyword relevance and Jaccard text similarity

Corpus statistics are computed from the texts passed with each call and are
never cached between calls.
"""

from .tokenizer import tokenize, unique_terms
from .stemmer import stem
from .corpus import CorpusStatistics
from .scorer import BM25Scorer, bm25, idf, tf, tfidf
from .position import position_score, proximity_score
from .relevance import jaccard_similarity, keyword_relevance, text_similarity

__all__ = [
    "tokenize",
    "unique_terms",
    "stem",
    "CorpusStatistics",
    "BM25Scorer",
    "tf",
    "idf",
    "tfidf",
    "bm25",
    "position_score",
    "proximity_score",
    "keyword_relevance",
    "jaccard_similarity",
    "text_similarity",
]
