"""
Request-scoped corpus statistics for IDF and BM25.

Aggregates document frequencies and lengths from the corpus texts supplied
with a call. The object lives only as long as that call: the engine never
caches statistics across requests (reuse is the caller's decision).
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Sequence

from .tokenizer import tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CorpusStatistics:
    """Document frequencies and length statistics of one corpus"""
    document_count: int = 0
    total_tokens: int = 0
    document_frequencies: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_texts(cls, corpus: Sequence[str], stem: bool = False) -> "CorpusStatistics":
        """
        Build statistics from corpus texts.

        Example:
            >>> stats = CorpusStatistics.from_texts(["React hooks", "hooks and state"])
            >>> stats.document_frequency("hooks")
            2
            >>> stats.average_length
            2.5
        """
        document_frequencies: Counter = Counter()
        total_tokens = 0

        for text in corpus:
            tokens = tokenize(text, stem=stem)
            total_tokens += len(tokens)
            document_frequencies.update(set(tokens))

        stats = cls(
            document_count=len(corpus),
            total_tokens=total_tokens,
            document_frequencies=dict(document_frequencies),
        )
        logger.debug(
            f"Corpus statistics: {stats.document_count} docs, "
            f"{len(stats.document_frequencies)} unique terms, avg length {stats.average_length:.1f}"
        )
        return stats

    @property
    def average_length(self) -> float:
        """Mean token count per document (0 for an empty corpus)"""
        if self.document_count == 0:
            return 0.0
        return self.total_tokens / self.document_count

    def document_frequency(self, term: str) -> int:
        return self.document_frequencies.get(term, 0)
