"""
Snowball stemmer for English (via NLTK).

Used by the tokenizer when stemming is enabled so that morphological
variants of a query term ("searching", "searches") match the same
document token.

Examples:
- "architectures" → "architectur"
- "strategies" → "strategi"
- "running" → "run"
"""

from nltk.stem.snowball import SnowballStemmer

# Stateless after construction, safe to share across threads
_stemmer = SnowballStemmer('english')


def stem(word: str) -> str:
    """
    Stem a single lowercase word.

    Examples:
        >>> stem("searching")
        'search'
        >>> stem("communication")
        'commun'
    """
    return _stemmer.stem(word)
