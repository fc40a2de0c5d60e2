"""
Tokenizer for lexical scoring.

Tokenization pipeline:
1. Lowercase conversion
2. Replace every non-word character with a space (Unicode aware, so Korean,
   Cyrillic etc. survive; "react.js" becomes "react", "js")
3. Split on whitespace, drop empty strings
4. Optionally apply Snowball stemming ("architectures" → "architectur")

Stemming is off by default: TF/IDF/BM25 match query terms against document
tokens exactly (case-insensitive). Enable it through RankingSettings.use_stemming
when morphological variants should match each other.
"""

import re
from typing import List

from .stemmer import stem as stem_word

_NON_WORD = re.compile(r'[^\w\s]+')


def tokenize(text: str, stem: bool = False) -> List[str]:
    """
    Split text into lowercase word tokens.

    Args:
        text: Input text
        stem: Apply Snowball stemming to every token

    Returns:
        List of tokens in document order (duplicates kept)

    Examples:
        >>> tokenize("React Hooks, useState & useEffect!")
        ['react', 'hooks', 'usestate', 'useeffect']

        >>> tokenize("searching architectures", stem=True)
        ['search', 'architectur']

        >>> tokenize("   ")
        []
    """
    if not text:
        return []

    tokens = _NON_WORD.sub(' ', text.lower()).split()

    if stem:
        tokens = [stem_word(t) for t in tokens]

    return tokens


def unique_terms(text: str, stem: bool = False) -> List[str]:
    """Tokenize and drop repeated tokens, keeping first-occurrence order"""
    return list(dict.fromkeys(tokenize(text, stem=stem)))
