"""
Unit tests for tokenization and stemming.
"""

import pytest

from ragrank.lexical import stem, tokenize, unique_terms

pytestmark = pytest.mark.unit


class TestTokenize:
    """Test tokenizer pipeline"""

    def test_lowercase_and_punctuation(self):
        assert tokenize("React Hooks, useState & useEffect!") == [
            "react", "hooks", "usestate", "useeffect"
        ]

    def test_dotted_names_split(self):
        assert tokenize("react.js") == ["react", "js"]

    def test_duplicates_kept_in_order(self):
        assert tokenize("state and state") == ["state", "and", "state"]

    def test_empty_and_whitespace(self):
        assert tokenize("") == []
        assert tokenize("   ") == []
        assert tokenize(None) == []

    def test_unicode_words_survive(self):
        """Non-Latin scripts are word characters, not punctuation"""
        assert tokenize("Привет, мир") == ["привет", "мир"]
        assert tokenize("검색 엔진") == ["검색", "엔진"]

    def test_stemming_optional(self):
        assert tokenize("searching architectures") == ["searching", "architectures"]
        assert tokenize("searching architectures", stem=True) == ["search", "architectur"]


class TestUniqueTerms:

    def test_first_occurrence_order(self):
        assert unique_terms("b a b c a") == ["b", "a", "c"]

    def test_empty(self):
        assert unique_terms("") == []


class TestStemmer:
    """Test Snowball stemmer wrapper"""

    def test_morphological_variants_match(self):
        assert stem("searching") == stem("searches") == "search"

    def test_known_stems(self):
        assert stem("running") == "run"
        assert stem("strategies") == "strategi"
