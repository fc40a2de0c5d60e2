"""
Unit tests for ranking configuration.
"""

import os

import pytest

from ragrank.config import (
    ENV_PREFIX,
    HybridSearchOptions,
    RankingSettings,
    RecencyTier,
    resolve,
)

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Start every test without RAGRANK_* variables"""
    for name in list(os.environ):
        if name.startswith(ENV_PREFIX):
            monkeypatch.delenv(name)


class TestRankingSettingsDefaults:

    def test_documented_defaults(self):
        settings = RankingSettings()

        assert (settings.keyword_weight, settings.vector_weight) == (0.3, 0.7)
        assert (settings.tfidf_weight, settings.bm25_weight, settings.semantic_weight) == (0.2, 0.3, 0.5)
        assert (settings.bm25_k1, settings.bm25_b) == (1.5, 0.75)
        assert settings.avg_doc_length == 500
        assert settings.dedup_threshold == 0.9
        assert settings.mmr_lambda == 0.7
        assert settings.mmr_max_results == 10
        assert settings.reranker_type == "heuristic"
        assert settings.use_stemming is False

    def test_recency_tiers(self):
        tiers = RankingSettings().recency_tiers
        assert tiers == [RecencyTier(max_age_days=30, bonus=0.1), RecencyTier(max_age_days=90, bonus=0.05)]

    def test_resolve(self):
        assert resolve(None, 0.3) == 0.3
        assert resolve(0, 0.3) == 0

    def test_options_unset_by_default(self):
        options = HybridSearchOptions()
        assert options.keyword_weight is None
        assert options.limit is None
        assert options.rescore_keywords is False


class TestRankingSettingsFromEnv:
    """Test RAGRANK_* environment overrides"""

    def test_no_variables(self):
        assert RankingSettings.from_env() == RankingSettings()

    def test_typed_overrides(self, monkeypatch):
        monkeypatch.setenv("RAGRANK_KEYWORD_WEIGHT", "0.4")
        monkeypatch.setenv("RAGRANK_MMR_MAX_RESULTS", "5")
        monkeypatch.setenv("RAGRANK_USE_STEMMING", "true")
        monkeypatch.setenv("RAGRANK_RERANKER_TYPE", "MMR")

        settings = RankingSettings.from_env()

        assert settings.keyword_weight == 0.4
        assert settings.mmr_max_results == 5
        assert settings.use_stemming is True
        assert settings.reranker_type == "mmr"

    def test_blank_variable_ignored(self, monkeypatch):
        monkeypatch.setenv("RAGRANK_DEDUP_THRESHOLD", "  ")
        assert RankingSettings.from_env().dedup_threshold == 0.9

    def test_recency_tiers(self, monkeypatch):
        monkeypatch.setenv("RAGRANK_RECENCY_TIERS", "90:0.02, 7:0.2")

        tiers = RankingSettings.from_env().recency_tiers
        assert [(t.max_age_days, t.bonus) for t in tiers] == [(7, 0.2), (90, 0.02)]

    @pytest.mark.parametrize("name,value", [
        ("RAGRANK_KEYWORD_WEIGHT", "heavy"),
        ("RAGRANK_MMR_MAX_RESULTS", "3.5"),
        ("RAGRANK_USE_STEMMING", "maybe"),
        ("RAGRANK_RECENCY_TIERS", "thirty days"),
        ("RAGRANK_RERANKER_TYPE", "cohere"),
    ])
    def test_invalid_values(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)
        with pytest.raises(ValueError, match=name):
            RankingSettings.from_env()

    def test_env_file(self, monkeypatch, tmp_path):
        # Registered with monkeypatch so the value loaded from the file is undone afterwards
        monkeypatch.setenv("RAGRANK_DEDUP_THRESHOLD", "0.5")
        (tmp_path / ".env").write_text("RAGRANK_DEDUP_THRESHOLD=0.8\n")

        assert RankingSettings.from_env(tmp_path).dedup_threshold == 0.8

    def test_env_local_takes_priority(self, monkeypatch, tmp_path):
        monkeypatch.setenv("RAGRANK_DEDUP_THRESHOLD", "0.5")
        (tmp_path / ".env").write_text("RAGRANK_DEDUP_THRESHOLD=0.8\n")
        (tmp_path / ".env.local").write_text("RAGRANK_DEDUP_THRESHOLD=0.7\n")

        assert RankingSettings.from_env(tmp_path).dedup_threshold == 0.7

    def test_missing_env_dir_files(self, tmp_path):
        assert RankingSettings.from_env(tmp_path) == RankingSettings()
