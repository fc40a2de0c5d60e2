"""
Unit tests for heuristic reranking and the reranker factory.
"""

from datetime import datetime

import pytest

pytestmark = pytest.mark.unit

from ragrank.config import RankingSettings, RerankOptions
from ragrank.reranking import (
    BaseReranker,
    HeuristicReranker,
    MMRReranker,
    RerankingFactory,
    get_reranker,
    rerank_results,
)
from ragrank.reranking.heuristic import (
    calculate_diversity_penalty,
    calculate_position_bonus,
    calculate_recency_bonus,
)


class TestDiversityPenalty:
    """Test same-document penalty"""

    def test_counts_earlier_entries(self, make_scored):
        settings = RankingSettings()
        results = [
            make_scored("doc-1", 0),
            make_scored("doc-2", 0),
            make_scored("doc-1", 1),
            make_scored("doc-1", 2),
        ]

        assert calculate_diversity_penalty(results, 0, settings) == 0.0
        assert calculate_diversity_penalty(results, 1, settings) == 0.0
        assert calculate_diversity_penalty(results, 2, settings) == pytest.approx(0.1)
        assert calculate_diversity_penalty(results, 3, settings) == pytest.approx(0.2)

    def test_capped(self, make_scored):
        results = [make_scored("doc-1", i) for i in range(6)]
        assert calculate_diversity_penalty(results, 5, RankingSettings()) == pytest.approx(0.3)


class TestRecencyBonus:
    """Test tiered recency bonus"""

    @pytest.mark.parametrize("published,expected", [
        ("2025-05-20", 0.1),
        ("2025-05-02", 0.1),
        ("2025-04-01", 0.05),
        ("2024-01-01", 0.0),
        ("not a date", 0.0),
        (None, 0.0),
    ])
    def test_tiers(self, make_scored, fixed_now, published, expected):
        result = make_scored("doc-1", metadata={"date": published})
        assert calculate_recency_bonus(result, fixed_now, RankingSettings()) == expected


class TestPositionBonus:
    """Test top-of-list bonus"""

    def test_top_ten_percent(self):
        settings = RankingSettings()

        assert calculate_position_bonus(0, 10, settings) == pytest.approx(0.05)
        assert calculate_position_bonus(1, 10, settings) == 0.0

    def test_linear_decrease(self):
        settings = RankingSettings()

        assert calculate_position_bonus(0, 20, settings) == pytest.approx(0.05)
        assert calculate_position_bonus(1, 20, settings) == pytest.approx(0.025)
        assert calculate_position_bonus(2, 20, settings) == 0.0


class TestRerankResults:
    """Test rerank_results"""

    def test_zero_weights_only_sort(self, make_scored):
        results = [make_scored("doc-1", 0, combined_score=0.4), make_scored("doc-2", 0, combined_score=0.7)]

        reranked = rerank_results("q", results)

        assert [r.document_id for r in reranked] == ["doc-2", "doc-1"]
        assert reranked[1] is results[0]

    def test_diversity_spreads_documents(self, make_scored):
        results = [
            make_scored("doc-1", 0, combined_score=0.8),
            make_scored("doc-1", 1, combined_score=0.79),
            make_scored("doc-2", 0, combined_score=0.7),
        ]

        reranked = rerank_results("q", results, RerankOptions(diversity_weight=1.0))

        assert [(r.document_id, r.chunk_index) for r in reranked] == [("doc-1", 0), ("doc-2", 0), ("doc-1", 1)]
        assert reranked[2].combined_score == pytest.approx(0.69)

    def test_recency_boost(self, make_scored, fixed_now):
        results = [
            make_scored("old", combined_score=0.55, metadata={"date": "2020-01-01"}),
            make_scored("fresh", combined_score=0.5, metadata={"date": "2025-05-25"}),
        ]

        reranked = rerank_results("q", results, RerankOptions(recency_weight=1.0), now=fixed_now)

        assert [r.document_id for r in reranked] == ["fresh", "old"]
        assert reranked[0].combined_score == pytest.approx(0.6)
        assert reranked[1].combined_score == pytest.approx(0.55)

    def test_recency_weight_zero_is_noop(self, make_scored, fixed_now):
        results = [make_scored("fresh", combined_score=0.5, metadata={"date": "2025-05-25"})]

        reranked = rerank_results("q", results, RerankOptions(recency_weight=0), now=fixed_now)
        assert reranked[0].combined_score == 0.5

    def test_naive_now_treated_as_utc(self, make_scored):
        results = [make_scored("fresh", combined_score=0.5, metadata={"date": "2025-05-25"})]

        reranked = rerank_results("q", results, RerankOptions(recency_weight=1.0), now=datetime(2025, 6, 1))
        assert reranked[0].combined_score == pytest.approx(0.6)

    def test_position_bonus(self, make_scored):
        results = [make_scored(f"doc-{i}", combined_score=0.5) for i in range(10)]

        reranked = rerank_results("q", results, RerankOptions(position_weight=1.0))

        assert reranked[0].document_id == "doc-0"
        assert reranked[0].combined_score == pytest.approx(0.55)
        assert reranked[1].combined_score == 0.5

    def test_adjusted_score_clamped(self, make_scored, fixed_now):
        results = [
            make_scored("doc-1", 0, combined_score=0.98, metadata={"date": "2025-05-30"}),
            make_scored("doc-1", 1, combined_score=0.05),
        ]

        reranked = rerank_results("q", results, RerankOptions(
            diversity_weight=1.0, recency_weight=1.0,
        ), now=fixed_now)

        assert reranked[0].combined_score == 1.0
        assert reranked[1].combined_score == 0.0

    def test_component_scores_untouched(self, make_scored):
        results = [make_scored("doc-1", 0, combined_score=0.8), make_scored("doc-1", 1, combined_score=0.7)]

        reranked = rerank_results("q", results, RerankOptions(diversity_weight=1.0))

        assert all(r.keyword_score == r.vector_score for r in reranked)
        assert reranked[1].keyword_score == 0.7

    def test_weights_from_settings(self, make_scored):
        settings = RankingSettings(diversity_weight=1.0)
        results = [make_scored("doc-1", 0, combined_score=0.8), make_scored("doc-1", 1, combined_score=0.7)]

        reranked = rerank_results("q", results, settings=settings)
        assert reranked[1].combined_score == pytest.approx(0.6)

    def test_empty(self):
        assert rerank_results("q", []) == []


class TestHeuristicReranker:
    """Test HeuristicReranker strategy"""

    def test_is_base_reranker(self):
        assert isinstance(HeuristicReranker(), BaseReranker)

    def test_top_k(self, make_scored):
        results = [make_scored(f"doc-{i}", combined_score=i / 10) for i in range(5)]

        reranked = HeuristicReranker().rerank("q", results, top_k=2)
        assert [r.document_id for r in reranked] == ["doc-4", "doc-3"]

    def test_options_applied(self, make_scored):
        reranker = HeuristicReranker(options=RerankOptions(diversity_weight=1.0))
        results = [make_scored("doc-1", 0, combined_score=0.8), make_scored("doc-1", 1, combined_score=0.7)]

        assert reranker.rerank("q", results)[1].combined_score == pytest.approx(0.6)

    def test_model_info(self):
        info = HeuristicReranker(options=RerankOptions(recency_weight=0.5)).get_model_info()

        assert info["name"] == "heuristic"
        assert info["parameters"]["recency_weight"] == 0.5
        assert info["parameters"]["diversity_weight"] == 0.0


class TestRerankingFactory:
    """Test reranker selection by configuration"""

    def test_default_is_heuristic(self):
        assert isinstance(RerankingFactory.create(), HeuristicReranker)

    def test_mmr(self):
        reranker = RerankingFactory.create(RankingSettings(reranker_type="mmr", mmr_lambda=0.5))

        assert isinstance(reranker, MMRReranker)
        assert reranker.get_model_info()["parameters"]["lambda"] == 0.5

    def test_none(self):
        assert RerankingFactory.create(RankingSettings(reranker_type="none")) is None

    def test_case_insensitive(self):
        assert isinstance(RerankingFactory.create(RankingSettings(reranker_type="MMR")), MMRReranker)

    def test_unknown_type(self):
        with pytest.raises(ValueError, match="Unknown reranker type"):
            RerankingFactory.create(RankingSettings(reranker_type="cohere"))

    def test_get_reranker(self):
        assert isinstance(get_reranker(), HeuristicReranker)
        assert get_reranker(RankingSettings(reranker_type="none")) is None
