"""
Ranking configuration.

Every tunable constant of the engine lives in RankingSettings. Defaults are
the documented values below; RankingSettings.from_env() lets a deployment
override them through RAGRANK_* environment variables (loaded from
.env.local first, then .env, like the API service does).

Per-call option models (HybridSearchOptions, RankingOptions, RerankOptions)
leave fields unset; each operation resolves them against the settings once
at the start of the call.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

# Hybrid merge defaults (semantic-leaning split)
DEFAULT_KEYWORD_WEIGHT = 0.3
DEFAULT_VECTOR_WEIGHT = 0.7
DEFAULT_MIN_SCORE = 0.0

# Rank aggregator defaults
DEFAULT_TFIDF_WEIGHT = 0.2
DEFAULT_BM25_WEIGHT = 0.3
DEFAULT_SEMANTIC_WEIGHT = 0.5

# Okapi BM25 literature defaults
BM25_K1 = 1.5
BM25_B = 0.75
DEFAULT_AVG_DOC_LENGTH = 500.0

DEFAULT_DEDUP_THRESHOLD = 0.9

DEFAULT_MMR_LAMBDA = 0.7
DEFAULT_MMR_MAX_RESULTS = 10

# Diversity penalty: step per earlier chunk of the same document, capped
DIVERSITY_PENALTY_STEP = 0.1
DIVERSITY_PENALTY_CAP = 0.3

# Recency bonus tiers: (max age in days, bonus)
RECENCY_TIERS = ((30, 0.1), (90, 0.05))

# Position bonus: top fraction of the input order and its maximum bonus
POSITION_BONUS_FRACTION = 0.1
POSITION_BONUS_MAX = 0.05

RERANKER_TYPES = ("heuristic", "mmr", "none")

ENV_PREFIX = "RAGRANK_"


class RecencyTier(BaseModel):
    model_config = ConfigDict(frozen=True)

    max_age_days: float
    bonus: float


class RankingSettings(BaseModel):
    """Resolved engine configuration (immutable)"""
    model_config = ConfigDict(frozen=True)

    keyword_weight: float = DEFAULT_KEYWORD_WEIGHT
    vector_weight: float = DEFAULT_VECTOR_WEIGHT
    min_score: float = DEFAULT_MIN_SCORE

    tfidf_weight: float = DEFAULT_TFIDF_WEIGHT
    bm25_weight: float = DEFAULT_BM25_WEIGHT
    semantic_weight: float = DEFAULT_SEMANTIC_WEIGHT

    bm25_k1: float = BM25_K1
    bm25_b: float = BM25_B
    avg_doc_length: float = DEFAULT_AVG_DOC_LENGTH

    dedup_threshold: float = DEFAULT_DEDUP_THRESHOLD

    mmr_lambda: float = DEFAULT_MMR_LAMBDA
    mmr_max_results: int = DEFAULT_MMR_MAX_RESULTS

    diversity_penalty_step: float = DIVERSITY_PENALTY_STEP
    diversity_penalty_cap: float = DIVERSITY_PENALTY_CAP
    recency_tiers: List[RecencyTier] = Field(
        default_factory=lambda: [RecencyTier(max_age_days=d, bonus=b) for d, b in RECENCY_TIERS]
    )
    position_bonus_fraction: float = POSITION_BONUS_FRACTION
    position_bonus_max: float = POSITION_BONUS_MAX

    reranker_type: str = "heuristic"
    diversity_weight: float = 0.0
    recency_weight: float = 0.0
    position_weight: float = 0.0
    top_chunk_per_document: bool = False

    use_stemming: bool = False

    @classmethod
    def from_env(cls, env_dir: Optional[Path] = None) -> "RankingSettings":
        """
        Build settings from RAGRANK_* environment variables.

        Loads .env.local (highest priority) or .env from env_dir when present.
        Unset variables keep their defaults.

        Raises:
            ValueError: If a variable is set but cannot be parsed
        """
        if env_dir is not None:
            env_local = Path(env_dir) / ".env.local"
            env_file = Path(env_dir) / ".env"
            if env_local.exists():
                logger.info(f"Loading ranking settings from: {env_local}")
                load_dotenv(env_local, override=True)
            elif env_file.exists():
                logger.info(f"Loading ranking settings from: {env_file}")
                load_dotenv(env_file, override=True)

        overrides = {}
        for name, field in cls.model_fields.items():
            if name == "recency_tiers":
                continue
            raw = os.getenv(ENV_PREFIX + name.upper())
            if raw is None or raw.strip() == "":
                continue
            overrides[name] = _parse_env_value(name, raw.strip(), field.annotation)

        raw_tiers = os.getenv(ENV_PREFIX + "RECENCY_TIERS")
        if raw_tiers:
            overrides["recency_tiers"] = _parse_recency_tiers(raw_tiers)

        reranker_type = overrides.get("reranker_type")
        if reranker_type is not None:
            reranker_type = reranker_type.lower()
            if reranker_type not in RERANKER_TYPES:
                raise ValueError(
                    f"Unknown {ENV_PREFIX}RERANKER_TYPE: {reranker_type}. "
                    f"Valid options: {', '.join(RERANKER_TYPES)}"
                )
            overrides["reranker_type"] = reranker_type

        if overrides:
            logger.debug(f"Ranking settings overridden from env: {sorted(overrides)}")
        return cls(**overrides)


def _parse_env_value(name: str, raw: str, annotation):
    env_name = ENV_PREFIX + name.upper()
    if annotation is bool:
        lowered = raw.lower()
        if lowered in ("true", "1", "yes"):
            return True
        if lowered in ("false", "0", "no"):
            return False
        raise ValueError(f"{env_name} must be true or false, got: {raw}")
    if annotation is int:
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"{env_name} must be an integer, got: {raw}")
    if annotation is float:
        try:
            return float(raw)
        except ValueError:
            raise ValueError(f"{env_name} must be a number, got: {raw}")
    return raw


def _parse_recency_tiers(raw: str) -> List[RecencyTier]:
    """Parse "30:0.1,90:0.05" into recency tiers"""
    tiers = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            days, bonus = part.split(":")
            tiers.append(RecencyTier(max_age_days=float(days), bonus=float(bonus)))
        except ValueError:
            raise ValueError(
                f"{ENV_PREFIX}RECENCY_TIERS must look like '30:0.1,90:0.05', got: {raw}"
            )
    return sorted(tiers, key=lambda t: t.max_age_days)


def resolve(value, default):
    """Per-call option value, or the settings default when it is unset"""
    return default if value is None else value


class HybridSearchOptions(BaseModel):
    """Per-call options for hybrid_search; None means use settings"""
    model_config = ConfigDict(frozen=True)

    keyword_weight: Optional[float] = None
    vector_weight: Optional[float] = None
    min_score: Optional[float] = None
    limit: Optional[int] = None
    rescore_keywords: bool = False


class RankingOptions(BaseModel):
    """Per-call options for rank_results; None means use settings"""
    model_config = ConfigDict(frozen=True)

    tfidf_weight: Optional[float] = None
    bm25_weight: Optional[float] = None
    semantic_weight: Optional[float] = None
    avg_doc_length: Optional[float] = None
    corpus: Optional[Sequence[str]] = None


class RerankOptions(BaseModel):
    """Per-call options for rerank_results; None means use settings"""
    model_config = ConfigDict(frozen=True)

    diversity_weight: Optional[float] = None
    recency_weight: Optional[float] = None
    position_weight: Optional[float] = None
