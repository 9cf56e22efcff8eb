"""
Trailer Taste Engine — pairwise preference learning and diversified ranking

Single entry point for the package:
- models/: TasteConfig, CatalogueItem, FeatureVector, PreferenceState, output records
- features/: phi (12-slot feature scheme) and the per-session feature cache
- stages/: anchor pool, preference update, pair selection, ranking (score, explore, MMR, guard), orchestrator
- session: SessionController state machine over the stages
"""

from .errors import InsufficientCandidatesError, MalformedVoteError, TasteEngineError
from .features import FEATURE_DIMENSIONS, FEATURE_NAMES, FEATURE_SCHEMA_VERSION, FeatureCache, phi
from .models import (
    DEFAULT_CONFIG,
    Anchor,
    CatalogueItem,
    ComparisonPair,
    Explanation,
    FeatureVector,
    FunnelPhase,
    PreferenceState,
    Recommendations,
    ScoredItem,
    SessionPhase,
    SessionSnapshot,
    TasteConfig,
    Vote,
    ensure_items,
    load_config,
)
from .session import SessionController
from .stages import (
    anchors_for_phase,
    build_anchor_pool,
    create_recommendations,
    rank_items,
    select_pair,
    select_top_k,
    update_weights,
)
from .utils import cosine_similarity, make_rng, sigmoid

__all__ = [
    "DEFAULT_CONFIG",
    "FEATURE_DIMENSIONS",
    "FEATURE_NAMES",
    "FEATURE_SCHEMA_VERSION",
    "Anchor",
    "CatalogueItem",
    "ComparisonPair",
    "Explanation",
    "FeatureCache",
    "FeatureVector",
    "FunnelPhase",
    "InsufficientCandidatesError",
    "MalformedVoteError",
    "PreferenceState",
    "Recommendations",
    "ScoredItem",
    "SessionController",
    "SessionPhase",
    "SessionSnapshot",
    "TasteConfig",
    "TasteEngineError",
    "Vote",
    "anchors_for_phase",
    "build_anchor_pool",
    "cosine_similarity",
    "create_recommendations",
    "ensure_items",
    "load_config",
    "make_rng",
    "phi",
    "rank_items",
    "select_pair",
    "select_top_k",
    "sigmoid",
    "update_weights",
]
