"""Engine stages: anchor pool, eligible pool, preference update, pair selection, ranking, orchestration."""

from .anchor_pool import anchors_for_phase, build_anchor_pool, funnel_phase
from .candidate_pool import get_pair_pool, get_ranking_pool
from .orchestrator import create_recommendations
from .pair_selection import select_pair
from .preference_update import update_weights, win_probability
from .ranking import rank_items, select_top_k

__all__ = [
    "anchors_for_phase",
    "build_anchor_pool",
    "create_recommendations",
    "funnel_phase",
    "get_pair_pool",
    "get_ranking_pool",
    "rank_items",
    "select_pair",
    "select_top_k",
    "update_weights",
    "win_probability",
]
