"""
Ranking: score, explore, diversify, explain.

Public API: rank_items, select_top_k, apply_diversity_guard, build_explanation.
- core: main orchestration (rank_items).
- Submodules: scorer, exploration, mmr, diversity_guard, explanation.
"""

from .core import rank_items
from .diversity_guard import apply_diversity_guard, select_with_caps
from .explanation import build_explanation
from .exploration import apply_exploration_swap
from .mmr import select_top_k
from .scorer import score_item

__all__ = [
    "apply_diversity_guard",
    "apply_exploration_swap",
    "build_explanation",
    "rank_items",
    "score_item",
    "select_top_k",
    "select_with_caps",
]
