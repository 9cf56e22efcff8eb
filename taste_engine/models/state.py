"""
PreferenceState model — everything one session has learned so far.

Owned by a single session and passed explicitly into every stage; nothing in the
engine keeps preference data at module scope.
"""

from typing import List, Optional, Set

from pydantic import BaseModel, Field, field_validator

from .feature_vector import FEATURE_DIMENSIONS


class PreferenceState(BaseModel):
    """
    Per-session taste state.

    w: weight vector (length D), unit L2 norm after every non-degenerate update.
    choices: number of votes recorded; only skip() and reset() lower it.
    explored: ids shown as pair members (no novelty bonus afterwards).
    hidden: ids never to be served again, whatever the other sets say.
    likes: the user's watchlist.
    exploration_rate: probability of the epsilon-greedy swap in ranking.
    winner_ids: vote winners in order, used only for explanations.
    recently_shown: newest-first ids excluded from the next pair.
    pairs_shown: unordered pair keys already asked this session.
    """

    w: List[float] = Field(default_factory=lambda: [0.0] * FEATURE_DIMENSIONS)
    choices: int = 0
    explored: Set[str] = Field(default_factory=set)
    hidden: Set[str] = Field(default_factory=set)
    likes: Set[str] = Field(default_factory=set)
    exploration_rate: float = 0.12
    winner_ids: List[str] = Field(default_factory=list)
    recently_shown: List[str] = Field(default_factory=list)
    pairs_shown: Set[str] = Field(default_factory=set)

    @field_validator("exploration_rate")
    @classmethod
    def _rate_is_probability(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"exploration_rate must be within [0, 1], got {v}")
        return v

    @classmethod
    def initial(
        cls,
        dimensions: int = FEATURE_DIMENSIONS,
        exploration_rate: Optional[float] = None,
    ) -> "PreferenceState":
        """Fresh state: zero weights, no votes, empty sets."""
        if exploration_rate is None:
            return cls(w=[0.0] * dimensions)
        return cls(w=[0.0] * dimensions, exploration_rate=exploration_rate)

    def excluded_from_pairs(self) -> Set[str]:
        """Ids that must not appear in the next comparison."""
        return set(self.hidden) | set(self.recently_shown)


def pair_key(a_id: str, b_id: str) -> str:
    """Order-independent key for a comparison."""
    return "|".join(sorted((a_id, b_id)))
