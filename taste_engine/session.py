"""
Session controller — sequences onboarding rounds and serves recommendations.

States: COLLECTING(round) -> COMPLETE once round >= target_rounds.
Each controller owns its PreferenceState, feature cache, and random source; nothing
is shared between sessions. Callers serialise calls for one session.
"""

import logging
from typing import Dict, Iterator, List, Optional, Set, Tuple, Union

from .errors import InsufficientCandidatesError, MalformedVoteError
from .features.cache import FeatureCache
from .models.config import TasteConfig, resolve_config
from .models.anchor import Anchor, FunnelPhase
from .models.item import CatalogueItem, coerce_id, ensure_items, index_by_id
from .models.scoring import Recommendations
from .models.session import ComparisonPair, FunnelProgress, SessionPhase, SessionSnapshot
from .models.state import PreferenceState, pair_key
from .models.vote import Vote
from .stages.anchor_pool import anchors_for_phase, build_anchor_pool, funnel_phase
from .stages.orchestrator import create_recommendations
from .stages.pair_selection import select_pair
from .stages.preference_update import update_weights
from .utils.rng import RngLike, make_rng

logger = logging.getLogger(__name__)

DEFAULT_REC_LIMIT = 12

FUNNEL_DESCRIPTIONS = {
    FunnelPhase.BROAD: "Exploring broad genre preferences",
    FunnelPhase.FOCUSED: "Refining style preferences",
    FunnelPhase.PRECISE: "Fine-tuning your taste profile",
}


def _as_id(value) -> str:
    return str(coerce_id(value))


class SessionController:
    """One user's onboarding and recommendation session over a catalogue snapshot."""

    def __init__(
        self,
        catalogue: List[Union[Dict, CatalogueItem]],
        config: Optional[TasteConfig] = None,
        rng: RngLike = None,
        state: Optional[PreferenceState] = None,
    ):
        self.config = resolve_config(config)
        self.items: List[CatalogueItem] = ensure_items(catalogue)
        self.items_by_id: Dict[str, CatalogueItem] = index_by_id(self.items)
        self.rng = make_rng(rng)
        self.features = FeatureCache()
        self.features.warm(self.items)
        self.anchors: List[Anchor] = (
            build_anchor_pool(self.items, self.config) if self.config.anchor_pool_enabled else []
        )
        self.state = state if state is not None else self._fresh_state()
        self.current_pair: Optional[ComparisonPair] = None

    def _fresh_state(self) -> PreferenceState:
        return PreferenceState.initial(
            self.config.feature_dimensions,
            exploration_rate=self.config.exploration_rate_default,
        )

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    @property
    def round(self) -> int:
        return self.state.choices

    @property
    def phase(self) -> SessionPhase:
        if self.state.choices >= self.config.target_rounds:
            return SessionPhase.COMPLETE
        return SessionPhase.COLLECTING

    @property
    def onboarding_complete(self) -> bool:
        return self.phase is SessionPhase.COMPLETE

    def next_pair(self) -> Optional[ComparisonPair]:
        """
        The comparison to show now, or None once onboarding is complete.

        Candidates come from the anchor pool narrowed to the current funnel phase. If
        that leaves too few items, the whole catalogue is used, and then recent
        exclusions are relaxed before giving up.

        Repeated calls return the same pair until it is voted on or skipped.

        Raises:
            InsufficientCandidatesError: fewer than 2 non-hidden items remain.
        """
        if self.onboarding_complete:
            return None
        if self.current_pair is not None:
            return self.current_pair

        pair = None
        error = None
        for source, candidates, excluded in self._selection_attempts():
            if error is not None:
                logger.info(
                    "[session] PAIR_POOL_FALLBACK source=%s eligible=%s",
                    source, error.eligible,
                )
            try:
                pair = self._select(candidates, excluded)
                break
            except InsufficientCandidatesError as exc:
                error = exc
        if pair is None:
            raise error

        self._mark_shown(pair)
        self.current_pair = pair
        return pair

    def phase_candidates(self) -> List[CatalogueItem]:
        """Anchor titles for the current funnel phase (empty without an anchor pool)."""
        if not self.anchors:
            return []
        phase = funnel_phase(self.state.choices, self.config)
        return anchors_for_phase(self.anchors, phase, self.state.w, self.config)

    def _selection_attempts(self) -> Iterator[Tuple[str, List[CatalogueItem], Set[str]]]:
        excluded = self.state.excluded_from_pairs()
        narrowed = self.phase_candidates()
        if len(narrowed) >= 2:
            yield "anchors", narrowed, excluded
        yield "catalogue", self.items, excluded
        if self.state.recently_shown:
            yield "catalogue_relaxed", self.items, set(self.state.hidden)

    def _select(self, candidates: List[CatalogueItem], excluded: Set[str]) -> ComparisonPair:
        return select_pair(
            candidates,
            self.state.w,
            excluded,
            self.config,
            self.rng,
            self.features,
            pairs_shown=self.state.pairs_shown,
        )

    def _mark_shown(self, pair: ComparisonPair) -> None:
        left, right = pair.left.id, pair.right.id
        recent = [left, right] + [i for i in self.state.recently_shown if i not in (left, right)]
        self.state.recently_shown = recent[: self.config.recent_window]
        self.state.pairs_shown.add(pair_key(left, right))

    def submit_vote(self, winner_id: str, loser_id: str) -> SessionSnapshot:
        """
        Learn from one forced choice and advance the round.

        Raises:
            MalformedVoteError: an id is unknown or both ids are the same item. The
                session is left untouched.
        """
        winner_id, loser_id = _as_id(winner_id), _as_id(loser_id)
        if winner_id == loser_id:
            raise MalformedVoteError(winner_id, loser_id, "winner and loser are the same item")
        winner = self.items_by_id.get(winner_id)
        loser = self.items_by_id.get(loser_id)
        if winner is None or loser is None:
            missing = winner_id if winner is None else loser_id
            raise MalformedVoteError(winner_id, loser_id, f"unknown item id {missing!r}")

        self.state.w = update_weights(
            self.state.w,
            self.features.vector(winner),
            self.features.vector(loser),
            eta=self.config.learning_rate,
            l2=self.config.l2_regularization,
        )
        self.state.choices += 1
        self.state.explored.update((winner_id, loser_id))
        self.state.winner_ids.append(winner_id)
        self.current_pair = None

        logger.info(
            "[session] VOTE round=%s winner=%s loser=%s complete=%s",
            self.state.choices, winner_id, loser_id, self.onboarding_complete,
        )
        return self.current_state()

    def submit(self, vote: Union[Vote, Dict]) -> SessionSnapshot:
        """submit_vote for a Vote model or a {winnerId, loserId} dict."""
        vote = Vote.model_validate(vote) if isinstance(vote, dict) else vote
        return self.submit_vote(vote.winner_id, vote.loser_id)

    def skip(self) -> Optional[ComparisonPair]:
        """Step back one round (never below 0) and move on to a new pair without voting."""
        if self.state.choices > 0:
            self.state.choices -= 1
            if self.state.winner_ids:
                self.state.winner_ids.pop()
        self.current_pair = None
        return self.next_pair()

    def adjust_exploration(self, delta: float) -> float:
        """Shift the exploration rate by delta, clamped to the configured bounds."""
        rate = self.state.exploration_rate + delta
        rate = max(self.config.exploration_rate_min, min(self.config.exploration_rate_max, rate))
        self.state.exploration_rate = rate
        return rate

    def reset(self) -> None:
        """Back to COLLECTING(0) with zero weights and empty sets."""
        self.state = self._fresh_state()
        self.current_pair = None
        logger.info("[session] RESET")

    # ------------------------------------------------------------------
    # Watchlist and hiding
    # ------------------------------------------------------------------

    def hide(self, item_id: str) -> None:
        """Never serve item_id again in this session."""
        item_id = _as_id(item_id)
        self.state.hidden.add(item_id)
        pair = self.current_pair
        if pair is not None and item_id in (pair.left.id, pair.right.id):
            self.current_pair = None

    def like(self, item_id: str) -> None:
        self.state.likes.add(_as_id(item_id))

    def unlike(self, item_id: str) -> None:
        self.state.likes.discard(_as_id(item_id))

    def watchlist(self) -> List[CatalogueItem]:
        """Liked items in catalogue order."""
        return [item for item in self.items_by_id.values() if item.id in self.state.likes]

    # ------------------------------------------------------------------
    # Outputs
    # ------------------------------------------------------------------

    def current_state(self) -> SessionSnapshot:
        return SessionSnapshot(
            w=list(self.state.w),
            choices=self.state.choices,
            round=self.round,
            phase=self.phase,
            onboarding_complete=self.onboarding_complete,
            exploration_rate=self.state.exploration_rate,
        )

    def ranked_recommendations(self, k: int = DEFAULT_REC_LIMIT) -> Recommendations:
        """Diversified top-k for the current weights, with an explanation."""
        return create_recommendations(
            self.items,
            self.state,
            k=k,
            config=self.config,
            rng=self.rng,
            features=self.features,
        )

    def progress(self) -> FunnelProgress:
        """Onboarding funnel stage for display."""
        choices = self.state.choices
        phase = funnel_phase(choices, self.config)
        return FunnelProgress(
            phase=phase.value, round=choices + 1, description=FUNNEL_DESCRIPTIONS[phase]
        )
