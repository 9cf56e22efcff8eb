"""
Errors surfaced to callers.

Numerical edge cases (length mismatch, zero-norm vectors) are recovered inside
utils.vector_math and never show up here.
"""


class TasteEngineError(Exception):
    """Base class for errors the caller is expected to handle."""


class InsufficientCandidatesError(TasteEngineError):
    """Fewer than two eligible items remain for a comparison.

    Not fatal: the caller can un-hide items, clear recent exclusions, or reset.
    """

    def __init__(self, eligible: int):
        self.eligible = eligible
        super().__init__(f"Need at least 2 eligible items to form a pair, found {eligible}")


class MalformedVoteError(TasteEngineError):
    """A vote whose winner/loser cannot be resolved, or that compares an item with itself."""

    def __init__(self, winner_id: str, loser_id: str, reason: str):
        self.winner_id = winner_id
        self.loser_id = loser_id
        self.reason = reason
        super().__init__(f"Rejected vote {winner_id!r} over {loser_id!r}: {reason}")
