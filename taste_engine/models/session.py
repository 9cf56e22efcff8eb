"""
Session models — onboarding phase, the proposed comparison, and the progress snapshot.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel

from .item import CatalogueItem


class SessionPhase(str, Enum):
    COLLECTING = "collecting"
    COMPLETE = "complete"


class ComparisonPair(BaseModel):
    """Two items to show side by side, and how informative the selector judged them."""

    left: CatalogueItem
    right: CatalogueItem
    informativeness: float


class SessionSnapshot(BaseModel):
    """Progress view for the UI."""

    w: List[float]
    choices: int
    round: int
    phase: SessionPhase
    onboarding_complete: bool
    exploration_rate: float


class FunnelProgress(BaseModel):
    """Onboarding funnel stage derived from the number of votes so far."""

    phase: str
    round: int
    description: str
