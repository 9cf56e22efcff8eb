"""
Anchor model — a recognisable catalogue item tagged for the onboarding funnel.
"""

from enum import Enum

from pydantic import BaseModel

from .item import CatalogueItem


class FunnelPhase(str, Enum):
    BROAD = "broad"
    FOCUSED = "focused"
    PRECISE = "precise"


class Anchor(BaseModel):
    """Catalogue item plus its cluster, knownness, and release decade."""

    item: CatalogueItem
    cluster: str
    knownness: float
    decade: int
