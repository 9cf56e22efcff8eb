"""
Anchor pool — recognisable titles for onboarding pairs, narrowed by funnel phase.

Onboarding works best when users compare films they have heard of. The anchor pool keeps
well-known titles, groups them into genre clusters, spreads each cluster across decades,
and drops repeat entries from the same franchise:

    knownness = 1.5 * imdbTop + 0.5 * imdbList + 0.8 * min(60, popularity) / 60
                + 0.5 * min(1, vote_count / 20000)

The funnel then narrows the anchors as votes accumulate:
    broad    - a slice of every cluster
    focused  - the clusters of the user's top learned genres
    precise  - the best-known titles of the top two learned genres

The public entry points are build_anchor_pool, funnel_phase and anchors_for_phase.
"""

import logging
import re
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set

from ..models.anchor import Anchor, FunnelPhase
from ..models.config import TasteConfig, resolve_config
from ..models.feature_vector import FEATURE_NAMES
from ..models.item import CatalogueItem

logger = logging.getLogger(__name__)

# Cluster name -> lower-case genre names. Order breaks overlap ties.
CLUSTERS: Dict[str, FrozenSet[str]] = {
    "action": frozenset({"action", "adventure", "thriller"}),
    "comedy_romance": frozenset({"comedy", "romance"}),
    "drama": frozenset({"drama"}),
    "horror": frozenset({"horror", "thriller"}),
    "animation_family": frozenset({"animation", "family"}),
    "scifi_fantasy": frozenset({"science fiction", "sci-fi", "scifi", "sci fi", "fantasy"}),
    "crime_mystery": frozenset({"crime", "mystery"}),
}
DEFAULT_CLUSTER = "drama"

# Cluster visiting order for the broad phase
BROAD_ORDER = (
    "action",
    "comedy_romance",
    "drama",
    "scifi_fantasy",
    "horror",
    "animation_family",
    "crime_mystery",
)

# Genre feature slot -> anchor cluster; thrillers live with horror
SLOT_CLUSTERS: Dict[str, str] = {
    "comedy": "comedy_romance",
    "drama": "drama",
    "action": "action",
    "thriller": "horror",
    "scifi": "scifi_fantasy",
    "fantasy_animation": "scifi_fantasy",
}
GENRE_SLOTS = FEATURE_NAMES[:7]

SPREAD_DECADES = (1970, 1980, 1990, 2000, 2010, 2020)
UNKNOWN_YEAR = 2000

_ARTICLE = re.compile(r"^(the|a|an)\s+")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


# ---------------------------------------------------------------------------
# Item signals
# ---------------------------------------------------------------------------


def _extra(item: CatalogueItem, *names: str):
    extra = item.model_extra or {}
    for name in names:
        if extra.get(name) is not None:
            return extra[name]
    return None


def knownness(item: CatalogueItem) -> float:
    """How recognisable a title is, from list membership, popularity, and vote count."""
    sources = _extra(item, "sources") or []
    score = 0.0
    if "imdbTop" in sources:
        score += 1.5
    if "imdbList" in sources:
        score += 0.5
    popularity = min(60.0, max(0.0, float(item.popularity or 0.0)))
    score += 0.8 * popularity / 60.0
    score += 0.5 * min(1.0, (item.vote_count or 0) / 20000.0)
    return score


def _language_ok(item: CatalogueItem, language: str) -> bool:
    if not language:
        return True
    return (_extra(item, "original_language", "originalLanguage") or "en") == language


def cluster_of(item: CatalogueItem) -> str:
    """Cluster sharing the most genres with the item; DEFAULT_CLUSTER when none match."""
    genres = {g.lower() for g in item.genres}
    best, best_overlap = DEFAULT_CLUSTER, 0
    for name, members in CLUSTERS.items():
        overlap = len(genres & members)
        if overlap > best_overlap:
            best, best_overlap = name, overlap
    return best


def brand_of(title: Optional[str]) -> str:
    """First two words of the title without a leading article, e.g. "star wars"."""
    text = _ARTICLE.sub("", (title or "").lower())
    words = _NON_ALNUM.sub(" ", text).split()
    return " ".join(words[:2])


def _decade(item: CatalogueItem) -> int:
    year = item.year if item.year is not None else UNKNOWN_YEAR
    return (year // 10) * 10


# ---------------------------------------------------------------------------
# Pool construction
# ---------------------------------------------------------------------------


def _spread_by_decade(ranked: List[Anchor], per_cluster: int, per_decade: int) -> List[Anchor]:
    """Up to per_decade titles from each spread decade first, then top up by knownness."""
    taken: List[Anchor] = []
    taken_ids: Set[str] = set()
    for decade in SPREAD_DECADES:
        count = 0
        for anchor in ranked:
            if len(taken) >= per_cluster or count >= per_decade:
                break
            if anchor.decade == decade and anchor.item.id not in taken_ids:
                taken.append(anchor)
                taken_ids.add(anchor.item.id)
                count += 1
    for anchor in ranked:
        if len(taken) >= per_cluster:
            break
        if anchor.item.id not in taken_ids:
            taken.append(anchor)
            taken_ids.add(anchor.item.id)
    return taken


def build_anchor_pool(
    items: Iterable[CatalogueItem],
    config: Optional[TasteConfig] = None,
) -> List[Anchor]:
    """
    Recognisable, decade-spread, franchise-deduplicated anchors grouped by cluster.

    Args:
        items: Catalogue items (duplicate ids: first occurrence wins).
        config: Knownness floor, language, and per-cluster / per-decade caps.

    Returns:
        Anchors ordered cluster by cluster, each cluster in selection order.
    """
    config = resolve_config(config)

    # --- 1. Recognisable titles only ---
    by_cluster: Dict[str, List[Anchor]] = {name: [] for name in CLUSTERS}
    seen: Set[str] = set()
    total = 0
    for item in items:
        total += 1
        if item.id in seen:
            continue
        seen.add(item.id)
        k = knownness(item)
        if k < config.anchor_min_knownness or not _language_ok(item, config.anchor_language):
            continue
        cluster = cluster_of(item)
        by_cluster[cluster].append(
            Anchor(item=item, cluster=cluster, knownness=k, decade=_decade(item))
        )

    # --- 2. Rank inside each cluster, spread across decades ---
    anchors: List[Anchor] = []
    for members in by_cluster.values():
        members.sort(key=lambda a: a.knownness, reverse=True)
        anchors.extend(
            _spread_by_decade(members, config.anchor_max_per_cluster, config.anchor_max_per_decade)
        )

    # --- 3. One title per franchise ---
    brands: Set[str] = set()
    out: List[Anchor] = []
    for anchor in anchors:
        brand = brand_of(anchor.item.title)
        if brand and brand in brands:
            continue
        brands.add(brand)
        out.append(anchor)

    logger.info(
        "[anchor_pool] BUILT catalogue=%s anchors=%s clusters=%s",
        total, len(out), len({a.cluster for a in out}),
    )
    return out


# ---------------------------------------------------------------------------
# Funnel
# ---------------------------------------------------------------------------


def funnel_phase(choices: int, config: Optional[TasteConfig] = None) -> FunnelPhase:
    config = resolve_config(config)
    if choices < config.funnel_focused_from:
        return FunnelPhase.BROAD
    if choices < config.funnel_precise_from:
        return FunnelPhase.FOCUSED
    return FunnelPhase.PRECISE


def preferred_clusters(w: Sequence[float], limit: int) -> List[str]:
    """Clusters of the strongest positively weighted genre slots, strongest first."""
    weighted = [
        (float(w[i]), name) for i, name in enumerate(GENRE_SLOTS) if i < len(w) and w[i] > 0
    ]
    weighted.sort(key=lambda pair: pair[0], reverse=True)
    clusters: List[str] = []
    for _, name in weighted[:limit]:
        cluster = SLOT_CLUSTERS.get(name, DEFAULT_CLUSTER)
        if cluster not in clusters:
            clusters.append(cluster)
    return clusters


def _in_cluster(anchors: List[Anchor], cluster: str) -> List[Anchor]:
    return [a for a in anchors if a.cluster == cluster]


def _by_knownness(anchors: List[Anchor]) -> List[Anchor]:
    return sorted(anchors, key=lambda a: a.knownness, reverse=True)


def anchors_for_phase(
    anchors: List[Anchor],
    phase: FunnelPhase,
    w: Sequence[float],
    config: Optional[TasteConfig] = None,
) -> List[CatalogueItem]:
    """Pair candidates for the funnel phase, given the learned weights w."""
    config = resolve_config(config)

    if phase is FunnelPhase.BROAD:
        picked = [
            a
            for cluster in BROAD_ORDER
            for a in _in_cluster(anchors, cluster)[: config.anchor_broad_per_cluster]
        ]
    elif phase is FunnelPhase.FOCUSED:
        clusters = preferred_clusters(w, config.anchor_top_genres)
        if not clusters:
            picked = anchors[: config.anchor_focused_fallback]
        else:
            picked = [
                a
                for cluster in clusters
                for a in _in_cluster(anchors, cluster)[: config.anchor_focused_per_cluster]
            ]
    else:
        clusters = preferred_clusters(w, min(2, config.anchor_top_genres))
        if not clusters:
            picked = _by_knownness(anchors)[: config.anchor_precise_fallback]
        else:
            picked = [
                a
                for cluster in clusters
                for a in _by_knownness(_in_cluster(anchors, cluster))[
                    : config.anchor_precise_per_cluster
                ]
            ]

    logger.debug("[anchor_pool] PHASE_POOL phase=%s size=%s", phase.value, len(picked))
    return [a.item for a in picked]
