"""
Vote explanation — what the winning picks had in common.

Used by the recommendation response to surface rationale text such as
"You kept picking Action and Thriller from the 2010s".
"""

from collections import Counter
from typing import Dict, Iterable, List

from ...models.config import TasteConfig
from ...models.item import CatalogueItem
from ...models.scoring import CountEntry, EraEntry, Explanation


def _top(counter: Counter, n: int) -> List[CountEntry]:
    # Counter.most_common keeps first-seen order among equal counts
    return [CountEntry(name=name, count=count) for name, count in counter.most_common(n)]


def build_explanation(
    winner_ids: Iterable[str],
    items_by_id: Dict[str, CatalogueItem],
    config: TasteConfig,
) -> Explanation:
    """
    Count genres, actors, directors, and era buckets across winning items.

    Winner ids no longer in the catalogue are ignored.
    """
    genres: Counter = Counter()
    actors: Counter = Counter()
    directors: Counter = Counter()
    eras: Counter = Counter()

    for winner_id in winner_ids:
        item = items_by_id.get(winner_id)
        if item is None:
            continue
        genres.update(item.genres)
        actors.update(a for a in item.actors if a)
        if item.director:
            directors[item.director] += 1
        if item.era_bucket:
            eras[item.era_bucket] += 1

    top_era = None
    if eras:
        bucket, count = eras.most_common(1)[0]
        top_era = EraEntry(bucket=bucket, count=count)

    return Explanation(
        top_genres=_top(genres, config.explanation_top_genres),
        top_actors=_top(actors, config.explanation_top_actors),
        top_directors=_top(directors, config.explanation_top_directors),
        top_era=top_era,
    )
