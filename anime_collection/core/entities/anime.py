"""
Catalog entry entity.

An AnimeEntry is a read-only snapshot of one document of the external
record source. The application never mutates entries in place: updates go
through the record source and the snapshot is fetched again.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

FEATURED_RANK_MIN = 1
FEATURED_RANK_MAX = 10


@dataclass(frozen=True)
class AnimeEntry:
    """
    One anime of the catalog.

    Attributes:
        id: Opaque identifier assigned by the record source
        name: Display name (non-empty for well-formed records)
        language: Classification used for filtering and grouping, may be absent
        season: Free-form season label ("2", "1-3", "Spring 2024"), display only
        total_episodes: Episode count, used as a sort key
        image_url: URL of the cover hosted by the media host
        created_at: Creation timestamp assigned by the record source
        featured_rank: Display priority; only integers in [1, 10] count
    """

    id: str
    name: str = ""
    language: Optional[str] = None
    season: Optional[str] = None
    total_episodes: Optional[int] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    featured_rank: Optional[Union[int, float]] = None

    @property
    def is_featured(self) -> bool:
        """True when featured_rank is an integer within [1, 10]."""
        rank = self.featured_rank
        if isinstance(rank, bool) or not isinstance(rank, int):
            return False
        return FEATURED_RANK_MIN <= rank <= FEATURED_RANK_MAX
