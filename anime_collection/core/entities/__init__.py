"""
Business entities representing core domain concepts.

Exports:
- AnimeEntry: A catalog entry (one anime) as stored by the record source
"""

from anime_collection.core.entities.anime import AnimeEntry

__all__ = ["AnimeEntry"]
