"""
Fixtures pytest partagees pour les tests Anime Collection.

Ce module contient les fixtures communes utilisees dans les tests:
- make_entry : fabrique d'AnimeEntry avec valeurs par defaut
- InMemoryAnimeRepository : source d'enregistrements en memoire
- Settings de test sans fichier .env ni fichier de log
"""

from datetime import UTC, datetime, timedelta
from typing import Any, Optional
from unittest.mock import AsyncMock

import pytest

from anime_collection.config import Settings
from anime_collection.core.entities.anime import AnimeEntry
from anime_collection.core.exceptions import EntryNotFoundError
from anime_collection.core.ports.media_host import IMediaHost
from anime_collection.core.ports.repositories import IAnimeRepository

BASE_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=UTC)

# Nom du champ source -> attribut de l'entite
_FIELD_ATTRS = {
    "name": "name",
    "language": "language",
    "season": "season",
    "totalEpisodes": "total_episodes",
    "imageUrl": "image_url",
    "featuredRank": "featured_rank",
}


def make_entry(entry_id: str, **overrides: Any) -> AnimeEntry:
    """Construit une entree de test (nom et langue par defaut)."""
    values = {
        "name": f"Anime {entry_id}",
        "language": "Japanese",
        "season": None,
        "total_episodes": None,
        "image_url": f"https://res.cloudinary.com/demo/{entry_id}.jpg",
        "created_at": None,
        "featured_rank": None,
    }
    values.update(overrides)
    return AnimeEntry(id=entry_id, **values)


class InMemoryAnimeRepository(IAnimeRepository):
    """Source d'enregistrements en memoire, created_at decroissant comme Firestore."""

    def __init__(self, entries: Optional[list[AnimeEntry]] = None) -> None:
        self.entries: dict[str, AnimeEntry] = {e.id: e for e in entries or []}
        self._counter = 0

    async def list_all(self) -> list[AnimeEntry]:
        def key(entry: AnimeEntry) -> float:
            return entry.created_at.timestamp() if entry.created_at else float("-inf")

        return sorted(self.entries.values(), key=key, reverse=True)

    async def get_by_id(self, entry_id: str) -> Optional[AnimeEntry]:
        return self.entries.get(entry_id)

    async def create(self, fields: dict[str, Any]) -> str:
        self._counter += 1
        entry_id = f"new{self._counter}"
        values = {_FIELD_ATTRS[k]: v for k, v in fields.items()}
        self.entries[entry_id] = AnimeEntry(
            id=entry_id,
            created_at=BASE_TIME + timedelta(days=self._counter),
            **values,
        )
        return entry_id

    async def update(self, entry_id: str, fields: dict[str, Any]) -> None:
        if entry_id not in self.entries:
            raise EntryNotFoundError(entry_id)
        current = self.entries[entry_id]
        values = {
            attr: getattr(current, attr)
            for attr in ("name", "language", "season", "total_episodes", "image_url", "featured_rank")
        }
        values.update({_FIELD_ATTRS[k]: v for k, v in fields.items()})
        self.entries[entry_id] = AnimeEntry(id=entry_id, created_at=current.created_at, **values)

    async def delete(self, entry_id: str) -> None:
        self.entries.pop(entry_id, None)


@pytest.fixture
def sample_entries() -> list[AnimeEntry]:
    """Petit catalogue multi-langues avec deux entrees mises en avant."""
    return [
        make_entry(
            "naruto",
            name="Naruto Shippuden",
            season="1-3",
            total_episodes=500,
            created_at=BASE_TIME,
        ),
        make_entry(
            "onepiece",
            name="One Piece",
            total_episodes=1100,
            created_at=BASE_TIME + timedelta(days=1),
            featured_rank=2,
        ),
        make_entry(
            "solo",
            name="Solo Leveling",
            language="Korean",
            season="1",
            total_episodes=12,
            created_at=BASE_TIME + timedelta(days=2),
        ),
        make_entry(
            "frieren",
            name="Frieren",
            total_episodes=28,
            created_at=BASE_TIME + timedelta(days=3),
            featured_rank=1,
        ),
        make_entry(
            "link",
            name="Link Click",
            language="Chinese",
            season="Spring 2024",
            total_episodes=11,
            created_at=BASE_TIME + timedelta(days=4),
        ),
    ]


@pytest.fixture
def repository(sample_entries: list[AnimeEntry]) -> InMemoryAnimeRepository:
    """Source en memoire pre-remplie avec sample_entries."""
    return InMemoryAnimeRepository(sample_entries)


@pytest.fixture
def media_host() -> AsyncMock:
    """Mock de IMediaHost retournant une URL Cloudinary."""
    host = AsyncMock(spec=IMediaHost)
    host.upload.return_value = "https://res.cloudinary.com/demo/image/upload/cover.jpg"
    return host


@pytest.fixture
def test_settings() -> Settings:
    """Settings isoles : SQLite en memoire, console seule, admin active."""
    return Settings(
        _env_file=None,
        record_source="sqlite",
        database_url="sqlite://",
        admin_password="s3cret-test",
        secret_key="test-secret-key-with-enough-length-for-hs256",
        cloudinary_cloud_name="demo",
        cloudinary_upload_preset="unsigned",
        log_file="logs/test.log",
    )
