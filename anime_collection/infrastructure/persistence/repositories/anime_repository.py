"""
Implementation SQLModel du repository des animes.

Implemente IAnimeRepository sur la table animes de la base SQLite locale.
Les champs recus utilisent les noms des documents source (totalEpisodes,
imageUrl, featuredRank) et sont convertis vers les colonnes du modele.
"""

import asyncio
import uuid
from datetime import UTC
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, col, select

from anime_collection.core.entities.anime import AnimeEntry
from anime_collection.core.exceptions import EntryNotFoundError, RecordSourceError
from anime_collection.core.ports.repositories import IAnimeRepository
from anime_collection.infrastructure.persistence.models import AnimeModel

# Nom du champ source -> colonne du modele
_FIELD_COLUMNS = {
    "name": "name",
    "language": "language",
    "season": "season",
    "totalEpisodes": "total_episodes",
    "imageUrl": "image_url",
    "featuredRank": "featured_rank",
}


class SQLModelAnimeRepository(IAnimeRepository):
    """
    Repository SQLModel pour les animes.

    Les erreurs SQLAlchemy sont converties en RecordSourceError, comme les
    erreurs de transport de la source Firestore.
    """

    def __init__(self, session: Session) -> None:
        """
        Initialise le repository avec une session SQLModel.

        Args :
            session : Session SQLModel active pour les operations DB
        """
        self._session = session

    def _to_entity(self, model: AnimeModel) -> AnimeEntry:
        """Convertit un modele DB en entite domaine (horodatage rendu aware UTC)."""
        created_at = model.created_at
        if created_at is not None and created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=UTC)
        return AnimeEntry(
            id=model.id,
            name=model.name,
            language=model.language,
            season=model.season,
            total_episodes=model.total_episodes,
            image_url=model.image_url,
            created_at=created_at,
            featured_rank=model.featured_rank,
        )

    @staticmethod
    def _to_columns(fields: dict[str, Any]) -> dict[str, Any]:
        """Convertit les noms de champs source en noms de colonnes."""
        return {_FIELD_COLUMNS[key]: value for key, value in fields.items() if key in _FIELD_COLUMNS}

    # Appels de session bloquants, executes hors de la boucle d'evenements

    async def list_all(self) -> list[AnimeEntry]:
        """Toutes les lignes, created_at decroissant."""
        return await asyncio.to_thread(self._list_all)

    async def get_by_id(self, entry_id: str) -> Optional[AnimeEntry]:
        """Recupere un anime par son identifiant."""
        return await asyncio.to_thread(self._get_by_id, entry_id)

    async def create(self, fields: dict[str, Any]) -> str:
        """Insere une ligne ; l'identifiant et created_at sont attribues ici."""
        return await asyncio.to_thread(self._create, fields)

    async def update(self, entry_id: str, fields: dict[str, Any]) -> None:
        """Met a jour les colonnes fournies."""
        await asyncio.to_thread(self._update, entry_id, fields)

    async def delete(self, entry_id: str) -> None:
        """Supprime une ligne (sans erreur si elle n'existe plus)."""
        await asyncio.to_thread(self._delete, entry_id)

    def _list_all(self) -> list[AnimeEntry]:
        statement = select(AnimeModel).order_by(col(AnimeModel.created_at).desc())
        try:
            models = self._session.exec(statement).all()
        except SQLAlchemyError as e:
            raise RecordSourceError(f"Could not read the database: {e}") from e
        return [self._to_entity(model) for model in models]

    def _get_by_id(self, entry_id: str) -> Optional[AnimeEntry]:
        model = self._session.get(AnimeModel, entry_id)
        if model:
            return self._to_entity(model)
        return None

    def _create(self, fields: dict[str, Any]) -> str:
        model = AnimeModel(id=uuid.uuid4().hex[:20], **self._to_columns(fields))
        try:
            self._session.add(model)
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            raise RecordSourceError(f"Could not save the anime: {e}") from e
        return model.id

    def _update(self, entry_id: str, fields: dict[str, Any]) -> None:
        model = self._session.get(AnimeModel, entry_id)
        if model is None:
            raise EntryNotFoundError(entry_id)
        for column, value in self._to_columns(fields).items():
            setattr(model, column, value)
        try:
            self._session.add(model)
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            raise RecordSourceError(f"Could not update the anime: {e}") from e

    def _delete(self, entry_id: str) -> None:
        model = self._session.get(AnimeModel, entry_id)
        if model is None:
            return
        try:
            self._session.delete(model)
            self._session.commit()
        except SQLAlchemyError as e:
            self._session.rollback()
            raise RecordSourceError(f"Could not delete the anime: {e}") from e
