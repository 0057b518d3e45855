"""
Interface port pour la source d'enregistrements du catalogue.

La persistance est deleguee a une base documentaire externe. Les
implementations (adaptateurs) fournissent le mecanisme concret
(Firestore via REST, SQLite via SQLModel pour le developpement local).
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from anime_collection.core.entities.anime import AnimeEntry


class IAnimeRepository(ABC):
    """
    Interface de stockage des entrees du catalogue.

    Les champs passes a create() et update() utilisent les noms du document
    source (name, language, season, totalEpisodes, imageUrl, featuredRank).
    Toute methode peut lever RecordSourceError en cas d'echec distant ;
    aucune relance n'est faite a ce niveau.
    """

    @abstractmethod
    async def list_all(self) -> list[AnimeEntry]:
        """Instantane complet du catalogue, created_at decroissant."""
        ...

    @abstractmethod
    async def get_by_id(self, entry_id: str) -> Optional[AnimeEntry]:
        """Recupere une entree par son identifiant."""
        ...

    @abstractmethod
    async def create(self, fields: dict[str, Any]) -> str:
        """Cree une entree et retourne son identifiant. created_at est attribue par la source."""
        ...

    @abstractmethod
    async def update(self, entry_id: str, fields: dict[str, Any]) -> None:
        """Met a jour partiellement une entree existante."""
        ...

    @abstractmethod
    async def delete(self, entry_id: str) -> None:
        """Supprime une entree."""
        ...
