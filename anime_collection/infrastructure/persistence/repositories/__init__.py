"""
Implementation SQLModel de la source d'enregistrements.

Le repository :
- Herite de IAnimeRepository (core/ports/repositories.py)
- Recoit une session SQLModel via injection de dependances
- Convertit entre l'entite AnimeEntry et le modele AnimeModel
"""

from anime_collection.infrastructure.persistence.repositories.anime_repository import (
    SQLModelAnimeRepository,
)

__all__ = ["SQLModelAnimeRepository"]
