"""
Module de persistance SQLite locale.

- database.py : Engine SQLite, session factory, initialisation des tables
- models.py : Modele SQLModel de la table animes

Le modele est distinct de l'entite de domaine AnimeEntry ; la conversion
se fait dans le repository.

Usage:
    from anime_collection.infrastructure.persistence import init_db, get_session

    init_db()
    session = next(get_session())
"""

from anime_collection.infrastructure.persistence.database import (
    get_engine,
    get_session,
    init_db,
)
from anime_collection.infrastructure.persistence.models import AnimeModel

__all__ = ["AnimeModel", "get_engine", "get_session", "init_db"]
