"""
Configuration de la base de donnees SQLite locale.

Ce module fournit :
- Engine SQLite partage entre threads (serveur web et CLI)
- Session factory
- Fonction d'initialisation des tables

La base est configuree via ANIMECOL_DATABASE_URL (defaut: sqlite:///anime_collection.db).
"""

from collections.abc import Generator
from pathlib import Path
from typing import Optional

from sqlalchemy import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

# Engine global - initialise lors du premier appel a get_engine()
_engine: Optional[Engine] = None


def create_sqlite_engine(database_url: str) -> Engine:
    """
    Cree un engine SQLite.

    Une base en memoire partage une connexion unique (StaticPool), sinon
    chaque session en verrait une vide.
    """
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    if database_url.startswith("sqlite:///"):
        db_path = Path(database_url.replace("sqlite:///", ""))
        db_path.parent.mkdir(exist_ok=True, parents=True)

    return create_engine(
        database_url,
        echo=False,
        connect_args={"check_same_thread": False},
    )


def get_engine() -> Engine:
    """Retourne l'engine de l'application, en le creant si necessaire."""
    global _engine
    if _engine is None:
        from anime_collection.config import Settings

        _engine = create_sqlite_engine(Settings().database_url)
    return _engine


def set_engine(engine: Optional[Engine]) -> None:
    """Remplace l'engine global (None = recreation au prochain appel)."""
    global _engine
    _engine = engine


def get_session() -> Generator[Session, None, None]:
    """
    Generateur de session SQLModel.

    Utilisation :
        session = next(get_session())
        try:
            # operations
        finally:
            session.close()
    """
    with Session(get_engine()) as session:
        yield session


def init_db() -> None:
    """
    Cree les tables si elles n'existent pas.

    Doit etre appelee une fois au demarrage quand la source est SQLite.
    """
    # Import des modeles pour enregistrer leurs metadonnees
    from anime_collection.infrastructure.persistence import models  # noqa: F401

    SQLModel.metadata.create_all(get_engine())
