"""
Modele SQLModel de la source d'enregistrements locale.

Reproduit la forme des documents Firestore de la collection "animes" :
- animes : une ligne par anime, identifiant texte attribue a la creation

Le modele est distinct de l'entite AnimeEntry (core/entities/) selon
l'architecture hexagonale.
"""

from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(UTC)


class AnimeModel(SQLModel, table=True):
    """
    Modele representant un anime dans la base locale.

    created_at est attribue par la base a l'insertion, comme l'horodatage
    serveur de Firestore.
    """

    __tablename__ = "animes"

    id: str = Field(primary_key=True)
    name: str = Field(index=True)
    language: str | None = Field(default=None, index=True)
    season: str | None = None  # ex: "2", "1-3", "Spring 2024"
    total_episodes: int | None = None
    image_url: str | None = None
    created_at: datetime | None = Field(default_factory=_utcnow, index=True)
    featured_rank: int | None = None  # Mise en avant si 1-10
