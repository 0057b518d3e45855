"""
Objets valeur du catalogue : modes de tri, champs d'export, images a envoyer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

# Valeur du filtre de langue signifiant "toutes les langues"
ALL_LANGUAGES = "all"


class SortMode(Enum):
    """Ordre applique aux entrees non mises en avant.

    Valeurs:
        NEWEST: Plus recentes d'abord (created_at decroissant)
        EPISODES: Plus d'episodes d'abord (total_episodes decroissant)
        RANDOM: Melange aleatoire a chaque appel
    """

    NEWEST = "newest"
    EPISODES = "episodes"
    RANDOM = "random"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortMode":
        """Convertit une valeur de formulaire, RANDOM si inconnue ou absente."""
        try:
            return cls(value)
        except ValueError:
            return cls.RANDOM


class ExportField(Enum):
    """Champs pouvant etre actives dans le rapport d'export.

    La langue n'en fait pas partie : elle sert d'en-tete de section.
    """

    NAME = "name"
    SEASON = "season"
    EPISODES = "episodes"
    FEATURED_RANK = "featured_rank"
    IMAGE_URL = "image_url"
    CREATED_AT = "created_at"

    @property
    def label(self) -> str:
        """Libelle affiche dans le rapport et le formulaire d'export."""
        return _EXPORT_LABELS[self]


_EXPORT_LABELS = {
    ExportField.NAME: "Name",
    ExportField.SEASON: "Season",
    ExportField.EPISODES: "Episodes",
    ExportField.FEATURED_RANK: "Featured rank",
    ExportField.IMAGE_URL: "Image",
    ExportField.CREATED_AT: "Added",
}


@dataclass(frozen=True)
class ImageUpload:
    """
    Image choisie dans le formulaire de creation.

    Attributs:
        filename: Nom du fichier d'origine
        content_type: Type MIME declare par le navigateur
        data: Contenu binaire
    """

    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        """Taille en octets."""
        return len(self.data)
