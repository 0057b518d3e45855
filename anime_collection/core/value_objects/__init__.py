"""
Objets valeur immutables representant des concepts du domaine sans identite.

Exports :
- SortMode : Mode de tri des entrees non mises en avant
- ExportField : Champ activable dans le rapport d'export
- ImageUpload : Image a envoyer a l'hebergeur de medias
- ALL_LANGUAGES : Sentinelle "aucune restriction de langue"
"""

from anime_collection.core.value_objects.catalog import (
    ALL_LANGUAGES,
    ExportField,
    ImageUpload,
    SortMode,
)

__all__ = [
    "ALL_LANGUAGES",
    "ExportField",
    "ImageUpload",
    "SortMode",
]
