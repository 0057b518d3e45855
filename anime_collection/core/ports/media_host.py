"""
Interface port pour l'hebergeur de medias externe.
"""

from abc import ABC, abstractmethod

from anime_collection.core.value_objects.catalog import ImageUpload


class IMediaHost(ABC):
    """
    Hebergeur des images de couverture.

    upload() leve ConfigurationError si les identifiants d'envoi manquent
    (avant tout appel reseau) et MediaUploadError en cas d'echec distant.
    """

    @abstractmethod
    async def upload(self, image: ImageUpload) -> str:
        """Envoie l'image et retourne son URL publique."""
        ...
