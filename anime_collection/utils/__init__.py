"""
Utilitaires et constantes pour Anime Collection.
"""

from anime_collection.utils.constants import (
    ADMIN_COOKIE_NAME,
    LANGUAGE_CHOICES,
    MAX_IMAGE_SIZE_BYTES,
)

__all__ = [
    "ADMIN_COOKIE_NAME",
    "LANGUAGE_CHOICES",
    "MAX_IMAGE_SIZE_BYTES",
]
