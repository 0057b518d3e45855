"""
Ports (interfaces abstraites) de la couche domaine.

Exports :
- IAnimeRepository : Source d'enregistrements du catalogue
- IMediaHost : Hebergeur des images de couverture
"""

from anime_collection.core.ports.media_host import IMediaHost
from anime_collection.core.ports.repositories import IAnimeRepository

__all__ = ["IAnimeRepository", "IMediaHost"]
