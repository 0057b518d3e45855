"""
Adaptateur Firestore (API REST v1) de la source d'enregistrements.
"""

from anime_collection.adapters.firestore.repository import FirestoreAnimeRepository

__all__ = ["FirestoreAnimeRepository"]
