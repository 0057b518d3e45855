"""
Source d'enregistrements Firestore via l'API REST v1.

Implemente IAnimeRepository sur la collection "animes" :
- list_all : requete structuree triee par createdAt decroissant
- create : commit avec transformation serveur REQUEST_TIME sur createdAt
- update : PATCH avec updateMask (mise a jour partielle)
- delete : DELETE du document

Usage:
    repo = FirestoreAnimeRepository(project_id="my-project", api_key="xxx")
    entries = await repo.list_all()
    await repo.close()
"""

import uuid
from typing import Any, Optional

import httpx
from loguru import logger

from anime_collection.adapters.api.retry import RemoteBusyError, request_with_retry
from anime_collection.adapters.firestore.codec import document_to_entry, encode_fields
from anime_collection.core.entities.anime import AnimeEntry
from anime_collection.core.exceptions import (
    ConfigurationError,
    EntryNotFoundError,
    RecordSourceError,
)
from anime_collection.core.ports.repositories import IAnimeRepository


class FirestoreAnimeRepository(IAnimeRepository):
    """
    Repository Firestore pour les entrees du catalogue.

    Toute erreur de transport, reponse "occupe" persistante ou statut
    d'erreur est convertie en RecordSourceError. Un document introuvable
    donne None (get_by_id) ou EntryNotFoundError (update).

    Attributes:
        FIRESTORE_BASE_URL: URL de base de l'API REST Firestore v1
    """

    FIRESTORE_BASE_URL = "https://firestore.googleapis.com/v1/"

    def __init__(
        self,
        project_id: Optional[str],
        api_key: Optional[str] = None,
        database: str = "(default)",
        collection: str = "animes",
        timeout: float = 30.0,
        max_attempts: int = 4,
    ) -> None:
        """
        Initialise le client Firestore.

        Args:
            project_id: Identifiant du projet Firebase
            api_key: Cle d'API web Firebase (optionnelle selon les regles de securite)
            database: Nom de la base Firestore
            collection: Collection contenant les animes
            timeout: Delai maximum d'une requete en secondes
            max_attempts: Tentatives maximum tant que le service est occupe
        """
        self._project_id = project_id
        self._api_key = api_key
        self._database = database
        self._collection = collection
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def database_path(self) -> str:
        """Chemin 'projects/<p>/databases/<d>'."""
        return f"projects/{self._project_id}/databases/{self._database}"

    @property
    def documents_path(self) -> str:
        """Chemin de la racine des documents."""
        return f"{self.database_path}/documents"

    def _document_path(self, entry_id: str) -> str:
        return f"{self.documents_path}/{self._collection}/{entry_id}"

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Raises:
            ConfigurationError: Si l'identifiant de projet est absent
        """
        if not self._project_id:
            raise ConfigurationError(
                "Firestore configuration is missing. Set ANIMECOL_FIRESTORE_PROJECT_ID."
            )
        if self._client is None or self._client.is_closed:
            params = {"key": self._api_key} if self._api_key else {}
            self._client = httpx.AsyncClient(
                base_url=self.FIRESTORE_BASE_URL,
                headers={"Accept": "application/json"},
                params=params,
                timeout=self._timeout,
            )
        return self._client

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Execute une requete et convertit les echecs de transport en RecordSourceError."""
        client = self._get_client()
        try:
            return await request_with_retry(
                client, method, url, max_attempts=self._max_attempts, **kwargs
            )
        except RemoteBusyError as e:
            logger.error(f"Firestore indisponible: {e}")
            raise RecordSourceError("The database is busy, please try again later") from e
        except httpx.HTTPError as e:
            logger.error(f"Erreur de transport Firestore ({method} {url}): {e}")
            raise RecordSourceError(f"Could not reach the database: {e}") from e

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        """Convertit un statut d'erreur en RecordSourceError avec le message distant."""
        if response.is_success:
            return
        try:
            message = response.json()["error"]["message"]
        except (ValueError, KeyError, TypeError):
            message = response.reason_phrase
        logger.error(f"Erreur Firestore HTTP {response.status_code}: {message}")
        raise RecordSourceError(f"Database error ({response.status_code}): {message}")

    async def list_all(self) -> list[AnimeEntry]:
        """Instantane complet, trie par createdAt decroissant cote serveur."""
        body = {
            "structuredQuery": {
                "from": [{"collectionId": self._collection}],
                "orderBy": [
                    {"field": {"fieldPath": "createdAt"}, "direction": "DESCENDING"}
                ],
            }
        }
        response = await self._request("POST", f"{self.documents_path}:runQuery", json=body)
        self._raise_for_status(response)

        # Chaque element porte un document, sauf l'element de fin (readTime seul)
        return [
            document_to_entry(item["document"])
            for item in response.json()
            if "document" in item
        ]

    async def get_by_id(self, entry_id: str) -> Optional[AnimeEntry]:
        """Recupere un document, None s'il n'existe pas."""
        response = await self._request("GET", self._document_path(entry_id))
        if response.status_code == 404:
            return None
        self._raise_for_status(response)
        return document_to_entry(response.json())

    async def create(self, fields: dict[str, Any]) -> str:
        """Cree un document dont createdAt est l'heure du serveur."""
        entry_id = uuid.uuid4().hex[:20]
        body = {
            "writes": [
                {
                    "update": {
                        "name": self._document_path(entry_id),
                        "fields": encode_fields(fields),
                    },
                    "updateTransforms": [
                        {"fieldPath": "createdAt", "setToServerValue": "REQUEST_TIME"}
                    ],
                    "currentDocument": {"exists": False},
                }
            ]
        }
        response = await self._request("POST", f"{self.documents_path}:commit", json=body)
        self._raise_for_status(response)
        logger.debug(f"Document Firestore cree: {entry_id}")
        return entry_id

    async def update(self, entry_id: str, fields: dict[str, Any]) -> None:
        """Met a jour uniquement les champs fournis d'un document existant."""
        params = [("updateMask.fieldPaths", key) for key in fields]
        params.append(("currentDocument.exists", "true"))
        response = await self._request(
            "PATCH",
            self._document_path(entry_id),
            params=params,
            json={"fields": encode_fields(fields)},
        )
        if response.status_code == 404:
            raise EntryNotFoundError(entry_id)
        self._raise_for_status(response)

    async def delete(self, entry_id: str) -> None:
        """Supprime un document (sans erreur s'il n'existe deja plus)."""
        response = await self._request("DELETE", self._document_path(entry_id))
        self._raise_for_status(response)

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
