"""
Client Cloudinary pour l'envoi des images de couverture.

Implemente IMediaHost avec un envoi non signe (upload preset) vers
l'endpoint image/upload. L'URL securisee retournee par Cloudinary est
stockee telle quelle dans le champ imageUrl de l'entree.

Usage:
    host = CloudinaryMediaHost(cloud_name="demo", upload_preset="unsigned")
    url = await host.upload(ImageUpload("cover.jpg", "image/jpeg", data))
    await host.close()
"""

from typing import Optional

import httpx
from loguru import logger

from anime_collection.adapters.api.retry import RemoteBusyError, request_with_retry
from anime_collection.core.exceptions import ConfigurationError, MediaUploadError
from anime_collection.core.ports.media_host import IMediaHost
from anime_collection.core.value_objects.catalog import ImageUpload


class CloudinaryMediaHost(IMediaHost):
    """
    Hebergeur d'images Cloudinary.

    Attributes:
        CLOUDINARY_BASE_URL: URL de base de l'API d'envoi
    """

    CLOUDINARY_BASE_URL = "https://api.cloudinary.com/v1_1"

    def __init__(
        self,
        cloud_name: Optional[str],
        upload_preset: Optional[str],
        folder: Optional[str] = "anime-collection",
        timeout: float = 30.0,
        max_attempts: int = 4,
    ) -> None:
        """
        Args:
            cloud_name: Nom du cloud Cloudinary
            upload_preset: Preset d'envoi non signe
            folder: Dossier de destination (optionnel)
            timeout: Delai maximum de l'envoi en secondes
            max_attempts: Tentatives maximum tant que l'hebergeur est occupe
        """
        self._cloud_name = cloud_name
        self._upload_preset = upload_preset
        self._folder = folder
        self._timeout = timeout
        self._max_attempts = max_attempts
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def configured(self) -> bool:
        """True si le nom du cloud et le preset sont definis."""
        return bool(self._cloud_name and self._upload_preset)

    @property
    def upload_url(self) -> str:
        """Endpoint d'envoi d'image du cloud configure."""
        return f"{self.CLOUDINARY_BASE_URL}/{self._cloud_name}/image/upload"

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def upload(self, image: ImageUpload) -> str:
        """
        Envoie une image et retourne son URL securisee.

        Raises:
            ConfigurationError: Nom du cloud ou preset absent (aucun appel reseau)
            MediaUploadError: Echec de transport, statut d'erreur ou reponse sans URL
        """
        if not self.configured:
            raise ConfigurationError(
                "Cloudinary configuration is missing. Please set "
                "ANIMECOL_CLOUDINARY_CLOUD_NAME and ANIMECOL_CLOUDINARY_UPLOAD_PRESET."
            )

        data = {"upload_preset": self._upload_preset}
        if self._folder:
            data["folder"] = self._folder
        files = {"file": (image.filename, image.data, image.content_type)}

        logger.debug(f"Envoi Cloudinary: {image.filename} ({image.size} octets)")
        try:
            response = await request_with_retry(
                self._get_client(),
                "POST",
                self.upload_url,
                max_attempts=self._max_attempts,
                data=data,
                files=files,
            )
        except RemoteBusyError as e:
            logger.error(f"Cloudinary indisponible: {e}")
            raise MediaUploadError("The image host is busy, please try again later") from e
        except httpx.HTTPError as e:
            logger.error(f"Erreur de transport Cloudinary: {e}")
            raise MediaUploadError(f"Failed to upload image: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        error = payload.get("error") if isinstance(payload, dict) else None
        if not response.is_success or error:
            message = error.get("message") if isinstance(error, dict) else None
            message = message or f"HTTP {response.status_code}: {response.reason_phrase}"
            logger.error(f"Envoi Cloudinary refuse: {message}")
            raise MediaUploadError(message)

        secure_url = payload.get("secure_url")
        if not secure_url:
            raise MediaUploadError("Upload failed")
        logger.info(f"Image envoyee: {secure_url}")
        return secure_url

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
