"""
Politique de relance des clients HTTP externes.

Seules les reponses "service occupe" sont relancees (429 Too Many Requests,
503 Service Unavailable), avec un backoff exponentiel et du jitter. Toute
autre erreur remonte immediatement ; la couche application ne relance
jamais d'elle-meme.

Usage:
    response = await request_with_retry(client, "POST", ":runQuery", json=body)
"""

from typing import Optional

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

# Statuts consideres comme transitoires
RETRYABLE_STATUS_CODES = frozenset({429, 503})


class RemoteBusyError(Exception):
    """
    Le service distant demande de patienter (429 ou 503).

    Attributes:
        status_code: Statut HTTP recu
        retry_after: Secondes indiquees par l'en-tete Retry-After, ou None
    """

    def __init__(self, status_code: int, retry_after: Optional[int] = None) -> None:
        self.status_code = status_code
        self.retry_after = retry_after
        super().__init__(f"Remote busy (HTTP {status_code}). Retry after: {retry_after}s")


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    """Lit un en-tete Retry-After en secondes (les dates HTTP sont ignorees)."""
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def with_retry(max_attempts: int = 4, max_wait: int = 30):
    """
    Decorateur relancant une coroutine sur RemoteBusyError.

    Args:
        max_attempts: Nombre maximum de tentatives
        max_wait: Delai maximum entre deux tentatives en secondes
    """
    return retry(
        retry=retry_if_exception_type(RemoteBusyError),
        wait=wait_random_exponential(multiplier=1, min=1, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        reraise=True,
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 4,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP, relancee tant que le service est occupe.

    Args:
        client: Client httpx async
        method: Methode HTTP
        url: URL (relative a base_url du client ou absolue)
        max_attempts: Nombre maximum de tentatives
        **kwargs: Arguments passes a client.request()

    Returns:
        La reponse, quel que soit son statut hors 429/503

    Raises:
        RemoteBusyError: Service toujours occupe apres max_attempts
        httpx.HTTPError: Erreur de transport
    """

    @with_retry(max_attempts=max_attempts)
    async def _do_request() -> httpx.Response:
        response = await client.request(method, url, **kwargs)
        if response.status_code in RETRYABLE_STATUS_CODES:
            raise RemoteBusyError(
                response.status_code,
                _parse_retry_after(response.headers.get("Retry-After")),
            )
        return response

    return await _do_request()
