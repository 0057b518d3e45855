"""
Dépendances partagées de l'application web.

Fournit :
- les templates Jinja2 (avec le filtre season_label et la version)
- l'accès aux services du Container DI stocké dans app.state
- bound_to_view : exécution d'un chargement lié à la durée de vie de la requête
- require_admin : vérification du jeton d'administration
"""

import asyncio
import tomllib
from collections.abc import Awaitable
from pathlib import Path
from typing import TypeVar

from fastapi import HTTPException, Request, status
from fastapi.templating import Jinja2Templates
from loguru import logger

from ..core.exceptions import AuthenticationError
from ..services.admin_auth import AdminAuthService
from ..services.catalog import CatalogService
from ..services.catalog_pipeline import format_season_label
from ..utils.constants import ADMIN_COOKIE_NAME

_WEB_DIR = Path(__file__).parent
_PROJECT_ROOT = _WEB_DIR.parent.parent

# Intervalle de vérification de la déconnexion du client
_DISCONNECT_POLL_SECONDS = 0.25

T = TypeVar("T")

templates = Jinja2Templates(directory=_WEB_DIR / "templates")
templates.env.filters["season_label"] = format_season_label


def _read_version() -> str:
    """Version lue depuis pyproject.toml (absent d'une installation non éditable)."""
    try:
        with open(_PROJECT_ROOT / "pyproject.toml", "rb") as f:
            return tomllib.load(f)["project"]["version"]
    except (OSError, KeyError, tomllib.TOMLDecodeError):
        return "dev"


app_version = f"Anime Collection v{_read_version()}"
templates.env.globals["app_version"] = app_version


class ViewClosed(Exception):
    """Le client s'est déconnecté avant la fin du chargement."""


def get_catalog_service(request: Request) -> CatalogService:
    """Service catalogue construit par le Container de l'application."""
    return request.app.state.container.catalog_service()


def get_admin_auth(request: Request) -> AdminAuthService:
    """Service d'authentification admin (singleton du Container)."""
    return request.app.state.container.admin_auth_service()


async def bound_to_view(request: Request, awaitable: Awaitable[T]) -> T:
    """
    Attend un chargement en l'annulant si le client se déconnecte.

    Le chargement tourne dans une tâche dédiée ; tant qu'elle n'est pas
    terminée, la connexion est vérifiée périodiquement.

    Raises:
        ViewClosed: Si le client est parti avant la fin
    """
    task = asyncio.ensure_future(awaitable)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=_DISCONNECT_POLL_SECONDS)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.debug(f"Client déconnecté, chargement annulé: {request.url.path}")
                raise ViewClosed(request.url.path)
    finally:
        if not task.done():
            task.cancel()


async def require_admin(request: Request) -> None:
    """
    Dépendance des routes d'administration.

    Redirige vers /admin/login (303) si le jeton du cookie est absent,
    expiré ou invalide.
    """
    auth = get_admin_auth(request)
    try:
        auth.verify(request.cookies.get(ADMIN_COOKIE_NAME))
    except AuthenticationError:
        raise HTTPException(
            status_code=status.HTTP_303_SEE_OTHER,
            headers={"Location": "/admin/login"},
        )
