"""
Application FastAPI d'Anime Collection.

Initialise l'application web avec le Container DI, configure les fichiers
statiques et monte les routes publiques et d'administration.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import Response
from fastapi.staticfiles import StaticFiles
from loguru import logger

from ..container import Container
from ..logging_config import configure_logging_from_settings
from .deps import ViewClosed
from .routes.admin import router as admin_router
from .routes.home import router as home_router
from .routes.language import router as language_router

_WEB_DIR = Path(__file__).parent

# Statut non standard (nginx) : client parti avant la réponse
_CLIENT_CLOSED_REQUEST = 499


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prépare la source d'enregistrements au démarrage et ferme les clients HTTP à l'arrêt."""
    container: Container = app.state.container
    settings = container.config()
    configure_logging_from_settings(settings)

    if settings.record_source == "sqlite":
        container.database.init()
    logger.info(f"Anime Collection démarré (source: {settings.record_source})")

    yield

    if settings.record_source == "firestore":
        await container.firestore_repository().close()
    await container.media_host().close()
    container.shutdown_resources()


async def _view_closed_handler(request: Request, exc: ViewClosed) -> Response:
    """Réponse vide pour un client déjà déconnecté."""
    return Response(status_code=_CLIENT_CLOSED_REQUEST)


def create_app(container: Optional[Container] = None) -> FastAPI:
    """
    Construit l'application.

    Args:
        container: Container DI à utiliser (un nouveau par défaut)
    """
    application = FastAPI(title="Anime Collection", lifespan=lifespan)
    application.state.container = container or Container()

    # Fichiers statiques
    application.mount("/static", StaticFiles(directory=_WEB_DIR / "static"), name="static")

    # Routes
    application.include_router(home_router)
    application.include_router(language_router)
    application.include_router(admin_router)

    application.add_exception_handler(ViewClosed, _view_closed_handler)
    return application


app = create_app()
