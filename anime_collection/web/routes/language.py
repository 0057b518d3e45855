"""
Route de la page d'une langue: toutes les entrées d'une langue.

Comparaison de langue insensible à la casse ; mises en avant d'abord,
le reste dans un ordre aléatoire renouvelé à chaque affichage.
"""

from fastapi import APIRouter, Request
from loguru import logger

from ...core.exceptions import ConfigurationError, RecordSourceError
from ...services.catalog_pipeline import arrange_language_page
from ..deps import bound_to_view, get_catalog_service, templates

router = APIRouter()


@router.get("/language/{lang}")
async def language_page(request: Request, lang: str):
    """Liste des animes d'une langue."""
    service = get_catalog_service(request)

    error = None
    try:
        entries = await bound_to_view(request, service.list_entries())
    except (ConfigurationError, RecordSourceError) as e:
        logger.warning(f"Page langue {lang} indisponible: {e}")
        entries = []
        error = str(e)

    return templates.TemplateResponse(
        request,
        "language.html",
        {
            "language": lang,
            "entries": arrange_language_page(entries, lang),
            "error": error,
        },
    )
