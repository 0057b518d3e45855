"""
Route de la page d'accueil: galerie groupée par langue.

Recherche par nom, filtre par langue et tri des entrées non mises en avant ;
les entrées mises en avant (rang 1-10) sont toujours en tête de leur groupe.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import APIRouter, Request
from loguru import logger

from ...core.exceptions import ConfigurationError, RecordSourceError
from ...core.value_objects.catalog import ALL_LANGUAGES, SortMode
from ...services.catalog_pipeline import arrange_home, distinct_languages
from ..deps import bound_to_view, get_catalog_service, templates

router = APIRouter()


@dataclass(frozen=True)
class GalleryQuery:
    """État de la vue galerie, reconstruit à chaque requête depuis l'URL."""

    search: str = ""
    language: str = ALL_LANGUAGES
    sort: SortMode = SortMode.NEWEST

    @classmethod
    def from_params(
        cls, q: Optional[str], language: Optional[str], sort: Optional[str]
    ) -> "GalleryQuery":
        """Construit l'état depuis les paramètres (le formulaire envoie "" quand vide)."""
        return cls(
            search=(q or "").strip(),
            language=language or ALL_LANGUAGES,
            sort=SortMode.parse(sort) if sort else SortMode.NEWEST,
        )


@router.get("/")
async def home(
    request: Request,
    q: Optional[str] = None,
    language: Optional[str] = None,
    sort: Optional[str] = None,
):
    """Galerie publique groupée par langue."""
    query = GalleryQuery.from_params(q, language, sort)
    service = get_catalog_service(request)

    error = None
    try:
        entries = await bound_to_view(request, service.list_entries())
    except (ConfigurationError, RecordSourceError) as e:
        logger.warning(f"Galerie indisponible: {e}")
        entries = []
        error = str(e)

    context = {
        "groups": arrange_home(entries, query.search, query.language, query.sort),
        "languages": distinct_languages(entries),
        "query": query,
        "sort_modes": [SortMode.NEWEST, SortMode.EPISODES, SortMode.RANDOM],
        "error": error,
    }

    # Requête HTMX : seulement le bloc des groupes
    if request.headers.get("HX-Request"):
        response = templates.TemplateResponse(request, "home/_content.html", context)
    else:
        response = templates.TemplateResponse(request, "home/index.html", context)
    response.headers["Vary"] = "HX-Request"
    return response
