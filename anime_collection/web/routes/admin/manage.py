"""
Routes de gestion du catalogue : liste, ajout, édition, rang, suppression.

Chaque action est une soumission de formulaire suivie d'une redirection
(303) vers la liste, avec un paramètre status ou error affiché en bandeau.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Request, status
from fastapi.responses import RedirectResponse
from loguru import logger
from starlette.datastructures import UploadFile

from ....core.exceptions import (
    CatalogValidationError,
    ConfigurationError,
    EntryNotFoundError,
    MediaUploadError,
    RecordSourceError,
)
from ....core.value_objects.catalog import ExportField, ImageUpload
from ....services.catalog import AnimeDraft
from ....services.catalog_pipeline import filter_entries
from ....services.export import DEFAULT_EXPORT_FIELDS
from ....utils.constants import LANGUAGE_CHOICES
from ...deps import bound_to_view, get_catalog_service, templates

router = APIRouter(prefix="/admin")

# Messages des bandeaux de confirmation
_STATUS_MESSAGES = {
    "created": "Anime added successfully!",
    "updated": "Anime updated successfully!",
    "ranked": "Featured rank updated",
    "deleted": "Anime deleted",
}


def _redirect_to_list(**params: str) -> RedirectResponse:
    """Redirection 303 vers la liste d'administration."""
    url = "/admin"
    if params:
        url += "?" + urlencode(params)
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


def _draft_from_form(form) -> AnimeDraft:
    """Reconstruit la saisie brute depuis les champs du formulaire."""
    return AnimeDraft(
        name=str(form.get("name", "")),
        language=str(form.get("language", "")),
        season=str(form.get("season", "")),
        total_episodes=str(form.get("total_episodes", "")),
        featured_rank=str(form.get("featured_rank", "")),
    )


async def _image_from_form(form) -> Optional[ImageUpload]:
    """Lit le fichier image du formulaire (None si aucun fichier choisi)."""
    upload = form.get("image")
    if not isinstance(upload, UploadFile) or not upload.filename:
        return None
    data = await upload.read()
    return ImageUpload(
        filename=upload.filename,
        content_type=upload.content_type or "",
        data=data,
    )


def _form_context(request: Request, draft: AnimeDraft, **extra) -> dict:
    """Contexte commun des formulaires d'ajout et d'édition."""
    settings = request.app.state.container.config()
    return {
        "draft": draft,
        "languages": LANGUAGE_CHOICES,
        "media_host_enabled": settings.media_host_enabled,
        "error": None,
        "error_field": None,
        **extra,
    }


def _error_status(error: Exception) -> int:
    """Code HTTP associé à une erreur de formulaire."""
    if isinstance(error, CatalogValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(error, ConfigurationError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    return status.HTTP_502_BAD_GATEWAY


@dataclass(frozen=True)
class AdminQuery:
    """État de la liste d'administration, reconstruit à chaque requête."""

    search: str = ""
    notice: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_params(cls, params) -> "AdminQuery":
        """Construit l'état depuis les paramètres q, status et error."""
        return cls(
            search=(params.get("q") or "").strip(),
            notice=_STATUS_MESSAGES.get(params.get("status") or ""),
            error=params.get("error") or None,
        )


@router.get("")
async def admin_index(request: Request):
    """Liste d'administration avec recherche par nom."""
    query = AdminQuery.from_params(request.query_params)
    service = get_catalog_service(request)
    settings = request.app.state.container.config()

    error = query.error
    try:
        entries = await bound_to_view(request, service.list_entries())
    except (ConfigurationError, RecordSourceError) as e:
        logger.warning(f"Liste d'administration indisponible: {e}")
        entries = []
        error = error or str(e)

    return templates.TemplateResponse(
        request,
        "admin/index.html",
        {
            "entries": filter_entries(entries, query.search),
            "total": len(entries),
            "search": query.search,
            "notice": query.notice,
            "error": error,
            "export_fields": list(ExportField),
            "default_export_fields": DEFAULT_EXPORT_FIELDS,
            "media_host_enabled": settings.media_host_enabled,
        },
    )


@router.get("/animes/new")
async def new_anime_form(request: Request):
    """Formulaire d'ajout."""
    return templates.TemplateResponse(
        request, "admin/form.html", _form_context(request, AnimeDraft())
    )


@router.post("/animes")
async def create_anime(request: Request):
    """Ajoute un anime : validation, envoi de l'image puis enregistrement."""
    form = await request.form()
    draft = _draft_from_form(form)
    image = await _image_from_form(form)
    service = get_catalog_service(request)

    try:
        await service.create_entry(draft, image)
    except (CatalogValidationError, ConfigurationError, MediaUploadError, RecordSourceError) as e:
        logger.warning(f"Ajout refusé: {e}")
        return templates.TemplateResponse(
            request,
            "admin/form.html",
            _form_context(
                request,
                draft,
                error=str(e),
                error_field=getattr(e, "field", None),
            ),
            status_code=_error_status(e),
        )

    return _redirect_to_list(status="created")


@router.get("/animes/{entry_id}/edit")
async def edit_anime_form(request: Request, entry_id: str):
    """Formulaire d'édition pré-rempli."""
    service = get_catalog_service(request)
    try:
        entry = await bound_to_view(request, service.get_entry(entry_id))
    except EntryNotFoundError as e:
        return templates.TemplateResponse(
            request,
            "not_found.html",
            {"message": str(e)},
            status_code=status.HTTP_404_NOT_FOUND,
        )
    except (ConfigurationError, RecordSourceError) as e:
        return _redirect_to_list(error=str(e))

    return templates.TemplateResponse(
        request,
        "admin/edit.html",
        _form_context(
            request,
            AnimeDraft.from_entry(entry),
            entry_id=entry.id,
            image_url=entry.image_url,
        ),
    )


@router.post("/animes/{entry_id}")
async def update_anime(request: Request, entry_id: str):
    """Enregistre les modifications d'un anime."""
    form = await request.form()
    draft = _draft_from_form(form)
    service = get_catalog_service(request)

    try:
        await service.update_entry(entry_id, draft)
    except EntryNotFoundError as e:
        return _redirect_to_list(error=str(e))
    except (CatalogValidationError, ConfigurationError, RecordSourceError) as e:
        logger.warning(f"Modification refusée pour {entry_id}: {e}")
        return templates.TemplateResponse(
            request,
            "admin/edit.html",
            _form_context(
                request,
                draft,
                entry_id=entry_id,
                # Aperçu seulement : la modification ne touche pas l'image
                image_url=form.get("image_url") or None,
                error=str(e),
                error_field=getattr(e, "field", None),
            ),
            status_code=_error_status(e),
        )

    return _redirect_to_list(status="updated")


@router.post("/animes/{entry_id}/rank")
async def update_featured_rank(request: Request, entry_id: str):
    """Met à jour le rang de mise en avant depuis la liste."""
    form = await request.form()
    service = get_catalog_service(request)

    try:
        await service.set_featured_rank(entry_id, str(form.get("featured_rank", "")))
    except (
        CatalogValidationError, ConfigurationError, EntryNotFoundError, RecordSourceError
    ) as e:
        return _redirect_to_list(error=str(e))

    return _redirect_to_list(status="ranked")


@router.post("/animes/{entry_id}/delete")
async def delete_anime(request: Request, entry_id: str):
    """Supprime un anime (confirmation demandée côté navigateur)."""
    service = get_catalog_service(request)
    try:
        await service.delete_entry(entry_id)
    except (ConfigurationError, RecordSourceError) as e:
        return _redirect_to_list(error=str(e))

    return _redirect_to_list(status="deleted")
