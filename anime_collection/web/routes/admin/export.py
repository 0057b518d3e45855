"""
Route d'export texte du catalogue.

Les champs cochés dans le formulaire de la liste d'administration
sont transmis en paramètres répétés ?fields=...
"""

from urllib.parse import urlencode

from fastapi import APIRouter, Query, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse
from loguru import logger

from ....core.exceptions import ConfigurationError, RecordSourceError
from ....services.export import DEFAULT_EXPORT_FIELDS, build_export_report, parse_export_fields
from ...deps import bound_to_view, get_catalog_service

router = APIRouter(prefix="/admin")

EXPORT_FILENAME = "anime-collection-export.txt"


@router.get("/export")
async def export_catalog(request: Request, fields: list[str] = Query([])):
    """Télécharge le rapport texte du catalogue."""
    selected = parse_export_fields(fields) or list(DEFAULT_EXPORT_FIELDS)
    service = get_catalog_service(request)

    try:
        entries = await bound_to_view(request, service.list_entries())
    except (ConfigurationError, RecordSourceError) as e:
        logger.warning(f"Export impossible: {e}")
        return RedirectResponse(
            url="/admin?" + urlencode({"error": str(e)}), status_code=status.HTTP_303_SEE_OTHER
        )

    logger.info(f"Export de {len(entries)} animes ({', '.join(f.value for f in selected)})")
    return PlainTextResponse(
        build_export_report(entries, selected),
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
