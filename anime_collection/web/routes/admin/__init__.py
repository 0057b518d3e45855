"""
Package routes d'administration: connexion, gestion du catalogue, export.

Les routes de gestion et d'export exigent un jeton d'administration valide.
"""

from fastapi import APIRouter, Depends

from ...deps import require_admin
from . import auth, export, manage

router = APIRouter()

router.include_router(auth.router)
router.include_router(manage.router, dependencies=[Depends(require_admin)])
router.include_router(export.router, dependencies=[Depends(require_admin)])
