"""
Routes de connexion et de déconnexion de l'administration.

Le mot de passe est vérifié côté serveur ; en cas de succès un jeton signé
est déposé dans un cookie http-only.
"""

from fastapi import APIRouter, Form, Request, status
from fastapi.responses import RedirectResponse

from ....core.exceptions import AuthenticationError, ConfigurationError
from ....utils.constants import ADMIN_COOKIE_NAME
from ...deps import get_admin_auth, templates

router = APIRouter(prefix="/admin")


@router.get("/login")
async def login_page(request: Request):
    """Formulaire de connexion (redirige si déjà connecté)."""
    auth = get_admin_auth(request)
    try:
        auth.verify(request.cookies.get(ADMIN_COOKIE_NAME))
        return RedirectResponse(url="/admin", status_code=status.HTTP_303_SEE_OTHER)
    except AuthenticationError:
        pass

    return templates.TemplateResponse(
        request, "admin/login.html", {"enabled": auth.enabled, "error": None}
    )


@router.post("/login")
async def login(request: Request, password: str = Form("")):
    """Vérifie le mot de passe et ouvre la session d'administration."""
    auth = get_admin_auth(request)
    try:
        token = auth.login(password)
    except ConfigurationError as e:
        return templates.TemplateResponse(
            request,
            "admin/login.html",
            {"enabled": False, "error": str(e)},
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )
    except AuthenticationError as e:
        return templates.TemplateResponse(
            request,
            "admin/login.html",
            {"enabled": True, "error": str(e)},
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    settings = request.app.state.container.config()
    response = RedirectResponse(url="/admin", status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        ADMIN_COOKIE_NAME,
        token,
        max_age=settings.admin_token_expire_minutes * 60,
        httponly=True,
        samesite="lax",
    )
    return response


@router.post("/logout")
async def logout():
    """Ferme la session d'administration."""
    response = RedirectResponse(url="/admin/login", status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(ADMIN_COOKIE_NAME)
    return response
