"""Parte del flujo de la interfaz que se resuelve en el servidor."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import HTMLResponse, RedirectResponse

from juegamas.core.core import canonical_role
from juegamas.core.security import get_current_user, require_roles
from juegamas.models.usuario import Usuario
from juegamas.schemas.usuario import UsuarioResponse

router = APIRouter()

PANEL_POR_ROL = {
    "usuario": "/dashboard/cliente",
    "propietario": "/dashboard/propietario",
    "admin": "/dashboard/admin",
}

_PAGINA = """<!DOCTYPE html>
<html lang="es">
<head><meta charset="utf-8"><title>{titulo} | JuegaMás</title></head>
<body>
  <h1>{titulo}</h1>
  <p>{mensaje}</p>
  <a href="{enlace}">{texto_enlace}</a>
</body>
</html>
"""

@router.get("/dashboard")
def dashboard(current_user: Usuario = Depends(get_current_user)):
    destino = PANEL_POR_ROL.get(canonical_role(current_user.role), "/forbidden")
    return RedirectResponse(url=destino, status_code=status.HTTP_307_TEMPORARY_REDIRECT)

def _contexto(panel: str, usuario: Usuario) -> dict:
    return {"panel": panel, "user": UsuarioResponse.model_validate(usuario)}

@router.get("/dashboard/cliente")
def dashboard_cliente(current_user: Usuario = Depends(get_current_user)):
    return _contexto("cliente", current_user)

@router.get("/dashboard/propietario")
def dashboard_propietario(current_user: Usuario = Depends(require_roles("propietario", "admin"))):
    return _contexto("propietario", current_user)

@router.get("/dashboard/admin")
def dashboard_admin(current_user: Usuario = Depends(require_roles("admin"))):
    return _contexto("admin", current_user)

@router.get("/unauthorized", response_class=HTMLResponse)
def unauthorized():
    return _PAGINA.format(
        titulo="Acceso no autorizado",
        mensaje="Debes iniciar sesión para acceder a esta página.",
        enlace="/auth/login",
        texto_enlace="Iniciar sesión",
    )

@router.get("/forbidden", response_class=HTMLResponse)
def forbidden():
    return _PAGINA.format(
        titulo="Acceso prohibido",
        mensaje="No tienes permiso para acceder a esta página.",
        enlace="/dashboard",
        texto_enlace="Volver al panel",
    )
