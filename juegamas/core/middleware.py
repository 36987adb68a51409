# juegamas/core/middleware.py
"""
Puerta de autorización: intercepta todas las peticiones no estáticas.

- Rutas públicas y recursos estáticos pasan sin modificar.
- El resto exige la cookie authToken con un token válido.
- Con token válido se inyectan x-user-id, x-user-email y x-user-role en la
  petición y se aplican las reglas por prefijo de /api/admin,
  /dashboard/admin y /dashboard/propietario.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from juegamas.core.core import canonical_role
from juegamas.core.security import AUTH_COOKIE, verify_token

logger = logging.getLogger(__name__)

# Rutas públicas (no requieren autenticación); '*' final = prefijo
PUBLIC_ROUTES = [
    "/",
    "/inicio",
    "/main/inicio",
    "/main/*",
    "/auth/login",
    "/auth/register",
    "/api/auth/login",
    "/api/auth/register",
    "/unauthorized",
    "/not-found",
    "/forbidden",
    "/contacto",
    "/health",
    "/docs",
    "/redoc",
]

STATIC_PREFIXES = ("/static", "/images")

IDENTITY_HEADERS = (b"x-user-id", b"x-user-email", b"x-user-role")

def is_public_route(route: str) -> bool:
    for public_route in PUBLIC_ROUTES:
        if public_route.endswith("*"):
            if route.startswith(public_route[:-1]):
                return True
        elif route == public_route:
            return True
    return False

def is_static_asset(route: str) -> bool:
    return route.startswith(STATIC_PREFIXES) or "." in route

def is_api_route(route: str) -> bool:
    return route.startswith("/api/")

def _reject_unauthenticated(route: str, message: str):
    if is_api_route(route):
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"error": message})
    return RedirectResponse(url="/unauthorized", status_code=status.HTTP_307_TEMPORARY_REDIRECT)

def _inject_identity(request: Request, payload: dict) -> None:
    # Los valores de cabecera ASGI son bytes; el email puede no ser latin-1
    headers = [
        (name, value) for name, value in request.scope["headers"]
        if name.lower() not in IDENTITY_HEADERS
    ]
    headers.extend([
        (b"x-user-id", str(payload["userId"]).encode("utf-8")),
        (b"x-user-email", str(payload.get("email", "")).encode("utf-8")),
        (b"x-user-role", str(payload["role"]).encode("utf-8")),
    ])
    request.scope["headers"] = headers

class AuthGateMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        path = request.url.path

        if request.method == "OPTIONS" or is_static_asset(path) or is_public_route(path):
            return await call_next(request)

        token = request.cookies.get(AUTH_COOKIE)
        if not token:
            return _reject_unauthenticated(path, "No autorizado. Inicia sesión para continuar.")

        try:
            payload = verify_token(token)
            if payload is None:
                return _reject_unauthenticated(path, "Sesión expirada o inválida.")
            role = canonical_role(payload["role"])
            _inject_identity(request, payload)
        except Exception:
            logger.exception("Error en la puerta de autorización para %s", path)
            return _reject_unauthenticated(path, "Error de autenticación")

        if path.startswith("/api/admin") and role != "admin":
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"error": "No tienes permiso para acceder a esta ruta"},
            )

        if path.startswith("/dashboard/admin") and role != "admin":
            return RedirectResponse(url="/forbidden", status_code=status.HTTP_307_TEMPORARY_REDIRECT)

        if path.startswith("/dashboard/propietario") and role not in ("propietario", "admin"):
            return RedirectResponse(url="/forbidden", status_code=status.HTTP_307_TEMPORARY_REDIRECT)

        return await call_next(request)
