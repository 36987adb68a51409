from .auth import router as auth_router
from .usuarios import router as usuarios_router
from .espacios import router as espacios_router
from .propietario import router as propietario_router
from .admin import router as admin_router
from .contacto import router as contacto_router
from .reservas import router as reservas_router
from .incidencias import router as incidencias_router
from .paginas import router as paginas_router

__all__ = [
    "auth_router", "usuarios_router", "espacios_router", "propietario_router",
    "admin_router", "contacto_router", "reservas_router", "incidencias_router",
    "paginas_router",
]
