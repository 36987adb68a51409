# En main.py
import logging

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from juegamas.config import settings
from juegamas.core.exceptions import (
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from juegamas.core.middleware import AuthGateMiddleware
from juegamas.routers import (
    admin_router,
    auth_router,
    contacto_router,
    espacios_router,
    incidencias_router,
    paginas_router,
    propietario_router,
    reservas_router,
    usuarios_router,
)

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="JuegaMás API",
    description="API para descubrir y reservar espacios deportivos",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# La puerta de autorización se registra antes que CORS para que CORS quede
# por fuera y también las respuestas 401/403 de la puerta lleven sus cabeceras
app.add_middleware(AuthGateMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    allow_headers=[
        "Authorization",
        "Content-Type",
        "Accept",
        "Origin",
        "X-Requested-With",
    ],
    expose_headers=["X-Total-Count", "X-Total-Pages"],
    max_age=600,
)

# Manejadores de errores: cuerpo {"error": ...}
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# Routers
app.include_router(auth_router, prefix="/api/auth", tags=["Autenticación"])
app.include_router(usuarios_router, prefix="/api/user", tags=["Perfil"])
app.include_router(espacios_router, prefix="/api/espacios", tags=["Espacios Deportivos"])
app.include_router(propietario_router, prefix="/api/propietario", tags=["Propietario"])
app.include_router(admin_router, prefix="/api/admin", tags=["Administración"])
app.include_router(contacto_router, prefix="/api/contacto", tags=["Contacto"])
app.include_router(reservas_router, prefix="/api/reservas", tags=["Reservas"])
app.include_router(incidencias_router, prefix="/api/incidencias", tags=["Incidencias"])
app.include_router(paginas_router, tags=["Páginas"])

@app.get("/")
def read_root():
    return {
        "mensaje": "JuegaMás API funcionando correctamente",
        "version": "1.0.0"
    }

@app.get("/health")
def health_check():
    return {
        "status": "healthy",
        "service": "JuegaMás API",
        "environment": settings.ENVIRONMENT,
    }

logger.info("JuegaMás API iniciada (entorno: %s)", settings.ENVIRONMENT)
