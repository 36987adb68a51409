import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from juegamas.core.exceptions import NotFoundException
from juegamas.core.security import get_current_user, require_roles
from juegamas.crud import espacios as crud_espacios
from juegamas.crud import estadisticas as crud_estadisticas
from juegamas.database import get_db
from juegamas.models.usuario import Usuario
from juegamas.schemas.asistente import (
    DatosEspacio,
    EspacioCreadoResponse,
    ValidacionPaso,
    ValidacionPasoResponse,
)
from juegamas.schemas.espacio_deportivo import (
    EspacioDeportivoResponse,
    FiltrosEspacios,
    ImagenesSubidasResponse,
)
from juegamas.services.asistente_espacio import AsistenteEspacio, PasoInvalidoError
from juegamas.services.supabase_storage import BUCKET_RECINTOS, SupabaseStorage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("", response_model=List[EspacioDeportivoResponse])
def get_espacios(
    response: Response,
    filtros: Annotated[FiltrosEspacios, Query()],
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    """
    Listado de espacios activos con filtros de búsqueda, tipo, ciudad,
    precio por hora y capacidad mínima. La paginación viaja en cabeceras.
    """
    espacios, paginacion = crud_espacios.get_espacios(db, filtros)
    response.headers["X-Total-Count"] = str(paginacion["total"])
    response.headers["X-Total-Pages"] = str(paginacion["total_paginas"])
    return espacios

@router.get("/tipos", response_model=List[str])
def get_tipos(db: Session = Depends(get_db), current_user: Usuario = Depends(get_current_user)):
    return crud_espacios.get_tipos(db)

@router.get("/ciudades", response_model=List[str])
def get_ciudades(db: Session = Depends(get_db), current_user: Usuario = Depends(get_current_user)):
    return crud_espacios.get_ciudades(db)

@router.get("/caracteristicas", response_model=List[str])
def get_caracteristicas(db: Session = Depends(get_db), current_user: Usuario = Depends(get_current_user)):
    return crud_espacios.get_caracteristicas(db)

# =======================================================
# Asistente de creación
# =======================================================

@router.post("/asistente/validar", response_model=ValidacionPasoResponse)
def validar_paso(
    body: ValidacionPaso,
    current_user: Usuario = Depends(get_current_user),
):
    """Valida un paso del asistente y devuelve el paso al que se puede avanzar."""
    asistente = AsistenteEspacio(body.datos.model_dump(), paso=body.paso)
    try:
        siguiente = asistente.siguiente_paso()
    except PasoInvalidoError as e:
        return {"paso": body.paso, "valido": False, "siguiente_paso": body.paso, "errores": e.errores}
    return {"paso": body.paso, "valido": True, "siguiente_paso": siguiente, "errores": {}}

@router.post("", response_model=EspacioCreadoResponse, status_code=status.HTTP_201_CREATED)
def create_espacio(
    datos: DatosEspacio,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_roles("propietario", "admin")),
):
    asistente = AsistenteEspacio(datos.model_dump())
    errores = asistente.completar()
    if errores:
        detalles = [
            {"campo": campo, "mensaje": mensaje, "paso": paso}
            for paso, campos in errores.items()
            for campo, mensaje in campos.items()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Datos inválidos", "details": detalles},
        )

    try:
        espacio = crud_espacios.crear_espacio_completo(
            db,
            current_user.id,
            asistente.datos_espacio(),
            caracteristicas=asistente.datos.get("caracteristicas") or [],
            imagenes=asistente.datos.get("imagenes") or [],
            horarios=asistente.datos.get("horarios") or [],
        )
    except crud_espacios.CreacionIncompletaError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Ha ocurrido un error al crear el espacio deportivo",
                "espacio_id": e.espacio_id,
            },
        )
    except Exception:
        db.rollback()
        logger.exception("Error al crear el espacio deportivo")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al crear el espacio deportivo",
        )

    return {
        "message": "¡Espacio deportivo creado con éxito!",
        "espacio": crud_espacios.espacio_a_dict(espacio, incluir_horarios=True),
    }

@router.post("/imagenes", response_model=ImagenesSubidasResponse)
async def upload_imagenes(
    files: List[UploadFile] = File(...),
    storage: SupabaseStorage = Depends(get_storage),
    current_user: Usuario = Depends(require_roles("propietario", "admin")),
):
    urls = []
    for file in files:
        urls.append(await storage.upload_image(file, bucket=BUCKET_RECINTOS, folder="espacios"))
    return {"urls": urls}

@router.delete("/imagenes")
def delete_imagen(
    url: str,
    storage: SupabaseStorage = Depends(get_storage),
    current_user: Usuario = Depends(require_roles("propietario", "admin")),
):
    if not storage.delete_image(url, bucket=BUCKET_RECINTOS):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al eliminar la imagen",
        )
    return {"success": True}

# =======================================================
# Detalle y estadísticas de un espacio
# =======================================================

@router.get("/{espacio_id}", response_model=EspacioDeportivoResponse)
def get_espacio(
    espacio_id: int,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    espacio = crud_espacios.get_espacio(db, espacio_id)
    if espacio is None:
        raise NotFoundException("Espacio deportivo no encontrado")
    return espacio

@router.get("/{espacio_id}/estadisticas")
def get_estadisticas(
    espacio_id: int,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    estadisticas = crud_estadisticas.get_estadisticas_espacio(db, espacio_id)
    if not estadisticas:
        raise NotFoundException("No se encontraron estadísticas para este espacio")
    return jsonable_encoder(estadisticas)

@router.get("/{espacio_id}/estadisticas/mensuales")
def get_estadisticas_mensuales(
    espacio_id: int,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    estadisticas = crud_estadisticas.get_estadisticas_mensuales(db, espacio_id)
    if not estadisticas:
        raise NotFoundException("No se encontraron estadísticas mensuales para este espacio")
    return jsonable_encoder(estadisticas)

@router.get("/{espacio_id}/ocupacion")
def get_ocupacion(
    espacio_id: int,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    ocupacion = crud_estadisticas.get_ocupacion_espacio(db, espacio_id)
    if not ocupacion:
        raise NotFoundException("No se encontraron datos de ocupación para este espacio")
    return jsonable_encoder(ocupacion)

@router.get("/{espacio_id}/tendencias")
def get_tendencias(
    espacio_id: int,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    return jsonable_encoder({
        "dias": crud_estadisticas.get_tendencias_dias(db, espacio_id),
        "horas": crud_estadisticas.get_tendencias_horas(db, espacio_id),
    })
