import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from juegamas.core.exceptions import BadRequestException, NotFoundException
from juegamas.core.security import get_current_user
from juegamas.crud import incidencias as crud_incidencias
from juegamas.database import get_db
from juegamas.models.reserva import Reserva
from juegamas.models.usuario import Usuario
from juegamas.schemas.incidencia import (
    EstadisticasIncidencias,
    FiltrosIncidencia,
    IncidenciaCreate,
    IncidenciaResponse,
    IncidenciaUpdate,
    ListaIncidenciasResponse,
    RespuestaIncidencia,
)

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("", response_model=RespuestaIncidencia, status_code=status.HTTP_201_CREATED)
def reportar_incidencia(
    incidencia: IncidenciaCreate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    if incidencia.reserva_id is not None:
        reserva = db.query(Reserva).filter(
            Reserva.id == incidencia.reserva_id,
            Reserva.usuario_id == current_user.id,
        ).first()
        if not reserva:
            raise NotFoundException("Reserva no encontrada")

    try:
        db_incidencia = crud_incidencias.create_incidencia(db, current_user.id, incidencia)
    except Exception:
        db.rollback()
        logger.exception("Error al crear la incidencia del usuario %s", current_user.id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Ocurrió un error al reportar la incidencia",
        )
    return {
        "success": True,
        "message": "Incidencia reportada correctamente",
        "incidencia": db_incidencia,
    }

@router.get("", response_model=ListaIncidenciasResponse)
def get_mis_incidencias(
    filtros: Annotated[FiltrosIncidencia, Query()],
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    incidencias, total = crud_incidencias.get_incidencias_usuario(db, current_user.id, filtros)
    return {"incidencias": incidencias, "total": total}

@router.get("/estadisticas", response_model=EstadisticasIncidencias)
def get_estadisticas(
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    return crud_incidencias.get_estadisticas_incidencias(db, current_user.id)

@router.get("/{incidencia_id}", response_model=IncidenciaResponse)
def get_incidencia(
    incidencia_id: int,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    incidencia = crud_incidencias.get_incidencia(db, incidencia_id, current_user.id)
    if not incidencia:
        raise NotFoundException("Incidencia no encontrada")
    return incidencia

@router.put("/{incidencia_id}", response_model=RespuestaIncidencia)
def update_incidencia(
    incidencia_id: int,
    cambios: IncidenciaUpdate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    incidencia = crud_incidencias.get_incidencia(db, incidencia_id, current_user.id)
    if not incidencia:
        raise NotFoundException("No se encontró la incidencia o no tienes permiso para editarla")

    try:
        incidencia = crud_incidencias.update_incidencia(db, incidencia, cambios)
    except Exception:
        db.rollback()
        logger.exception("Error al actualizar la incidencia %s", incidencia_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Ocurrió un error al actualizar la incidencia",
        )
    return {
        "success": True,
        "message": "Incidencia actualizada correctamente",
        "incidencia": incidencia,
    }

@router.post("/{incidencia_id}/cerrar", response_model=RespuestaIncidencia)
def cerrar_incidencia(
    incidencia_id: int,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    incidencia = crud_incidencias.cerrar_incidencia(db, incidencia_id, current_user.id)
    if not incidencia:
        raise BadRequestException(
            "No se encontró la incidencia, no tienes permiso para cerrarla, o ya está cerrada/resuelta"
        )
    return {
        "success": True,
        "message": "Incidencia cerrada correctamente",
        "incidencia": incidencia,
    }
