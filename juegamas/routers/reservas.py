from typing import Annotated, List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from juegamas.core.exceptions import BadRequestException, NotFoundException
from juegamas.core.security import get_current_user
from juegamas.crud import reservas as crud_reservas
from juegamas.database import get_db
from juegamas.models.usuario import Usuario
from juegamas.schemas.reserva import (
    CancelacionRequest,
    FiltrosReservas,
    ListaReservasResponse,
    RespuestaOperacion,
    ReservaResponse,
)

router = APIRouter()

@router.get("", response_model=ListaReservasResponse)
def get_mis_reservas(
    filtros: Annotated[FiltrosReservas, Query()],
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    reservas, total = crud_reservas.get_reservas_usuario(db, current_user.id, filtros)
    return {"reservas": reservas, "total": total}

@router.get("/proximas", response_model=List[ReservaResponse])
def get_proximas(
    limite: int = Query(3, ge=1, le=50),
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    return crud_reservas.get_proximas_reservas(db, current_user.id, limite)

@router.get("/{reserva_id}", response_model=ReservaResponse)
def get_reserva(
    reserva_id: int,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    reserva = crud_reservas.get_reserva(db, reserva_id, current_user.id)
    if reserva is None:
        raise NotFoundException("Reserva no encontrada")
    return reserva

@router.post("/{reserva_id}/cancelar", response_model=RespuestaOperacion)
def cancelar_reserva(
    reserva_id: int,
    datos: CancelacionRequest,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    if not crud_reservas.cancelar_reserva(db, reserva_id, datos.motivo, current_user.id):
        raise BadRequestException("No se encontró la reserva o no puede ser cancelada")
    return {"success": True, "message": "Reserva cancelada correctamente"}
