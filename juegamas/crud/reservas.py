import logging
from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session, joinedload

from juegamas.models.espacio_deportivo import EspacioDeportivo
from juegamas.models.reserva import Reserva
from juegamas.schemas.reserva import FiltrosReservas

logger = logging.getLogger(__name__)

ESTADOS_CANCELABLES = ("pendiente", "confirmada")

def reserva_completa(reserva: Reserva) -> Dict[str, Any]:
    """Reserva con los datos del usuario, del espacio y de su propietario."""
    usuario = reserva.usuario
    espacio = reserva.espacio
    propietario = espacio.propietario if espacio else None
    return {
        "id": reserva.id,
        "codigo_reserva": reserva.codigo_reserva,
        "fecha": reserva.fecha,
        "hora_inicio": reserva.hora_inicio,
        "hora_fin": reserva.hora_fin,
        "precio_total": reserva.precio_total,
        "estado": reserva.estado,
        "created_at": reserva.created_at,
        "updated_at": reserva.updated_at,
        "usuario_id": reserva.usuario_id,
        "usuario_nombre": usuario.nombre if usuario else None,
        "usuario_email": usuario.email if usuario else None,
        "usuario_telefono": usuario.telefono if usuario else None,
        "espacio_id": reserva.espacio_id,
        "espacio_nombre": espacio.nombre if espacio else None,
        "espacio_tipo": espacio.tipo if espacio else None,
        "espacio_direccion": espacio.direccion if espacio else None,
        "espacio_ciudad": espacio.ciudad if espacio else None,
        "propietario_id": espacio.propietario_id if espacio else None,
        "propietario_nombre": propietario.nombre if propietario else None,
        "propietario_email": propietario.email if propietario else None,
        "notas": reserva.notas,
        "metodo_pago": reserva.metodo_pago,
        "id_transaccion": reserva.id_transaccion,
        "cancelado_por": reserva.cancelado_por,
        "motivo_cancelacion": reserva.motivo_cancelacion,
    }

def _query_completa(db: Session):
    return db.query(Reserva).options(
        joinedload(Reserva.usuario),
        joinedload(Reserva.espacio).joinedload(EspacioDeportivo.propietario),
    )

def get_reservas_usuario(db: Session, usuario_id: int, filtros: FiltrosReservas) -> Tuple[List[Dict[str, Any]], int]:
    query = db.query(Reserva).filter(Reserva.usuario_id == usuario_id)

    if filtros.estado and filtros.estado != "todas":
        query = query.filter(Reserva.estado == filtros.estado)
    if filtros.fecha_desde:
        query = query.filter(Reserva.fecha >= filtros.fecha_desde)
    if filtros.fecha_hasta:
        query = query.filter(Reserva.fecha <= filtros.fecha_hasta)

    total = query.count()
    desde = (filtros.page - 1) * filtros.per_page
    reservas = (
        query.options(
            joinedload(Reserva.usuario),
            joinedload(Reserva.espacio).joinedload(EspacioDeportivo.propietario),
        )
        .order_by(Reserva.fecha.asc(), Reserva.hora_inicio.asc())
        .offset(desde)
        .limit(filtros.per_page)
        .all()
    )
    return [reserva_completa(r) for r in reservas], total

def get_reserva(db: Session, reserva_id: int, usuario_id: int) -> Optional[Dict[str, Any]]:
    reserva = (
        _query_completa(db)
        .filter(Reserva.id == reserva_id, Reserva.usuario_id == usuario_id)
        .first()
    )
    return reserva_completa(reserva) if reserva else None

def get_proximas_reservas(db: Session, usuario_id: int, limite: int = 3) -> List[Dict[str, Any]]:
    reservas = (
        _query_completa(db)
        .filter(
            Reserva.usuario_id == usuario_id,
            Reserva.fecha >= date.today(),
            Reserva.estado.in_(ESTADOS_CANCELABLES),
        )
        .order_by(Reserva.fecha.asc(), Reserva.hora_inicio.asc())
        .limit(limite)
        .all()
    )
    return [reserva_completa(r) for r in reservas]

def cancelar_reserva(db: Session, reserva_id: int, motivo: str, usuario_id: int) -> bool:
    """Cancela la reserva si pertenece al usuario y sigue pendiente o confirmada."""
    reserva = (
        db.query(Reserva)
        .filter(
            Reserva.id == reserva_id,
            Reserva.usuario_id == usuario_id,
            Reserva.estado.in_(ESTADOS_CANCELABLES),
        )
        .first()
    )
    if reserva is None:
        return False

    reserva.estado = "cancelada"
    reserva.motivo_cancelacion = motivo
    reserva.cancelado_por = usuario_id
    db.commit()
    logger.info("Reserva %s cancelada por el usuario %s", reserva_id, usuario_id)
    return True
