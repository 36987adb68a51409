from datetime import datetime, time
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from juegamas.models.incidencia import Incidencia
from juegamas.schemas.incidencia import FiltrosIncidencia, IncidenciaCreate, IncidenciaUpdate

ESTADOS_CERRABLES = ("pendiente", "en_revision")

def create_incidencia(db: Session, usuario_id: int, incidencia: IncidenciaCreate) -> Incidencia:
    db_incidencia = Incidencia(
        usuario_id=usuario_id,
        reserva_id=incidencia.reserva_id,
        tipo=incidencia.tipo,
        asunto=incidencia.asunto,
        descripcion=incidencia.descripcion,
        estado="pendiente",
        archivos_adjuntos=incidencia.archivos_adjuntos,
    )
    db.add(db_incidencia)
    db.commit()
    db.refresh(db_incidencia)
    return db_incidencia

def get_incidencias_usuario(db: Session, usuario_id: int, filtros: FiltrosIncidencia) -> Tuple[List[Incidencia], int]:
    query = db.query(Incidencia).filter(Incidencia.usuario_id == usuario_id)

    if filtros.tipo:
        query = query.filter(Incidencia.tipo == filtros.tipo)
    if filtros.estado:
        query = query.filter(Incidencia.estado == filtros.estado)
    if filtros.fecha_desde:
        query = query.filter(Incidencia.fecha_creacion >= datetime.combine(filtros.fecha_desde, time.min))
    if filtros.fecha_hasta:
        query = query.filter(Incidencia.fecha_creacion <= datetime.combine(filtros.fecha_hasta, time.max))
    if filtros.reserva_id:
        query = query.filter(Incidencia.reserva_id == filtros.reserva_id)

    total = query.count()
    desde = (filtros.page - 1) * filtros.per_page
    incidencias = (
        query.order_by(Incidencia.fecha_creacion.desc(), Incidencia.id.desc())
        .offset(desde)
        .limit(filtros.per_page)
        .all()
    )
    return incidencias, total

def get_incidencia(db: Session, incidencia_id: int, usuario_id: int) -> Optional[Incidencia]:
    return (
        db.query(Incidencia)
        .filter(Incidencia.id == incidencia_id, Incidencia.usuario_id == usuario_id)
        .first()
    )

def update_incidencia(db: Session, incidencia: Incidencia, cambios: IncidenciaUpdate) -> Incidencia:
    for campo, valor in cambios.model_dump(exclude_unset=True).items():
        setattr(incidencia, campo, valor)
    db.commit()
    db.refresh(incidencia)
    return incidencia

def cerrar_incidencia(db: Session, incidencia_id: int, usuario_id: int) -> Optional[Incidencia]:
    """Solo se cierran incidencias propias en estado pendiente o en_revision."""
    incidencia = (
        db.query(Incidencia)
        .filter(
            Incidencia.id == incidencia_id,
            Incidencia.usuario_id == usuario_id,
            Incidencia.estado.in_(ESTADOS_CERRABLES),
        )
        .first()
    )
    if incidencia is None:
        return None
    incidencia.estado = "cerrada"
    db.commit()
    db.refresh(incidencia)
    return incidencia

def get_estadisticas_incidencias(db: Session, usuario_id: int) -> Dict[str, int]:
    estados = [fila.estado for fila in db.query(Incidencia.estado).filter(Incidencia.usuario_id == usuario_id).all()]
    return {
        "total": len(estados),
        "pendientes": estados.count("pendiente"),
        "en_revision": estados.count("en_revision"),
        "resueltas": estados.count("resuelta"),
        "cerradas": estados.count("cerrada"),
    }
