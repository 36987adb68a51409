"""
Lectura de las vistas y funciones de estadísticas de la base de datos.

Las vistas existen solo en la base de datos externa; aquí se consultan con
SQL textual. Un error de base de datos se registra y se traduce en None o
en una lista vacía, nunca en una excepción.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import func, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from juegamas.core.core import canonical_role
from juegamas.crud.espacios import existe_espacio
from juegamas.models.espacio_deportivo import EspacioDeportivo
from juegamas.models.usuario import Usuario

logger = logging.getLogger(__name__)

def _una_fila(db: Session, sql: str, params: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    try:
        fila = db.execute(text(sql), params).mappings().first()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Error en consulta de estadísticas: %s", e)
        return None
    return dict(fila) if fila is not None else None

def _varias_filas(db: Session, sql: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
    try:
        filas = db.execute(text(sql), params).mappings().all()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Error en consulta de estadísticas: %s", e)
        return []
    return [dict(fila) for fila in filas]

def get_estadisticas_espacio(db: Session, espacio_id: int) -> Optional[Dict[str, Any]]:
    """Estadísticas del día de un espacio (función obtener_estadisticas_espacio)."""
    if not existe_espacio(db, espacio_id):
        logger.info("Estadísticas solicitadas para un espacio inexistente: %s", espacio_id)
        return None

    try:
        fila = db.execute(
            text("SELECT * FROM obtener_estadisticas_espacio(:espacio_id_param)"),
            {"espacio_id_param": espacio_id},
        ).mappings().first()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Error al obtener estadísticas del espacio %s: %s", espacio_id, e)
        return None

    fila = fila or {}
    return {
        "reservas_hoy": fila.get("reservas_hoy") or 0,
        "ganancias_dia": fila.get("ganancias_dia") or 0,
        "cancha_popular": fila.get("cancha_popular") or "No disponible",
        "horario_popular": fila.get("horario_popular") or "No disponible",
    }

def get_estadisticas_mensuales(db: Session, espacio_id: int) -> Optional[Dict[str, Any]]:
    # Si la vista tiene varios meses se devuelve el más reciente
    return _una_fila(
        db,
        'SELECT * FROM vista_estadisticas_mensuales WHERE espacio_id = :espacio_id '
        'ORDER BY "año" DESC, mes DESC',
        {"espacio_id": espacio_id},
    )

def get_ocupacion_espacio(db: Session, espacio_id: int) -> Optional[Dict[str, Any]]:
    return _una_fila(
        db,
        "SELECT * FROM vista_ocupacion_espacios WHERE espacio_id = :espacio_id",
        {"espacio_id": espacio_id},
    )

def get_tendencias_dias(db: Session, espacio_id: int) -> List[Dict[str, Any]]:
    return _varias_filas(
        db,
        "SELECT * FROM vista_tendencias_dias WHERE espacio_id = :espacio_id ORDER BY dia_semana",
        {"espacio_id": espacio_id},
    )

def get_tendencias_horas(db: Session, espacio_id: int, limite: int = 5) -> List[Dict[str, Any]]:
    return _varias_filas(
        db,
        "SELECT * FROM vista_tendencias_horas WHERE espacio_id = :espacio_id "
        "ORDER BY total_reservas DESC LIMIT :limite",
        {"espacio_id": espacio_id, "limite": limite},
    )

def get_resumen_propietario(db: Session, propietario_id: int) -> Optional[Dict[str, Any]]:
    return _una_fila(
        db,
        "SELECT * FROM vista_resumen_propietario WHERE propietario_id = :propietario_id",
        {"propietario_id": propietario_id},
    )

def get_estadisticas_admin(db: Session) -> Dict[str, int]:
    """
    Conteos globales del panel de administración. Cualquier error devuelve
    todos los contadores en cero.
    """
    vacio = {
        "totalClientes": 0,
        "totalPropietarios": 0,
        "totalRecintos": 0,
        "suscripcionesActivas": 0,
    }
    try:
        por_rol = db.query(Usuario.role, func.count(Usuario.id)).group_by(Usuario.role).all()
        total_recintos = db.query(EspacioDeportivo).count()
        suscripciones = db.execute(
            text("SELECT COUNT(*) FROM suscripciones WHERE estado = 'activa'")
        ).scalar()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("Error al obtener estadísticas de administración: %s", e)
        return vacio

    # "cliente" se suma a "usuario"
    totales: Dict[str, int] = {}
    for role, cantidad in por_rol:
        clave = canonical_role(role)
        totales[clave] = totales.get(clave, 0) + cantidad

    return {
        "totalClientes": totales.get("usuario", 0),
        "totalPropietarios": totales.get("propietario", 0),
        "totalRecintos": total_recintos,
        "suscripcionesActivas": suscripciones or 0,
    }
