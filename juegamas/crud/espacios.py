import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import bindparam, or_, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from juegamas.models.caracteristica_espacio import CaracteristicaEspacio
from juegamas.models.espacio_deportivo import EspacioDeportivo
from juegamas.models.horario_disponibilidad import HorarioDisponibilidad
from juegamas.models.imagen_espacio import ImagenEspacio
from juegamas.schemas.espacio_deportivo import FiltrosEspacios

logger = logging.getLogger(__name__)

ESTADO_ACTIVO = "activo"

class CreacionIncompletaError(Exception):
    """Falló una inserción hija; el espacio ya quedó creado."""
    def __init__(self, espacio_id: int, etapa: str, causa: Exception):
        self.espacio_id = espacio_id
        self.etapa = etapa
        self.causa = causa
        super().__init__(f"Error al agregar {etapa} al espacio {espacio_id}: {causa}")

_CAMPOS_ESPACIO = (
    "id", "propietario_id", "nombre", "tipo", "descripcion", "direccion", "ciudad",
    "estado", "codigo_postal", "latitud", "longitud", "precio_base", "precio_hora",
    "capacidad_min", "capacidad_max", "duracion_turno", "imagen_principal",
    "estado_espacio", "created_at", "updated_at",
)

def espacio_a_dict(espacio: EspacioDeportivo, incluir_horarios: bool = False) -> Dict[str, Any]:
    data = {campo: getattr(espacio, campo) for campo in _CAMPOS_ESPACIO}
    data["caracteristicas"] = list(espacio.caracteristicas)
    data["imagenes"] = list(espacio.imagenes)
    if incluir_horarios:
        data["horarios"] = list(espacio.horarios)
    data["puntuacion_promedio"] = 0
    data["total_resenas"] = 0
    return data

def get_puntuaciones(db: Session, espacio_ids: List[int]) -> Dict[int, Dict[str, Any]]:
    """Puntuación y reseñas desde vista_estadisticas_espacios; {} si la vista falla."""
    if not espacio_ids:
        return {}
    consulta = text(
        "SELECT id, puntuacion_promedio, total_resenas "
        "FROM vista_estadisticas_espacios WHERE id IN :ids"
    ).bindparams(bindparam("ids", expanding=True))
    try:
        filas = db.execute(consulta, {"ids": list(espacio_ids)}).mappings().all()
    except SQLAlchemyError as e:
        db.rollback()
        logger.warning("No se pudieron leer las puntuaciones de los espacios: %s", e)
        return {}
    return {
        fila["id"]: {
            "puntuacion_promedio": fila["puntuacion_promedio"] or 0,
            "total_resenas": fila["total_resenas"] or 0,
        }
        for fila in filas
    }

def _aplicar_puntuaciones(db: Session, espacios: List[Dict[str, Any]]) -> None:
    puntuaciones = get_puntuaciones(db, [e["id"] for e in espacios])
    for espacio in espacios:
        espacio.update(puntuaciones.get(espacio["id"], {}))

def get_espacios(db: Session, filtros: FiltrosEspacios) -> Tuple[List[Dict[str, Any]], Dict[str, int]]:
    query = (
        db.query(EspacioDeportivo)
        .options(
            selectinload(EspacioDeportivo.caracteristicas),
            selectinload(EspacioDeportivo.imagenes),
        )
        .filter(EspacioDeportivo.estado_espacio == ESTADO_ACTIVO)
    )

    if filtros.busqueda:
        patron = f"%{filtros.busqueda}%"
        query = query.filter(or_(
            EspacioDeportivo.nombre.ilike(patron),
            EspacioDeportivo.descripcion.ilike(patron),
        ))
    if filtros.tipo:
        query = query.filter(EspacioDeportivo.tipo == filtros.tipo)
    if filtros.ciudad:
        query = query.filter(EspacioDeportivo.ciudad == filtros.ciudad)
    if filtros.precio_min is not None:
        query = query.filter(EspacioDeportivo.precio_hora >= filtros.precio_min)
    if filtros.precio_max is not None:
        query = query.filter(EspacioDeportivo.precio_hora <= filtros.precio_max)
    if filtros.capacidad_min is not None:
        query = query.filter(EspacioDeportivo.capacidad_min >= filtros.capacidad_min)

    if filtros.ordenar_por == "precio_asc":
        query = query.order_by(EspacioDeportivo.precio_hora.asc())
    elif filtros.ordenar_por == "precio_desc":
        query = query.order_by(EspacioDeportivo.precio_hora.desc())
    elif filtros.ordenar_por == "calificacion":
        query = query.order_by(EspacioDeportivo.id.desc())
    else:
        # popularidad y orden por defecto: más recientes primero
        query = query.order_by(EspacioDeportivo.created_at.desc(), EspacioDeportivo.id.desc())

    total = query.count()
    desde = (filtros.page - 1) * filtros.per_page
    espacios = [espacio_a_dict(e) for e in query.offset(desde).limit(filtros.per_page).all()]
    _aplicar_puntuaciones(db, espacios)

    paginacion = {
        "total": total,
        "pagina_actual": filtros.page,
        "total_paginas": math.ceil(total / filtros.per_page),
        "por_pagina": filtros.per_page,
    }
    return espacios, paginacion

def get_espacio(db: Session, espacio_id: int) -> Optional[Dict[str, Any]]:
    """Detalle de un espacio activo, con horarios."""
    espacio = (
        db.query(EspacioDeportivo)
        .filter(EspacioDeportivo.id == espacio_id, EspacioDeportivo.estado_espacio == ESTADO_ACTIVO)
        .first()
    )
    if espacio is None:
        return None
    data = espacio_a_dict(espacio, incluir_horarios=True)
    _aplicar_puntuaciones(db, [data])
    return data

def existe_espacio(db: Session, espacio_id: int) -> bool:
    return db.query(EspacioDeportivo.id).filter(EspacioDeportivo.id == espacio_id).first() is not None

def get_espacios_by_propietario(db: Session, propietario_id: int) -> List[Dict[str, Any]]:
    espacios = (
        db.query(EspacioDeportivo)
        .filter(EspacioDeportivo.propietario_id == propietario_id)
        .order_by(EspacioDeportivo.created_at.desc(), EspacioDeportivo.id.desc())
        .all()
    )
    return [espacio_a_dict(e) for e in espacios]

def get_tipos(db: Session) -> List[str]:
    filas = (
        db.query(EspacioDeportivo.tipo)
        .filter(EspacioDeportivo.estado_espacio == ESTADO_ACTIVO)
        .distinct()
        .order_by(EspacioDeportivo.tipo)
        .all()
    )
    return [fila.tipo for fila in filas]

def get_ciudades(db: Session) -> List[str]:
    filas = (
        db.query(EspacioDeportivo.ciudad)
        .filter(EspacioDeportivo.estado_espacio == ESTADO_ACTIVO)
        .distinct()
        .order_by(EspacioDeportivo.ciudad)
        .all()
    )
    return [fila.ciudad for fila in filas]

def get_caracteristicas(db: Session) -> List[str]:
    filas = (
        db.query(CaracteristicaEspacio.nombre)
        .distinct()
        .order_by(CaracteristicaEspacio.nombre)
        .all()
    )
    return [fila.nombre for fila in filas]

# =======================================================
# Escritura (sin transacción global: cada paso hace commit)
# =======================================================

def create_espacio(db: Session, propietario_id: int, datos: Dict[str, Any]) -> EspacioDeportivo:
    db_espacio = EspacioDeportivo(
        **datos,
        propietario_id=propietario_id,
        estado_espacio="pendiente",
    )
    db.add(db_espacio)
    db.commit()
    db.refresh(db_espacio)
    return db_espacio

def add_caracteristicas(db: Session, espacio_id: int, caracteristicas: List[Dict[str, Any]]) -> None:
    db.add_all([
        CaracteristicaEspacio(espacio_id=espacio_id, nombre=c["nombre"], valor=c["valor"])
        for c in caracteristicas
    ])
    db.commit()

def add_imagenes(db: Session, espacio_id: int, imagenes: List[Dict[str, Any]]) -> None:
    db.add_all([
        ImagenEspacio(espacio_id=espacio_id, url=img["url"], orden=img.get("orden", 0))
        for img in imagenes
    ])
    db.commit()

def add_horarios(db: Session, espacio_id: int, horarios: List[Dict[str, Any]]) -> None:
    db.add_all([
        HorarioDisponibilidad(
            espacio_id=espacio_id,
            dia_semana=h["dia_semana"],
            hora_inicio=h["hora_inicio"],
            hora_fin=h["hora_fin"],
            disponible=h.get("disponible", True),
            precio_especial=h.get("precio_especial"),
        )
        for h in horarios
    ])
    db.commit()

def crear_espacio_completo(
    db: Session,
    propietario_id: int,
    datos: Dict[str, Any],
    caracteristicas: List[Dict[str, Any]],
    imagenes: List[Dict[str, Any]],
    horarios: List[Dict[str, Any]],
) -> EspacioDeportivo:
    """
    Inserta el espacio y después sus características, imágenes y horarios,
    cada grupo solo si no está vacío. Si un grupo falla no se insertan los
    siguientes y el espacio permanece creado (CreacionIncompletaError).
    """
    espacio = create_espacio(db, propietario_id, datos)
    logger.info("Espacio %s creado por el usuario %s", espacio.id, propietario_id)

    etapas = (
        ("características", add_caracteristicas, caracteristicas),
        ("imágenes", add_imagenes, imagenes),
        ("horarios", add_horarios, horarios),
    )
    for etapa, insertar, filas in etapas:
        if not filas:
            continue
        try:
            insertar(db, espacio.id, filas)
        except Exception as e:
            db.rollback()
            logger.exception("Error al agregar %s al espacio %s", etapa, espacio.id)
            raise CreacionIncompletaError(espacio.id, etapa, e) from e

    db.refresh(espacio)
    return espacio
