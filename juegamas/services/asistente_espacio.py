# juegamas/services/asistente_espacio.py
"""
Asistente de creación de espacios deportivos.

Siete pasos lineales; cada paso valida sus propios campos antes de permitir
avanzar. Solo el paso final (resumen) escribe en la base de datos, y lo hace
a través de juegamas.crud.espacios.crear_espacio_completo.
"""

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

PASOS = [
    {"id": "info-basica", "titulo": "Información Básica"},
    {"id": "ubicacion", "titulo": "Ubicación"},
    {"id": "caracteristicas", "titulo": "Características"},
    {"id": "precios", "titulo": "Precios"},
    {"id": "horarios", "titulo": "Horarios"},
    {"id": "imagenes", "titulo": "Imágenes"},
    {"id": "resumen", "titulo": "Confirmación"},
]

ULTIMO_PASO = len(PASOS) - 1

class PasoInvalidoError(Exception):
    def __init__(self, paso: int, errores: Dict[str, str]):
        self.paso = paso
        self.errores = errores
        super().__init__(f"El paso '{PASOS[paso]['id']}' tiene errores: {errores}")

def _texto(valor: Any) -> str:
    return "" if valor is None else str(valor).strip()

# =======================================================
# Validadores por paso: devuelven {campo: mensaje}
# =======================================================

def validar_info_basica(datos: Dict[str, Any]) -> Dict[str, str]:
    errores = {}
    if not _texto(datos.get("nombre")):
        errores["nombre"] = "El nombre es obligatorio"

    tipo = _texto(datos.get("tipo"))
    if not tipo:
        errores["tipo"] = "Debes seleccionar un tipo de espacio"
    elif tipo == "Otro" and not _texto(datos.get("tipo_personalizado")):
        errores["tipo_personalizado"] = "Debes ingresar un tipo de espacio"

    capacidad_min = datos.get("capacidad_min")
    capacidad_max = datos.get("capacidad_max")
    if capacidad_min is not None and capacidad_max is not None and capacidad_min > capacidad_max:
        errores["capacidad_min"] = "La capacidad mínima no puede ser mayor que la máxima"

    duracion = datos.get("duracion_turno")
    if duracion is None:
        duracion = 60
    if duracion <= 0:
        errores["duracion_turno"] = "La duración del turno debe ser mayor a 0"
    return errores

def validar_ubicacion(datos: Dict[str, Any]) -> Dict[str, str]:
    errores = {}
    if not _texto(datos.get("direccion")):
        errores["direccion"] = "La dirección es obligatoria"
    if not _texto(datos.get("ciudad")):
        errores["ciudad"] = "Debes seleccionar una ciudad"
    return errores

def validar_precios(datos: Dict[str, Any]) -> Dict[str, str]:
    errores = {}
    precio_base = datos.get("precio_base") or 0
    precio_hora = datos.get("precio_hora") or 0
    if precio_base < 0:
        errores["precio_base"] = "El precio base no puede ser negativo"
    if precio_hora <= 0:
        errores["precio_hora"] = "El precio por hora debe ser mayor a 0"
    return errores

def validar_horarios(datos: Dict[str, Any]) -> Dict[str, str]:
    errores = {}
    for i, horario in enumerate(datos.get("horarios") or []):
        if horario["hora_fin"] <= horario["hora_inicio"]:
            errores[f"horarios.{i}"] = "La hora de fin debe ser posterior a la hora de inicio"
    return errores

def validar_imagenes(datos: Dict[str, Any]) -> Dict[str, str]:
    errores = {}
    if not datos.get("imagenes"):
        errores["imagenes"] = "Por favor, agrega al menos una imagen de tu espacio deportivo."
    if not _texto(datos.get("imagen_principal")):
        errores["imagen_principal"] = "Por favor, selecciona una imagen principal."
    return errores

def _sin_validacion(datos: Dict[str, Any]) -> Dict[str, str]:
    return {}

VALIDADORES = [
    validar_info_basica,
    validar_ubicacion,
    _sin_validacion,  # características
    validar_precios,
    validar_horarios,
    validar_imagenes,
    _sin_validacion,  # resumen
]

class AsistenteEspacio:
    """Estado acumulado del asistente y navegación entre pasos."""

    def __init__(self, datos: Optional[Dict[str, Any]] = None, paso: int = 0):
        if not 0 <= paso <= ULTIMO_PASO:
            raise ValueError(f"Paso fuera de rango: {paso}")
        self.datos: Dict[str, Any] = dict(datos or {})
        self.paso_actual = paso

    @property
    def es_ultimo_paso(self) -> bool:
        return self.paso_actual == ULTIMO_PASO

    def actualizar_datos(self, parcial: Dict[str, Any]) -> None:
        self.datos.update(parcial)

    def validar_paso(self, paso: Optional[int] = None) -> Dict[str, str]:
        paso = self.paso_actual if paso is None else paso
        return VALIDADORES[paso](self.datos)

    def siguiente_paso(self) -> int:
        errores = self.validar_paso()
        if errores:
            raise PasoInvalidoError(self.paso_actual, errores)

        # "Otro" se sustituye por el tipo escrito a mano
        if self.paso_actual == 0 and _texto(self.datos.get("tipo")) == "Otro":
            self.datos["tipo"] = _texto(self.datos.get("tipo_personalizado"))

        if self.paso_actual < ULTIMO_PASO:
            self.paso_actual += 1
        return self.paso_actual

    def paso_anterior(self) -> int:
        if self.paso_actual > 0:
            self.paso_actual -= 1
        return self.paso_actual

    def ir_a_paso(self, indice: int) -> bool:
        """Solo se puede saltar hacia atrás o al paso actual."""
        if 0 <= indice <= self.paso_actual:
            self.paso_actual = indice
            return True
        return False

    def completar(self) -> Dict[str, Dict[str, str]]:
        """
        Recorre todos los pasos desde el actual hasta el resumen.
        Devuelve los errores del primer paso inválido (vacío si todo es válido).
        """
        while not self.es_ultimo_paso:
            try:
                self.siguiente_paso()
            except PasoInvalidoError as e:
                logger.info("Asistente detenido en el paso %s: %s", PASOS[e.paso]["id"], e.errores)
                return {PASOS[e.paso]["id"]: e.errores}
        return {}

    def datos_espacio(self) -> Dict[str, Any]:
        """Campos de la fila espacios_deportivos (sin colecciones)."""
        datos = self.datos
        return {
            "nombre": _texto(datos.get("nombre")),
            "tipo": _texto(datos.get("tipo")),
            "descripcion": datos.get("descripcion"),
            "direccion": _texto(datos.get("direccion")),
            "ciudad": _texto(datos.get("ciudad")),
            "estado": datos.get("estado"),
            "codigo_postal": datos.get("codigo_postal"),
            "latitud": datos.get("latitud"),
            "longitud": datos.get("longitud"),
            "precio_base": datos.get("precio_base") or 0,
            "precio_hora": datos.get("precio_hora"),
            "capacidad_min": datos.get("capacidad_min"),
            "capacidad_max": datos.get("capacidad_max"),
            "duracion_turno": datos.get("duracion_turno") or 60,
            "imagen_principal": datos.get("imagen_principal"),
        }
