from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from datetime import time

from juegamas.schemas.espacio_deportivo import EspacioDeportivoResponse

class CaracteristicaIn(BaseModel):
    nombre: str = Field(..., min_length=1, max_length=100)
    valor: str = Field(..., max_length=100)

class ImagenIn(BaseModel):
    url: str = Field(..., min_length=1, max_length=500)
    orden: int = Field(0, ge=0)

class HorarioIn(BaseModel):
    dia_semana: int = Field(..., ge=0, le=6, description="0=domingo ... 6=sábado")
    hora_inicio: time
    hora_fin: time
    disponible: bool = True
    precio_especial: Optional[float] = Field(None, ge=0)

class DatosEspacio(BaseModel):
    """Estado acumulado del asistente; todos los campos son opcionales."""
    # Información básica
    nombre: Optional[str] = Field(None, max_length=150)
    tipo: Optional[str] = Field(None, max_length=50)
    tipo_personalizado: Optional[str] = Field(None, max_length=50)
    descripcion: Optional[str] = None
    capacidad_min: Optional[int] = Field(None, ge=0)
    capacidad_max: Optional[int] = Field(None, ge=0)
    duracion_turno: Optional[int] = None

    # Ubicación
    direccion: Optional[str] = Field(None, max_length=255)
    ciudad: Optional[str] = Field(None, max_length=100)
    estado: Optional[str] = Field(None, max_length=100)
    codigo_postal: Optional[str] = Field(None, max_length=20)
    latitud: Optional[float] = Field(None, ge=-90, le=90)
    longitud: Optional[float] = Field(None, ge=-180, le=180)

    # Precios
    precio_base: Optional[float] = None
    precio_hora: Optional[float] = None

    # Colecciones
    caracteristicas: List[CaracteristicaIn] = []
    horarios: List[HorarioIn] = []
    imagenes: List[ImagenIn] = []
    imagen_principal: Optional[str] = Field(None, max_length=500)

class ValidacionPaso(BaseModel):
    paso: int = Field(..., ge=0, le=6)
    datos: DatosEspacio

class ValidacionPasoResponse(BaseModel):
    paso: int
    valido: bool
    siguiente_paso: int
    errores: Dict[str, str] = {}

class EspacioCreadoResponse(BaseModel):
    message: str
    espacio: EspacioDeportivoResponse
