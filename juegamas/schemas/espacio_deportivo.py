from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import datetime, time

class CaracteristicaResponse(BaseModel):
    id: int
    nombre: str
    valor: str

    class Config:
        from_attributes = True

class ImagenResponse(BaseModel):
    id: int
    url: str
    orden: int

    class Config:
        from_attributes = True

class HorarioResponse(BaseModel):
    id: int
    dia_semana: int
    hora_inicio: time
    hora_fin: time
    disponible: bool
    precio_especial: Optional[float] = None

    class Config:
        from_attributes = True

class EspacioDeportivoResponse(BaseModel):
    id: int
    propietario_id: int
    nombre: str
    tipo: str
    descripcion: Optional[str] = None
    direccion: str
    ciudad: str
    estado: Optional[str] = None
    codigo_postal: Optional[str] = None
    latitud: Optional[float] = None
    longitud: Optional[float] = None
    precio_base: Optional[float] = None
    precio_hora: float
    capacidad_min: Optional[int] = None
    capacidad_max: Optional[int] = None
    duracion_turno: int
    imagen_principal: Optional[str] = None
    estado_espacio: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    caracteristicas: List[CaracteristicaResponse] = []
    imagenes: List[ImagenResponse] = []
    horarios: Optional[List[HorarioResponse]] = None
    puntuacion_promedio: float = 0
    total_resenas: int = 0

    class Config:
        from_attributes = True

class FiltrosEspacios(BaseModel):
    busqueda: Optional[str] = None
    tipo: Optional[str] = None
    ciudad: Optional[str] = None
    precio_min: Optional[int] = Field(None, ge=0)
    precio_max: Optional[int] = Field(None, ge=0)
    capacidad_min: Optional[int] = Field(None, ge=0)
    ordenar_por: Optional[Literal["precio_asc", "precio_desc", "calificacion", "popularidad"]] = None
    page: int = Field(1, ge=1)
    per_page: int = Field(10, ge=1, le=100)

class ImagenesSubidasResponse(BaseModel):
    urls: List[str]
