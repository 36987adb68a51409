from pydantic import BaseModel, Field, field_validator
from typing import List, Literal, Optional
from datetime import date, datetime

TipoIncidencia = Literal[
    "problema_reserva",
    "problema_espacio",
    "problema_pago",
    "problema_acceso",
    "sugerencia",
    "otro",
]
EstadoIncidencia = Literal["pendiente", "en_revision", "resuelta", "cerrada"]

class IncidenciaCreate(BaseModel):
    tipo: TipoIncidencia
    asunto: str = Field(..., min_length=1, max_length=200)
    descripcion: str = Field(..., min_length=1)
    reserva_id: Optional[int] = None
    archivos_adjuntos: List[str] = []

class IncidenciaUpdate(BaseModel):
    descripcion: Optional[str] = Field(None, min_length=1)
    archivos_adjuntos: Optional[List[str]] = None

    @field_validator("descripcion")
    def descripcion_no_nula(cls, v):
        if v is None:
            raise ValueError("La descripción no puede estar vacía")
        return v

class IncidenciaResponse(BaseModel):
    id: int
    usuario_id: int
    reserva_id: Optional[int] = None
    tipo: str
    asunto: str
    descripcion: str
    estado: str
    respuesta: Optional[str] = None
    archivos_adjuntos: Optional[List[str]] = None
    fecha_creacion: Optional[datetime] = None
    fecha_actualizacion: Optional[datetime] = None

    class Config:
        from_attributes = True

class ListaIncidenciasResponse(BaseModel):
    incidencias: List[IncidenciaResponse]
    total: int

class FiltrosIncidencia(BaseModel):
    tipo: Optional[TipoIncidencia] = None
    estado: Optional[EstadoIncidencia] = None
    fecha_desde: Optional[date] = None
    fecha_hasta: Optional[date] = None
    reserva_id: Optional[int] = None
    page: int = Field(1, ge=1)
    per_page: int = Field(10, ge=1, le=100)

class RespuestaIncidencia(BaseModel):
    success: bool
    message: str
    incidencia: Optional[IncidenciaResponse] = None

class EstadisticasIncidencias(BaseModel):
    total: int = 0
    pendientes: int = 0
    en_revision: int = 0
    resueltas: int = 0
    cerradas: int = 0
