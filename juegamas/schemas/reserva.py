from pydantic import BaseModel, Field
from typing import List, Literal, Optional
from datetime import date, time, datetime

EstadoReserva = Literal["pendiente", "confirmada", "cancelada", "completada"]

class ReservaResponse(BaseModel):
    id: int
    codigo_reserva: Optional[str] = None
    fecha: date
    hora_inicio: time
    hora_fin: time
    precio_total: float
    estado: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    usuario_id: int
    usuario_nombre: Optional[str] = None
    usuario_email: Optional[str] = None
    usuario_telefono: Optional[str] = None
    espacio_id: int
    espacio_nombre: Optional[str] = None
    espacio_tipo: Optional[str] = None
    espacio_direccion: Optional[str] = None
    espacio_ciudad: Optional[str] = None
    propietario_id: Optional[int] = None
    propietario_nombre: Optional[str] = None
    propietario_email: Optional[str] = None
    notas: Optional[str] = None
    metodo_pago: Optional[str] = None
    id_transaccion: Optional[str] = None
    cancelado_por: Optional[int] = None
    motivo_cancelacion: Optional[str] = None

class ListaReservasResponse(BaseModel):
    reservas: List[ReservaResponse]
    total: int

class FiltrosReservas(BaseModel):
    estado: Optional[Literal["pendiente", "confirmada", "cancelada", "completada", "todas"]] = None
    fecha_desde: Optional[date] = None
    fecha_hasta: Optional[date] = None
    page: int = Field(1, ge=1)
    per_page: int = Field(10, ge=1, le=100)

class CancelacionRequest(BaseModel):
    motivo: str = Field(..., min_length=1, max_length=500)

class RespuestaOperacion(BaseModel):
    success: bool
    message: str
