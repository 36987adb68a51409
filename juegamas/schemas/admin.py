from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

class Tendencia(BaseModel):
    valor: float = 0
    esPositiva: bool = True

class TendenciasAdmin(BaseModel):
    clientes: Tendencia = Tendencia()
    propietarios: Tendencia = Tendencia()
    recintos: Tendencia = Tendencia()
    suscripciones: Tendencia = Tendencia()

class AdminEstadisticas(BaseModel):
    totalClientes: int = 0
    totalPropietarios: int = 0
    totalRecintos: int = 0
    suscripcionesActivas: int = 0
    tendencias: Optional[TendenciasAdmin] = None

class UsuarioResumen(BaseModel):
    id: int
    nombre: str
    email: str
    foto_perfil: Optional[str] = None
    role: str
    created_at: Optional[datetime] = None
    telefono: Optional[str] = None

    class Config:
        from_attributes = True

class ListaUsuariosResponse(BaseModel):
    usuarios: List[UsuarioResumen]
    total: Optional[int] = None
