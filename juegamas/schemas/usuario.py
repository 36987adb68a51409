from pydantic import BaseModel, EmailStr, Field
from typing import Literal, Optional
from datetime import datetime

class UsuarioResponse(BaseModel):
    id: int
    email: EmailStr
    nombre: str
    telefono: Optional[str] = None
    foto_perfil: Optional[str] = None
    biografia: Optional[str] = None
    notificaciones_email: Optional[bool] = None
    notificaciones_app: Optional[bool] = None
    role: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class PerfilUpdate(BaseModel):
    # El nombre no es editable desde el perfil; se acepta y se descarta
    nombre: Optional[str] = None
    telefono: Optional[str] = Field(None, max_length=20)
    biografia: Optional[str] = None
    notificaciones_email: Optional[bool] = None
    notificaciones_app: Optional[bool] = None

class PerfilResponse(BaseModel):
    status: str = "success"
    user: UsuarioResponse

class CambioContrasenia(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, description="La contraseña debe tener al menos 6 caracteres")

class CambioRol(BaseModel):
    role: Literal["usuario", "propietario", "admin"]
