from pydantic import BaseModel, EmailStr, Field
from typing import Literal, Optional

from juegamas.schemas.usuario import UsuarioResponse

class Login(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, description="Contraseña requerida")

class Register(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, description="La contraseña debe tener al menos 6 caracteres")
    nombre: str = Field(..., min_length=2, description="El nombre es demasiado corto")
    telefono: Optional[str] = None
    role: Optional[Literal["usuario", "propietario", "admin"]] = None

class AuthResponse(BaseModel):
    message: str
    user: UsuarioResponse

class VerifyResponse(BaseModel):
    authenticated: bool
    user: Optional[UsuarioResponse] = None
