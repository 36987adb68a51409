from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

class MensajeContactoCreate(BaseModel):
    nombre: str = Field(..., min_length=3, description="El nombre debe tener al menos 3 caracteres")
    email: EmailStr
    telefono: Optional[str] = Field(None, max_length=20)
    asunto: str = Field(..., min_length=5, description="El asunto debe tener al menos 5 caracteres")
    mensaje: str = Field(..., min_length=20, description="El mensaje debe tener al menos 20 caracteres")

class MensajeContactoResponse(BaseModel):
    id: int
    nombre: str
    email: str
    telefono: Optional[str] = None
    asunto: str
    mensaje: str
    leido: bool
    respondido: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
