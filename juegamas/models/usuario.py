from sqlalchemy import Column, String, Integer, DateTime, Text, Boolean, func
from sqlalchemy.orm import relationship
from juegamas.database import Base

class Usuario(Base):
    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(150), unique=True, nullable=False, index=True)
    nombre = Column(String(100), nullable=False)
    telefono = Column(String(20))
    foto_perfil = Column(String(500))
    biografia = Column(Text)
    notificaciones_email = Column(Boolean, default=True)
    notificaciones_app = Column(Boolean, default=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default="usuario")  # usuario, propietario, admin, cliente
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relaciones
    espacios = relationship("EspacioDeportivo", back_populates="propietario")
    reservas = relationship("Reserva", back_populates="usuario", foreign_keys="Reserva.usuario_id")
    incidencias = relationship("Incidencia", back_populates="usuario")
