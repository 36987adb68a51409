from sqlalchemy import Column, String, Integer, Text, DateTime, Float, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from juegamas.database import Base
from sqlalchemy.sql import func

class EspacioDeportivo(Base):
    __tablename__ = "espacios_deportivos"

    id = Column(Integer, primary_key=True, index=True)
    propietario_id = Column(Integer, ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False, index=True)
    nombre = Column(String(150), nullable=False)
    tipo = Column(String(50), nullable=False)  # futbol, tenis, padel, basquet...
    descripcion = Column(Text)
    direccion = Column(String(255), nullable=False)
    ciudad = Column(String(100), nullable=False, index=True)
    estado = Column(String(100))  # provincia / región
    codigo_postal = Column(String(20))
    latitud = Column(Float, nullable=True)
    longitud = Column(Float, nullable=True)
    precio_base = Column(Numeric(10, 2), default=0)
    precio_hora = Column(Numeric(10, 2), nullable=False)
    capacidad_min = Column(Integer)
    capacidad_max = Column(Integer)
    duracion_turno = Column(Integer, nullable=False, default=60)  # minutos
    imagen_principal = Column(String(500))
    estado_espacio = Column(String(20), nullable=False, default="pendiente")  # pendiente, activo, inactivo
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relaciones
    propietario = relationship("Usuario", back_populates="espacios")
    caracteristicas = relationship("CaracteristicaEspacio", back_populates="espacio", order_by="CaracteristicaEspacio.id")
    imagenes = relationship("ImagenEspacio", back_populates="espacio", order_by="ImagenEspacio.orden")
    horarios = relationship(
        "HorarioDisponibilidad",
        back_populates="espacio",
        order_by="HorarioDisponibilidad.dia_semana",
    )
    reservas = relationship("Reserva", back_populates="espacio")
