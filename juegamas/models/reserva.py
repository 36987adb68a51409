from sqlalchemy import Column, String, Integer, Date, Time, Numeric, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from juegamas.database import Base
from sqlalchemy.sql import func

class Reserva(Base):
    __tablename__ = "reservas"

    id = Column(Integer, primary_key=True, index=True)
    codigo_reserva = Column(String(20), unique=True)
    usuario_id = Column(Integer, ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False, index=True)
    espacio_id = Column(Integer, ForeignKey("espacios_deportivos.id", ondelete="CASCADE"), nullable=False, index=True)
    fecha = Column(Date, nullable=False)
    hora_inicio = Column(Time, nullable=False)
    hora_fin = Column(Time, nullable=False)
    precio_total = Column(Numeric(10, 2), nullable=False)
    estado = Column(String(20), default="pendiente")  # pendiente, confirmada, cancelada, completada
    notas = Column(Text)
    metodo_pago = Column(String(50))
    id_transaccion = Column(String(100))
    cancelado_por = Column(Integer, ForeignKey("usuarios.id"), nullable=True)
    motivo_cancelacion = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relaciones
    usuario = relationship("Usuario", back_populates="reservas", foreign_keys=[usuario_id])
    espacio = relationship("EspacioDeportivo", back_populates="reservas")
    incidencias = relationship("Incidencia", back_populates="reserva")
