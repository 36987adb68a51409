from sqlalchemy import Column, Integer, Time, Boolean, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from juegamas.database import Base

class HorarioDisponibilidad(Base):
    __tablename__ = "horarios_disponibilidad"

    id = Column(Integer, primary_key=True, index=True)
    espacio_id = Column(Integer, ForeignKey("espacios_deportivos.id", ondelete="CASCADE"), nullable=False, index=True)
    dia_semana = Column(Integer, nullable=False)  # 0=domingo ... 6=sábado
    hora_inicio = Column(Time, nullable=False)
    hora_fin = Column(Time, nullable=False)
    disponible = Column(Boolean, default=True)
    precio_especial = Column(Numeric(10, 2), nullable=True)

    espacio = relationship("EspacioDeportivo", back_populates="horarios")
