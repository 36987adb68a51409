from sqlalchemy import Column, String, Integer, ForeignKey
from sqlalchemy.orm import relationship
from juegamas.database import Base

class CaracteristicaEspacio(Base):
    __tablename__ = "caracteristicas_espacios"

    id = Column(Integer, primary_key=True, index=True)
    espacio_id = Column(Integer, ForeignKey("espacios_deportivos.id", ondelete="CASCADE"), nullable=False, index=True)
    nombre = Column(String(100), nullable=False)  # vestuarios, iluminacion, estacionamiento...
    valor = Column(String(100), nullable=False)  # si/no o un valor concreto

    espacio = relationship("EspacioDeportivo", back_populates="caracteristicas")
