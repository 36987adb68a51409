from sqlalchemy import Column, String, Integer, ForeignKey
from sqlalchemy.orm import relationship
from juegamas.database import Base

class ImagenEspacio(Base):
    __tablename__ = "imagenes_espacios"

    id = Column(Integer, primary_key=True, index=True)
    espacio_id = Column(Integer, ForeignKey("espacios_deportivos.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String(500), nullable=False)
    orden = Column(Integer, nullable=False, default=0)

    espacio = relationship("EspacioDeportivo", back_populates="imagenes")
