from .usuario import Usuario
from .espacio_deportivo import EspacioDeportivo
from .caracteristica_espacio import CaracteristicaEspacio
from .imagen_espacio import ImagenEspacio
from .horario_disponibilidad import HorarioDisponibilidad
from .reserva import Reserva
from .mensaje_contacto import MensajeContacto
from .incidencia import Incidencia

__all__ = [
    "Usuario", "EspacioDeportivo", "CaracteristicaEspacio", "ImagenEspacio",
    "HorarioDisponibilidad", "Reserva", "MensajeContacto", "Incidencia"
]
