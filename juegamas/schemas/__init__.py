from .auth import *
from .usuario import *
from .espacio_deportivo import *
from .asistente import *
from .reserva import *
from .incidencia import *
from .contacto import *
from .admin import *

__all__ = [
    # Auth
    "Login", "Register", "AuthResponse", "VerifyResponse",

    # Usuario
    "UsuarioResponse", "PerfilUpdate", "PerfilResponse", "CambioContrasenia", "CambioRol",

    # Espacio Deportivo
    "CaracteristicaResponse", "ImagenResponse", "HorarioResponse",
    "EspacioDeportivoResponse", "FiltrosEspacios", "ImagenesSubidasResponse",

    # Asistente
    "CaracteristicaIn", "ImagenIn", "HorarioIn", "DatosEspacio",
    "ValidacionPaso", "ValidacionPasoResponse", "EspacioCreadoResponse",

    # Reserva
    "ReservaResponse", "ListaReservasResponse", "FiltrosReservas",
    "CancelacionRequest", "RespuestaOperacion",

    # Incidencia
    "IncidenciaCreate", "IncidenciaUpdate", "IncidenciaResponse", "ListaIncidenciasResponse",
    "FiltrosIncidencia", "RespuestaIncidencia", "EstadisticasIncidencias",

    # Contacto
    "MensajeContactoCreate", "MensajeContactoResponse",

    # Admin
    "AdminEstadisticas", "TendenciasAdmin", "UsuarioResumen", "ListaUsuariosResponse",
]
