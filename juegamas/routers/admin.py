import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from juegamas.core.exceptions import NotFoundException
from juegamas.core.security import require_roles
from juegamas.crud import contacto as crud_contacto
from juegamas.crud import estadisticas as crud_estadisticas
from juegamas.crud import usuarios as crud_usuarios
from juegamas.database import get_db
from juegamas.models.usuario import Usuario
from juegamas.schemas.admin import AdminEstadisticas, ListaUsuariosResponse, TendenciasAdmin
from juegamas.schemas.contacto import MensajeContactoResponse
from juegamas.schemas.usuario import CambioRol, UsuarioResponse

logger = logging.getLogger(__name__)

# La puerta ya bloquea /api/admin para roles distintos de admin;
# la dependencia vuelve a comprobarlo contra la base de datos.
router = APIRouter(dependencies=[Depends(require_roles("admin"))])

@router.get("/estadisticas", response_model=AdminEstadisticas)
def get_estadisticas(db: Session = Depends(get_db)):
    estadisticas = crud_estadisticas.get_estadisticas_admin(db)
    # Sin histórico todavía: las tendencias se devuelven en cero
    return {**estadisticas, "tendencias": TendenciasAdmin()}

@router.get("/usuarios/recientes", response_model=ListaUsuariosResponse)
def get_usuarios_recientes(
    limite: int = Query(5, ge=1, le=100),
    db: Session = Depends(get_db),
):
    return {"usuarios": crud_usuarios.get_usuarios_recientes(db, limite)}

@router.get("/usuarios", response_model=ListaUsuariosResponse)
def get_usuarios(
    pagina: int = Query(1, ge=1),
    limite: int = Query(10, ge=1, le=100),
    role: Optional[str] = None,
    db: Session = Depends(get_db),
):
    usuarios, total = crud_usuarios.get_usuarios(db, skip=(pagina - 1) * limite, limit=limite, role=role)
    return {"usuarios": usuarios, "total": total}

@router.patch("/usuarios/{usuario_id}/rol", response_model=UsuarioResponse)
def cambiar_rol(
    usuario_id: int,
    datos: CambioRol,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_roles("admin")),
):
    usuario = crud_usuarios.get_usuario(db, usuario_id)
    if usuario is None:
        raise NotFoundException("Usuario no encontrado")
    usuario = crud_usuarios.update_role(db, usuario, datos.role)
    logger.info("El administrador %s cambió el rol del usuario %s a %s", current_user.id, usuario_id, datos.role)
    return usuario

@router.get("/contacto", response_model=List[MensajeContactoResponse])
def get_mensajes_contacto(
    no_leidos: bool = False,
    db: Session = Depends(get_db),
):
    return crud_contacto.get_mensajes(db, solo_no_leidos=no_leidos)

@router.patch("/contacto/{mensaje_id}/leido", response_model=MensajeContactoResponse)
def marcar_leido(mensaje_id: int, db: Session = Depends(get_db)):
    mensaje = crud_contacto.marcar_como_leido(db, mensaje_id)
    if mensaje is None:
        raise NotFoundException("Mensaje no encontrado")
    return mensaje

@router.patch("/contacto/{mensaje_id}/respondido", response_model=MensajeContactoResponse)
def marcar_respondido(mensaje_id: int, db: Session = Depends(get_db)):
    mensaje = crud_contacto.marcar_como_respondido(db, mensaje_id)
    if mensaje is None:
        raise NotFoundException("Mensaje no encontrado")
    return mensaje
