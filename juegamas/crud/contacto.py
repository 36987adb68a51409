from typing import List, Optional

from sqlalchemy.orm import Session

from juegamas.models.mensaje_contacto import MensajeContacto
from juegamas.schemas.contacto import MensajeContactoCreate

def create_mensaje(db: Session, mensaje: MensajeContactoCreate) -> MensajeContacto:
    db_mensaje = MensajeContacto(**mensaje.model_dump(), leido=False, respondido=False)
    db.add(db_mensaje)
    db.commit()
    db.refresh(db_mensaje)
    return db_mensaje

def get_mensajes(db: Session, solo_no_leidos: bool = False) -> List[MensajeContacto]:
    query = db.query(MensajeContacto)
    if solo_no_leidos:
        query = query.filter(MensajeContacto.leido.is_(False))
    return query.order_by(MensajeContacto.created_at.desc(), MensajeContacto.id.desc()).all()

def _marcar(db: Session, mensaje_id: int, campo: str) -> Optional[MensajeContacto]:
    mensaje = db.query(MensajeContacto).filter(MensajeContacto.id == mensaje_id).first()
    if mensaje is None:
        return None
    setattr(mensaje, campo, True)
    db.commit()
    db.refresh(mensaje)
    return mensaje

def marcar_como_leido(db: Session, mensaje_id: int) -> Optional[MensajeContacto]:
    return _marcar(db, mensaje_id, "leido")

def marcar_como_respondido(db: Session, mensaje_id: int) -> Optional[MensajeContacto]:
    return _marcar(db, mensaje_id, "respondido")
