import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from juegamas.crud import contacto as crud_contacto
from juegamas.database import get_db
from juegamas.schemas.contacto import MensajeContactoCreate, MensajeContactoResponse

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("")
def enviar_mensaje(mensaje: MensajeContactoCreate, db: Session = Depends(get_db)):
    try:
        resultado = crud_contacto.create_mensaje(db, mensaje)
    except Exception:
        db.rollback()
        logger.exception("Error al guardar el mensaje de contacto")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al procesar el mensaje de contacto",
        )
    return {
        "success": True,
        "message": "Mensaje recibido correctamente",
        "data": MensajeContactoResponse.model_validate(resultado),
    }
