import logging
import time

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from juegamas.core.exceptions import BadRequestException
from juegamas.core.security import get_current_user
from juegamas.crud import usuarios as crud_usuarios
from juegamas.database import get_db
from juegamas.models.usuario import Usuario
from juegamas.schemas.usuario import CambioContrasenia, PerfilResponse, PerfilUpdate
from juegamas.services.supabase_storage import BUCKET_AVATARES, SupabaseStorage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/profile", response_model=PerfilResponse)
def get_perfil(current_user: Usuario = Depends(get_current_user)):
    return {"status": "success", "user": current_user}

@router.put("/profile", response_model=PerfilResponse)
def update_perfil(
    datos: PerfilUpdate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    try:
        usuario = crud_usuarios.update_perfil(db, current_user, datos)
    except Exception:
        db.rollback()
        logger.exception("Error al actualizar el perfil del usuario %s", current_user.id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al actualizar información de perfil",
        )
    return {"status": "success", "user": usuario}

@router.post("/profile/photo")
async def upload_foto_perfil(
    photo: UploadFile = File(None),
    db: Session = Depends(get_db),
    storage: SupabaseStorage = Depends(get_storage),
    current_user: Usuario = Depends(get_current_user),
):
    if photo is None:
        raise BadRequestException("No se ha enviado ninguna imagen")

    url = await storage.upload_image(
        photo,
        bucket=BUCKET_AVATARES,
        folder="",
        filename=f"avatar-{current_user.id}-{int(time.time() * 1000)}",
    )

    try:
        crud_usuarios.update_foto_perfil(db, current_user, url)
    except Exception:
        db.rollback()
        logger.exception("Error al guardar la foto de perfil del usuario %s", current_user.id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al actualizar la foto de perfil",
        )
    return {"status": "success", "photoUrl": url}

@router.put("/profile/password")
def cambiar_contrasenia(
    datos: CambioContrasenia,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_user),
):
    if not crud_usuarios.cambiar_contrasenia(db, current_user, datos.current_password, datos.new_password):
        raise BadRequestException("La contraseña actual es incorrecta")
    return {"status": "success", "message": "Contraseña actualizada correctamente"}
