import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from juegamas.core.exceptions import AuthException
from juegamas.core.security import clear_auth_cookie, set_auth_cookie, token_para_usuario
from juegamas.crud import usuarios as crud_usuarios
from juegamas.database import get_db
from juegamas.schemas.auth import AuthResponse, Login, Register, VerifyResponse
from juegamas.schemas.usuario import UsuarioResponse

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/login", response_model=AuthResponse)
def login(datos: Login, response: Response, db: Session = Depends(get_db)):
    usuario = crud_usuarios.autenticar(db, datos.email, datos.password)
    if not usuario:
        # Mismo mensaje para email inexistente y contraseña incorrecta
        raise AuthException("Email o contraseña incorrectos")

    set_auth_cookie(response, token_para_usuario(usuario))
    logger.info("Inicio de sesión del usuario %s", usuario.id)
    return {"message": "Inicio de sesión correcto", "user": usuario}

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(datos: Register, response: Response, db: Session = Depends(get_db)):
    """
    Registra un usuario e inicia su sesión.
    Un email ya registrado responde 500 igual que cualquier otro fallo de alta.
    """
    try:
        usuario = crud_usuarios.create_usuario(db, datos)
    except Exception:
        db.rollback()
        logger.exception("Error al registrar el usuario %s", datos.email)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al registrar el usuario",
        )

    set_auth_cookie(response, token_para_usuario(usuario))
    return {"message": "Usuario registrado correctamente", "user": usuario}

@router.post("/logout")
def logout(response: Response):
    clear_auth_cookie(response)
    return {"message": "Sesión cerrada correctamente"}

@router.get("/verify", response_model=VerifyResponse)
def verify(
    x_user_id: Optional[str] = Header(None),
    db: Session = Depends(get_db),
):
    """Devuelve el usuario identificado por la puerta de autorización."""
    usuario = None
    if x_user_id and x_user_id.isdigit():
        usuario = crud_usuarios.get_usuario(db, int(x_user_id))

    if usuario is None:
        return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"authenticated": False})

    return {"authenticated": True, "user": UsuarioResponse.model_validate(usuario)}
