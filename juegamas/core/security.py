import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request, Response
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from juegamas.config import settings
from juegamas.core.core import allowed_roles
from juegamas.core.exceptions import AuthException, ForbiddenException
from juegamas.database import get_db
from juegamas.models.usuario import Usuario

logger = logging.getLogger(__name__)

AUTH_COOKIE = "authToken"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="api/auth/login", auto_error=False)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Firma un token con los claims recibidos ({userId, email, role}).
    Sin expires_delta se usa JWT_EXPIRY (7 días por defecto).
    """
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(seconds=settings.jwt_expiry_seconds)

    to_encode.update({"iat": now, "exp": now + expires_delta})
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

def token_para_usuario(usuario: Usuario) -> str:
    return create_access_token(
        data={"userId": usuario.id, "email": usuario.email, "role": usuario.role}
    )

def verify_token(token: str) -> Optional[dict]:
    """Devuelve el payload, o None si la firma o la expiración no son válidas."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        logger.warning("Token JWT rechazado: %s", e)
        return None

    if not payload.get("userId") or not payload.get("role"):
        return None
    return payload

def set_auth_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=AUTH_COOKIE,
        value=token,
        max_age=settings.jwt_expiry_seconds,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="strict",
    )

def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(key=AUTH_COOKIE, path="/")

def get_current_user(
    request: Request,
    bearer_token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Usuario:
    """
    Resuelve el usuario de la petición. Acepta 'Authorization: Bearer' o la
    cookie authToken, y siempre recarga el usuario desde la base de datos.
    """
    token = bearer_token or request.cookies.get(AUTH_COOKIE)
    if not token:
        raise AuthException("No autorizado")

    payload = verify_token(token)
    if payload is None:
        raise AuthException("Token inválido o expirado")

    try:
        user_id = int(payload["userId"])
    except (TypeError, ValueError):
        raise AuthException("Token inválido")

    usuario = db.query(Usuario).filter(Usuario.id == user_id).first()
    if usuario is None:
        raise AuthException("Usuario no encontrado")

    return usuario

def require_roles(*roles: str):
    """Dependencia que exige que el usuario actual tenga alguno de los roles."""
    def dependency(current_user: Usuario = Depends(get_current_user)) -> Usuario:
        if not allowed_roles(current_user, roles):
            raise ForbiddenException()
        return current_user
    return dependency
