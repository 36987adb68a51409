import logging
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from juegamas.core.security import get_password_hash, verify_password
from juegamas.models.usuario import Usuario
from juegamas.schemas.auth import Register
from juegamas.schemas.usuario import PerfilUpdate

logger = logging.getLogger(__name__)

def get_usuario(db: Session, usuario_id: int) -> Optional[Usuario]:
    return db.query(Usuario).filter(Usuario.id == usuario_id).first()

def get_usuario_by_email(db: Session, email: str) -> Optional[Usuario]:
    return db.query(Usuario).filter(func.lower(Usuario.email) == email.lower()).first()

def autenticar(db: Session, email: str, password: str) -> Optional[Usuario]:
    usuario = get_usuario_by_email(db, email)
    if not usuario or not verify_password(password, usuario.password_hash):
        return None
    return usuario

def create_usuario(db: Session, datos: Register) -> Usuario:
    """Crea el usuario; un email repetido se rechaza con ValueError."""
    if get_usuario_by_email(db, datos.email):
        raise ValueError("El email ya está registrado")

    db_usuario = Usuario(
        email=datos.email,
        nombre=datos.nombre,
        telefono=datos.telefono,
        password_hash=get_password_hash(datos.password),
        role=datos.role or "usuario",
    )
    db.add(db_usuario)
    db.commit()
    db.refresh(db_usuario)
    return db_usuario

def update_perfil(db: Session, usuario: Usuario, datos: PerfilUpdate) -> Usuario:
    cambios = datos.model_dump(exclude_unset=True, exclude={"nombre"})
    for campo, valor in cambios.items():
        setattr(usuario, campo, valor)
    db.commit()
    db.refresh(usuario)
    return usuario

def update_foto_perfil(db: Session, usuario: Usuario, url: str) -> Usuario:
    usuario.foto_perfil = url
    db.commit()
    db.refresh(usuario)
    return usuario

def cambiar_contrasenia(db: Session, usuario: Usuario, actual: str, nueva: str) -> bool:
    if not verify_password(actual, usuario.password_hash):
        return False
    usuario.password_hash = get_password_hash(nueva)
    db.commit()
    return True

def get_usuarios_recientes(db: Session, limite: int = 5) -> List[Usuario]:
    return (
        db.query(Usuario)
        .order_by(Usuario.created_at.desc(), Usuario.id.desc())
        .limit(limite)
        .all()
    )

def get_usuarios(db: Session, skip: int = 0, limit: int = 20, role: Optional[str] = None):
    query = db.query(Usuario)
    if role:
        query = query.filter(Usuario.role == role)
    total = query.count()
    usuarios = (
        query.order_by(Usuario.created_at.desc(), Usuario.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
    return usuarios, total

def update_role(db: Session, usuario: Usuario, role: str) -> Usuario:
    usuario.role = role
    db.commit()
    db.refresh(usuario)
    return usuario
