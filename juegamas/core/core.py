from typing import Any, Iterable, Optional

ROLES_VALIDOS = ("usuario", "propietario", "admin", "cliente")

# "cliente" es un alias histórico de "usuario"
_ALIAS_ROLES = {"cliente": "usuario"}

def canonical_role(role: Optional[str]) -> str:
    """Normaliza el rol: minúsculas y 'cliente' -> 'usuario'."""
    role = (role or "").strip().lower()
    return _ALIAS_ROLES.get(role, role)

def allowed_roles(current_user: Any, required_roles: Iterable[str]) -> bool:
    """
    Verifica si el rol del usuario actual está entre los roles permitidos.

    current_user debe tener un atributo 'role'; ambos lados se comparan
    ya normalizados con canonical_role.
    """
    user_role = canonical_role(current_user.role)
    return user_role in {canonical_role(r) for r in required_roles}
