from typing import List

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from sqlalchemy.orm import Session

from juegamas.core.exceptions import NotFoundException
from juegamas.core.security import require_roles
from juegamas.crud import espacios as crud_espacios
from juegamas.crud import estadisticas as crud_estadisticas
from juegamas.database import get_db
from juegamas.models.usuario import Usuario
from juegamas.schemas.espacio_deportivo import EspacioDeportivoResponse

router = APIRouter()

@router.get("/espacios", response_model=List[EspacioDeportivoResponse])
def get_mis_espacios(
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_roles("propietario", "admin")),
):
    """Espacios del propietario autenticado, en cualquier estado."""
    return crud_espacios.get_espacios_by_propietario(db, current_user.id)

@router.get("/resumen")
def get_resumen(
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(require_roles("propietario", "admin")),
):
    resumen = crud_estadisticas.get_resumen_propietario(db, current_user.id)
    if not resumen:
        raise NotFoundException("No se encontró información de resumen para este propietario")
    return jsonable_encoder(resumen)
