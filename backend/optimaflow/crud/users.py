import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from optimaflow.core.config import settings
from optimaflow.core.errors import StoreUnavailable, ValidationError
from optimaflow.db.base import ahora
from optimaflow.models.enums import Role
from optimaflow.models.user import User

logger = logging.getLogger(__name__)


def get_user_by_open_id(db: Optional[Session], open_id: str) -> Optional[User]:
    if db is None:
        logger.warning("No se puede obtener el usuario: base de datos no disponible")
        return None
    return db.query(User).filter(User.open_id == open_id).first()


# Lo llama el flujo de login (callback OAuth), que vive fuera de esta API
def upsert_user(
    db: Optional[Session],
    open_id: str,
    name: Optional[str] = None,
    email: Optional[str] = None,
    login_method: Optional[str] = None,
    role: Optional[Role] = None,
    last_signed_in: Optional[datetime] = None,
) -> User:
    """Registra un inicio de sesión.

    Crea el usuario la primera vez; en los siguientes logins actualiza los
    campos enviados y siempre ``last_signed_in``. El propietario configurado
    en ``OWNER_OPEN_ID`` pasa a admin si no se indica otro rol.
    """
    if not open_id:
        raise ValidationError("open_id es obligatorio")
    if db is None:
        raise StoreUnavailable()

    if role is None and settings.owner_open_id and open_id == settings.owner_open_id:
        role = Role.ADMIN

    usuario = get_user_by_open_id(db, open_id)
    if usuario is None:
        usuario = User(open_id=open_id, role=role or Role.USER)
        db.add(usuario)
        logger.info("Nuevo usuario registrado: %s", open_id)

    for campo, valor in (("name", name), ("email", email), ("login_method", login_method)):
        if valor is not None:
            setattr(usuario, campo, valor)
    if role is not None:
        usuario.role = role
    usuario.last_signed_in = last_signed_in or ahora()

    db.commit()
    db.refresh(usuario)
    return usuario
