import logging
from typing import Optional

FORMATO_LOG = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(nivel: Optional[str] = None) -> None:
    """Configura el logging raíz de la API (idempotente)."""
    logging.basicConfig(level=nivel or logging.INFO, format=FORMATO_LOG)
    # SQLAlchemy es muy ruidoso en INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
