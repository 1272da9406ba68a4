import logging
from datetime import datetime, timezone
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from optimaflow.core.config import settings

logger = logging.getLogger(__name__)


def crear_engine(database_url: str) -> Engine:
    """Crea el motor de SQLAlchemy para la URL dada."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


# Motor opcional: sin DATABASE_URL no hay store y get_db entrega None
engine: Optional[Engine] = crear_engine(settings.database_url) if settings.database_url else None

if engine is None:
    logger.warning("DATABASE_URL no configurada: la API funcionará sin base de datos")

# Fábrica de sesiones
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine) if engine is not None else None

# Base para modelos declarativos
Base = declarative_base()


def ahora() -> datetime:
    return datetime.now(timezone.utc)


# Dependencia de FastAPI: una sesión por petición, o None si no hay store
def get_db() -> Iterator[Optional[Session]]:
    if SessionLocal is None:
        yield None
        return
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
