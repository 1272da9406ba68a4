"""Fixtures comunes: base SQLite en memoria, cliente de la API y LLM falso."""

import os

# Los tests nunca deben tocar una base real
os.environ.pop("DATABASE_URL", None)

from types import SimpleNamespace
from typing import List, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from optimaflow.db.base import Base, get_db
from optimaflow.main import app
from optimaflow.models.dealership import ExternalDealership
from optimaflow.services.company_analyzer import StructuredGenerator, get_generator


class FakeCompletions:
    """Sustituye a ``client.chat.completions`` y registra cada llamada."""

    def __init__(self, content: Optional[str] = None, error: Optional[Exception] = None):
        self.content = content
        self.error = error
        self.calls: List[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeLLMClient:
    def __init__(self, content: Optional[str] = None, error: Optional[Exception] = None):
        self.completions = FakeCompletions(content, error)
        self.chat = SimpleNamespace(completions=self.completions)


@pytest.fixture()
def engine():
    """Base en memoria nueva, compartida por todas las conexiones del test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def db(engine) -> Session:
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture()
def client(db: Session) -> TestClient:
    """Cliente de la API que usa la sesión del test."""
    app.dependency_overrides[get_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def offline_client() -> TestClient:
    """Cliente de la API sin base de datos configurada."""
    app.dependency_overrides[get_db] = lambda: None
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def make_generator():
    """Fábrica de StructuredGenerator con un cliente LLM falso."""

    def _make(content: Optional[str] = None, error: Optional[Exception] = None) -> StructuredGenerator:
        return StructuredGenerator(client=FakeLLMClient(content, error), deployment="test-deployment", timeout=5)

    return _make


@pytest.fixture()
def use_generator():
    """Instala un generador como dependencia de la API durante el test."""

    def _install(generator: StructuredGenerator) -> None:
        app.dependency_overrides[get_generator] = lambda: generator

    yield _install
    app.dependency_overrides.pop(get_generator, None)


@pytest.fixture()
def external_catalog(db: Session) -> List[ExternalDealership]:
    """Algunos concesionarios de OpenStreetMap en el catálogo externo."""
    rows = [
        ExternalDealership(
            id="ext-123", name="Autos Castellana", brand="SEAT", country="España",
            city="Madrid", address="Paseo de la Castellana 100", postal_code="28046",
            phone="+34 910 000 000", website="https://autoscastellana.example",
            latitude=40.4378, longitude=-3.6906, osm_id=123,
        ),
        ExternalDealership(
            id="ext-456", name="Berlin Auto Haus", brand="BMW", country="Alemania",
            city="Berlin", latitude=52.52, longitude=13.405, osm_id=456,
        ),
        ExternalDealership(
            id="ext-789", name="Motor Sevilla", country="España", city="Sevilla", osm_id=789,
        ),
        ExternalDealership(
            id="ext-nosrc", name="Concesionario Sin Origen", country="Portugal", city="Lisboa",
        ),
    ]
    db.add_all(rows)
    db.commit()
    return rows
