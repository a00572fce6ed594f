"""
Fixtures de pytest para tests.
"""
import os

# Base en memoria y sin almacén remoto antes de importar la aplicación
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("REMOTE_SYNC_ENABLED", "false")

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session, create_engine
from sqlmodel.pool import StaticPool

from app.core.database import get_session
from app.models.registro import RegistroDiario
from app.services.cama_service import reemplazar_cama
from app.services.registro_service import crear_registro_vacio
from main import app


FECHA_TEST = "2025-01-15"


# Engine para tests (SQLite en memoria)
@pytest.fixture(name="engine")
def engine_fixture():
    """Crea un engine de test en memoria."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Crea una sesión de test."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(session):
    """Crea un cliente de test con sesión inyectada."""
    def get_session_override():
        yield session

    app.dependency_overrides[get_session] = get_session_override

    with TestClient(app) as client:
        yield client

    app.dependency_overrides.clear()


# Fixtures de datos de prueba

@pytest.fixture
def fecha():
    return FECHA_TEST


@pytest.fixture
def hoy():
    """Fecha de referencia para validar fechas de ingreso."""
    return date(2025, 1, 15)


@pytest.fixture
def registro(fecha) -> RegistroDiario:
    """Registro en blanco con todas las camas del catálogo."""
    return crear_registro_vacio(fecha)


@pytest.fixture
def paciente_data():
    """Datos de paciente de prueba (nombres de atributo)."""
    return {
        "nombre": "María Tuki",
        "rut": "12.345.678-5",
        "edad": "45a",
        "sexo_biologico": "Femenino",
        "prevision": "Fonasa",
        "condicion_permanencia": "Residente",
        "es_rapanui": True,
        "diagnostico": "Neumonía",
        "especialidad": "Medicina Interna",
        "estado": "Estable",
        "fecha_ingreso": "2025-01-10",
    }


@pytest.fixture
def ocupar(paciente_data):
    """Factory fixture para ocupar una cama en un registro."""
    def _ocupar(registro: RegistroDiario, cama_id: str, **datos) -> RegistroDiario:
        paciente = registro.camas[cama_id].model_copy(update={**paciente_data, **datos})
        return reemplazar_cama(registro, cama_id, paciente)

    return _ocupar


@pytest.fixture
def ocupar_con_cuna(ocupar):
    """Factory fixture: cama ocupada con una cuna clínica con nombre."""
    from app.services.cuna_service import actualizar_campos_cuna, crear_cuna

    def _ocupar_con_cuna(registro: RegistroDiario, cama_id: str, nombre_cuna="RN de María Tuki"):
        registro = ocupar(registro, cama_id)
        registro = crear_cuna(registro, cama_id)
        return actualizar_campos_cuna(
            registro, cama_id, {"nombre": nombre_cuna, "edad": "2d", "diagnostico": "SDR"}
        )

    return _ocupar_con_cuna


@pytest.fixture
def crear_registro_api(client, fecha):
    """Factory fixture para crear el registro de una fecha vía API."""
    def _crear(fecha_registro: str = fecha, copiar_anterior: bool = False, demo: bool = False):
        response = client.post(
            f"/api/registros/{fecha_registro}",
            params={"demo": demo},
            json={"copiar_anterior": copiar_anterior},
        )
        assert response.status_code == 200
        return response.json()

    return _crear
