"""
Entorno de Alembic para las tablas del censo diario.

Las tablas se registran en SQLModel.metadata al importar app.models;
la URL se toma de settings.DATABASE_URL (no de alembic.ini).
"""
from logging.config import fileConfig
from sqlalchemy import engine_from_config
from sqlalchemy import pool
from alembic import context
import os
import sys

# backend/ al path para importar app
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlmodel import SQLModel
from app.models import DocumentoRegistro, NominaEnfermeria  # noqa: F401
from app.config import settings

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# registro_diario y nomina_enfermeria
target_metadata = SQLModel.metadata


def _es_sqlite() -> bool:
    return settings.DATABASE_URL.startswith("sqlite")


def run_migrations_offline() -> None:
    """Genera el SQL de las migraciones sin conectarse."""
    context.configure(
        url=settings.DATABASE_URL,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Aplica las migraciones sobre settings.DATABASE_URL."""
    configuration = config.get_section(config.config_ini_section) or {}
    configuration["sqlalchemy.url"] = settings.DATABASE_URL

    connectable = engine_from_config(
        configuration,
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            # SQLite no soporta ALTER completo
            render_as_batch=_es_sqlite(),
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
