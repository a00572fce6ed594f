"""
Tablas del almacenamiento local.

Cada registro diario se guarda como un documento JSON por
(espacio, fecha). Los espacios "produccion" y "demo" están aislados.
"""
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime, UniqueConstraint
from datetime import datetime, timezone
import uuid


def ahora_utc() -> datetime:
    return datetime.now(timezone.utc)


class DocumentoRegistro(SQLModel, table=True):
    """
    Documento JSON de un registro diario.

    El contenido es el RegistroDiario serializado con claves camelCase.
    """
    __tablename__ = "registro_diario"
    __table_args__ = (
        UniqueConstraint("espacio", "fecha", name="uq_registro_diario_espacio_fecha"),
    )

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        primary_key=True
    )

    espacio: str = Field(index=True)
    fecha: str = Field(index=True)  # YYYY-MM-DD

    # RegistroDiario serializado
    contenido: str

    updated_at: datetime = Field(
        default_factory=ahora_utc,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    def __repr__(self) -> str:
        return f"DocumentoRegistro(espacio={self.espacio}, fecha={self.fecha})"


class NominaEnfermeria(SQLModel, table=True):
    """
    Nómina de enfermeros/as disponibles para el turno.

    Una fila por espacio de almacenamiento; el contenido es una lista JSON.
    """
    __tablename__ = "nomina_enfermeria"

    espacio: str = Field(primary_key=True)
    contenido: str = Field(default="[]")

    updated_at: datetime = Field(
        default_factory=ahora_utc,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
