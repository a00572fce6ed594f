"""Migración inicial - Tablas del registro diario

Revision ID: 001_registro_diario
Revises:
Create Date: 2025-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001_registro_diario'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Crea las tablas de documentos diarios y nómina de enfermería."""

    # Tabla RegistroDiario (un documento JSON por espacio y fecha)
    op.create_table(
        'registro_diario',
        sa.Column('id', sa.String(), nullable=False),
        sa.Column('espacio', sa.String(), nullable=False),
        sa.Column('fecha', sa.String(), nullable=False),
        sa.Column('contenido', sa.Text(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('espacio', 'fecha', name='uq_registro_diario_espacio_fecha')
    )
    op.create_index('ix_registro_diario_espacio', 'registro_diario', ['espacio'])
    op.create_index('ix_registro_diario_fecha', 'registro_diario', ['fecha'])

    # Tabla NominaEnfermeria
    op.create_table(
        'nomina_enfermeria',
        sa.Column('espacio', sa.String(), nullable=False),
        sa.Column('contenido', sa.Text(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('espacio')
    )


def downgrade() -> None:
    """Elimina las tablas."""
    op.drop_table('nomina_enfermeria')
    op.drop_index('ix_registro_diario_fecha', table_name='registro_diario')
    op.drop_index('ix_registro_diario_espacio', table_name='registro_diario')
    op.drop_table('registro_diario')
