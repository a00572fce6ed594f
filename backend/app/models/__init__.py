"""
Modelos de datos del sistema.
Re-exporta todos los modelos para imports simplificados.
"""
from app.models.enums import (
    TipoCamaEnum,
    ModoCamaEnum,
    EspecialidadEnum,
    EstadoPacienteEnum,
    TipoDocumentoEnum,
    SexoBiologicoEnum,
    PrevisionEnum,
    OrigenIngresoEnum,
    CondicionPermanenciaEnum,
    EstadoAltaEnum,
    TipoIntervencionEnum,
    ModoMovimientoEnum,
    EspacioAlmacenamiento,
    EstadoSincronizacionEnum,
)

from app.models.cudyr import PuntajeCudyr
from app.models.paciente import (
    Paciente,
    PacienteCuna,
    DetalleDispositivos,
    FechasDispositivo,
)
from app.models.registro import (
    RegistroDiario,
    Alta,
    Traslado,
    RegistroCMA,
)
from app.models.documento import DocumentoRegistro, NominaEnfermeria

__all__ = [
    # Enums
    "TipoCamaEnum",
    "ModoCamaEnum",
    "EspecialidadEnum",
    "EstadoPacienteEnum",
    "TipoDocumentoEnum",
    "SexoBiologicoEnum",
    "PrevisionEnum",
    "OrigenIngresoEnum",
    "CondicionPermanenciaEnum",
    "EstadoAltaEnum",
    "TipoIntervencionEnum",
    "ModoMovimientoEnum",
    "EspacioAlmacenamiento",
    "EstadoSincronizacionEnum",
    # Documento diario
    "PuntajeCudyr",
    "Paciente",
    "PacienteCuna",
    "DetalleDispositivos",
    "FechasDispositivo",
    "RegistroDiario",
    "Alta",
    "Traslado",
    "RegistroCMA",
    # Tablas
    "DocumentoRegistro",
    "NominaEnfermeria",
]
