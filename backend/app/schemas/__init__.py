"""
Schemas Pydantic para validación y serialización.
"""
from app.schemas.registro import (
    InicializarDiaRequest,
    ActualizarCampoRequest,
    ActualizarCamposRequest,
    ActualizarCudyrRequest,
    MoverCopiarRequest,
    BloquearCamaRequest,
    AltaCreate,
    AltaUpdate,
    TrasladoCreate,
    TrasladoUpdate,
    CMACreate,
    CMAUpdate,
    EnfermeraUpdate,
    NominaUpdate,
    DemoRequest,
)

from app.schemas.responses import (
    MessageResponse,
    ErrorResponse,
    OperacionResponse,
    EstadisticasResponse,
    EstadisticasPeriodoItem,
    ImportacionResponse,
)

from app.schemas.respaldo import Respaldo, validar_respaldo

__all__ = [
    "InicializarDiaRequest",
    "ActualizarCampoRequest",
    "ActualizarCamposRequest",
    "ActualizarCudyrRequest",
    "MoverCopiarRequest",
    "BloquearCamaRequest",
    "AltaCreate",
    "AltaUpdate",
    "TrasladoCreate",
    "TrasladoUpdate",
    "CMACreate",
    "CMAUpdate",
    "EnfermeraUpdate",
    "NominaUpdate",
    "DemoRequest",
    "MessageResponse",
    "ErrorResponse",
    "OperacionResponse",
    "EstadisticasResponse",
    "EstadisticasPeriodoItem",
    "ImportacionResponse",
    "Respaldo",
    "validar_respaldo",
]
