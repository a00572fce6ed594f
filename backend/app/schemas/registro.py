"""
Schemas de requests sobre el registro diario.

Los nombres de campo de los pacientes se aceptan como atributo
(fecha_ingreso) o como alias del documento (admissionDate).
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from app.models.enums import EstadoAltaEnum, ModoMovimientoEnum, TipoIntervencionEnum
from app.utils.constants import PUNTAJE_CUDYR_MAXIMO


class InicializarDiaRequest(BaseModel):
    """Request para crear el registro de una fecha."""
    copiar_anterior: bool = False


# ============================================
# CAMAS Y CUNAS
# ============================================

class ActualizarCampoRequest(BaseModel):
    campo: str
    valor: Any = None


class ActualizarCamposRequest(BaseModel):
    """Varios campos en un solo cambio."""
    campos: Dict[str, Any]


class ActualizarCudyrRequest(BaseModel):
    """Un ítem CUDYR; la interfaz clínica usa valores 0-3."""
    item: str
    valor: int = Field(ge=0, le=PUNTAJE_CUDYR_MAXIMO)


class MoverCopiarRequest(BaseModel):
    modo: ModoMovimientoEnum
    cama_destino_id: str


class BloquearCamaRequest(BaseModel):
    motivo: Optional[str] = None


# ============================================
# ALTAS Y TRASLADOS
# ============================================

class AltaCreate(BaseModel):
    """Request para dar de alta al paciente de una cama."""
    cama_id: str
    estado: EstadoAltaEnum
    estado_cuna: Optional[EstadoAltaEnum] = None


class AltaUpdate(BaseModel):
    estado: EstadoAltaEnum


class TrasladoCreate(BaseModel):
    """Request para trasladar al paciente de una cama."""
    cama_id: str
    metodo_evacuacion: str
    centro_receptor: str
    centro_receptor_otro: Optional[str] = None
    acompanante: Optional[str] = None


class TrasladoUpdate(BaseModel):
    metodo_evacuacion: Optional[str] = None
    centro_receptor: Optional[str] = None
    centro_receptor_otro: Optional[str] = None
    acompanante: Optional[str] = None


# ============================================
# CMA
# ============================================

class CMACreate(BaseModel):
    """Entrada del log de Cirugía Mayor Ambulatoria."""
    nombre_cama: str = ""
    nombre_paciente: str
    rut: str = ""
    edad: str = ""
    diagnostico: str = ""
    especialidad: str = ""
    tipo_intervencion: TipoIntervencionEnum = TipoIntervencionEnum.CIRUGIA_MAYOR_AMBULATORIA
    ingresado_por: Optional[str] = None


class CMAUpdate(BaseModel):
    nombre_cama: Optional[str] = None
    nombre_paciente: Optional[str] = None
    rut: Optional[str] = None
    edad: Optional[str] = None
    diagnostico: Optional[str] = None
    especialidad: Optional[str] = None
    tipo_intervencion: Optional[TipoIntervencionEnum] = None
    ingresado_por: Optional[str] = None


# ============================================
# ENFERMERÍA
# ============================================

class EnfermeraUpdate(BaseModel):
    """Asigna un cupo del turno (0 o 1)."""
    indice: int
    nombre: str = ""


class NominaUpdate(BaseModel):
    nombres: List[str]


# ============================================
# DEMO
# ============================================

class DemoRequest(BaseModel):
    """
    Request de generación de datos demo.

    periodo: "dia" | "semana" | "mes". Para "mes" se usan anio y mes.
    """
    periodo: str = Field("dia", pattern="^(dia|semana|mes)$")
    fecha: Optional[str] = None
    anio: Optional[int] = None
    mes: Optional[int] = Field(None, ge=1, le=12)
    semilla: Optional[int] = None
