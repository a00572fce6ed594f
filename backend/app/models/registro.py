"""
Modelo del Registro Diario.

Raíz de agregación por fecha: camas, altas, traslados, CMA y
turno de enfermería. Se persiste completo como un documento JSON.
"""
from typing import Dict, List, Optional

from pydantic import Field

from app.models.enums import EstadoAltaEnum, TipoIntervencionEnum
from app.models.paciente import ModeloDocumento, Paciente

PATRON_FECHA_ISO = r"^\d{4}-\d{2}-\d{2}$"

# ============================================
# EVENTOS DE EGRESO
# ============================================

class EventoEgreso(ModeloDocumento):
    """
    Datos comunes de altas y traslados.

    Guarda una instantánea completa del paciente (originalData)
    para poder deshacer el evento.
    """
    id: str
    nombre_cama: str = Field(alias="bedName")
    cama_id: str = Field(alias="bedId")
    tipo_cama: str = Field(alias="bedType")
    nombre_paciente: Optional[str] = Field(default="", alias="patientName")
    rut: Optional[str] = Field(default="", alias="rut")
    diagnostico: Optional[str] = Field(default="", alias="diagnosis")
    edad: Optional[str] = Field(default=None, alias="age")
    prevision: Optional[str] = Field(default=None, alias="insurance")
    origen: Optional[str] = Field(default=None, alias="origin")
    es_rapanui: Optional[bool] = Field(default=None, alias="isRapanui")
    datos_originales: Optional[Paciente] = Field(default=None, alias="originalData")
    # True cuando el evento corresponde a la cuna clínica
    es_anidado: Optional[bool] = Field(default=False, alias="isNested")


class Alta(EventoEgreso):
    """Alta de un paciente (vivo o fallecido)."""
    estado: EstadoAltaEnum = Field(alias="status")


class Traslado(EventoEgreso):
    """Traslado (evacuación) a otro centro."""
    metodo_evacuacion: str = Field(alias="evacuationMethod")
    centro_receptor: str = Field(alias="receivingCenter")
    centro_receptor_otro: Optional[str] = Field(default=None, alias="receivingCenterOther")
    acompanante: Optional[str] = Field(default=None, alias="transferEscort")


class RegistroCMA(ModeloDocumento):
    """Registro de Cirugía Mayor Ambulatoria / procedimiento ambulatorio."""
    id: str
    nombre_cama: str = Field(default="", alias="bedName")
    nombre_paciente: str = Field(default="", alias="patientName")
    rut: str = Field(default="", alias="rut")
    edad: str = Field(default="", alias="age")
    diagnostico: str = Field(default="", alias="diagnosis")
    especialidad: str = Field(default="", alias="specialty")
    tipo_intervencion: TipoIntervencionEnum = Field(
        default=TipoIntervencionEnum.CIRUGIA_MAYOR_AMBULATORIA, alias="interventionType"
    )
    ingresado_por: Optional[str] = Field(default=None, alias="enteredBy")
    marca_tiempo: Optional[str] = Field(default=None, alias="timestamp")


# ============================================
# REGISTRO DIARIO
# ============================================

class RegistroDiario(ModeloDocumento):
    """
    Censo de un día.

    Attributes:
        fecha: Clave del registro (YYYY-MM-DD)
        camas: Mapa cama_id -> Paciente, una entrada por cama del catálogo
        altas: Log de altas (solo se agrega, o se revierte con deshacer)
        traslados: Log de traslados
        cma: Log de procedimientos ambulatorios
        enfermeras: Turno de enfermería (2 cupos fijos)
        camas_extra_activas: Camas extra habilitadas en el día
        ultima_actualizacion: Marca de tiempo usada en la resolución de conflictos
    """
    fecha: str = Field(alias="date", pattern=PATRON_FECHA_ISO)
    camas: Dict[str, Paciente] = Field(default_factory=dict, alias="beds")
    altas: List[Alta] = Field(default_factory=list, alias="discharges")
    traslados: List[Traslado] = Field(default_factory=list, alias="transfers")
    cma: List[RegistroCMA] = Field(default_factory=list, alias="cma")
    ultima_actualizacion: str = Field(default="", alias="lastUpdated")
    enfermeras: List[str] = Field(default_factory=lambda: ["", ""], alias="nurses")
    # Campo heredado de respaldos antiguos (un solo enfermero)
    nombre_enfermera: Optional[str] = Field(default=None, alias="nurseName")
    camas_extra_activas: List[str] = Field(default_factory=list, alias="activeExtraBeds")

    def __repr__(self) -> str:
        return f"RegistroDiario(fecha={self.fecha}, camas={len(self.camas)})"
