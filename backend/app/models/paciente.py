"""
Modelo de Paciente (ocupante de una cama).

El documento diario se persiste como JSON con claves camelCase
(patientName, bedId, clinicalCrib, ...). Los atributos Python usan
nombres en español y los alias de pydantic hacen de puente.

La cuna clínica es un PacienteCuna: el mismo paciente pero sin
campo clinicalCrib, de modo que el anidamiento queda limitado a
un nivel por construcción.
"""
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models.cudyr import PuntajeCudyr
from app.models.enums import (
    CondicionPermanenciaEnum,
    EspecialidadEnum,
    EstadoPacienteEnum,
    ModoCamaEnum,
    OrigenIngresoEnum,
    PrevisionEnum,
    SexoBiologicoEnum,
    TipoDocumentoEnum,
)


class ModeloDocumento(BaseModel):
    """Base de los modelos que forman parte del documento diario."""
    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
    )

    @classmethod
    def resolver_campo(cls, campo: str) -> Optional[str]:
        """
        Traduce un nombre de campo (atributo o alias) al nombre de atributo.

        Args:
            campo: Nombre del atributo (fecha_ingreso) o alias JSON (admissionDate)

        Returns:
            Nombre de atributo o None si el campo no existe
        """
        if campo in cls.model_fields:
            return campo
        for nombre, info in cls.model_fields.items():
            if info.alias == campo:
                return nombre
        return None

    def a_documento(self, incluir_nulos: bool = False) -> dict:
        """Serializa al formato JSON del documento (claves camelCase)."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=not incluir_nulos)


class FechasDispositivo(BaseModel):
    """Fechas de instalación/retiro de un dispositivo invasivo (IAAS)."""
    model_config = ConfigDict(populate_by_name=True)

    fecha_instalacion: Optional[str] = Field(default=None, alias="installationDate")
    fecha_retiro: Optional[str] = Field(default=None, alias="removalDate")


class DetalleDispositivos(BaseModel):
    """Fechas por dispositivo: sonda Foley (CUP), CVC y VMI."""
    CUP: Optional[FechasDispositivo] = None
    CVC: Optional[FechasDispositivo] = None
    VMI: Optional[FechasDispositivo] = None


class PacienteCuna(ModeloDocumento):
    """
    Datos de un ocupante de cama sin cuna anidada.

    Un paciente "vacío" (sin nombre y sin bloqueo) representa una cama libre.
    """

    # ============================================
    # IDENTIFICACIÓN DE LA CAMA
    # ============================================
    cama_id: str = Field(alias="bedId")
    bloqueada: bool = Field(default=False, alias="isBlocked")
    motivo_bloqueo: Optional[str] = Field(default="", alias="blockedReason")

    # Mobiliario: cama de adulto o cuna
    modo_cama: ModoCamaEnum = Field(default=ModoCamaEnum.CAMA, alias="bedMode")
    # Cuna adicional para RN sano (recurso, no paciente)
    tiene_cuna_acompanante: bool = Field(default=False, alias="hasCompanionCrib")

    # ============================================
    # DATOS DEMOGRÁFICOS
    # ============================================
    nombre: str = Field(default="", alias="patientName")
    rut: str = Field(default="", alias="rut")
    tipo_documento: Optional[TipoDocumentoEnum] = Field(
        default=TipoDocumentoEnum.RUT, alias="documentType"
    )
    edad: str = Field(default="", alias="age")
    fecha_nacimiento: Optional[str] = Field(default="", alias="birthDate")
    sexo_biologico: Optional[SexoBiologicoEnum] = Field(
        default=SexoBiologicoEnum.INDETERMINADO, alias="biologicalSex"
    )
    prevision: Optional[PrevisionEnum] = Field(default=None, alias="insurance")
    origen_ingreso: Optional[OrigenIngresoEnum] = Field(default=None, alias="admissionOrigin")
    detalle_origen_ingreso: Optional[str] = Field(default="", alias="admissionOriginDetails")
    condicion_permanencia: Optional[CondicionPermanenciaEnum] = Field(default=None, alias="origin")
    es_rapanui: Optional[bool] = Field(default=False, alias="isRapanui")

    # ============================================
    # DATOS CLÍNICOS
    # ============================================
    diagnostico: str = Field(default="", alias="pathology")
    comentarios_diagnostico: Optional[str] = Field(default="", alias="diagnosisComments")
    especialidad: EspecialidadEnum = Field(default=EspecialidadEnum.VACIA, alias="specialty")
    estado: EstadoPacienteEnum = Field(default=EstadoPacienteEnum.VACIO, alias="status")
    fecha_ingreso: str = Field(default="", alias="admissionDate")
    tiene_brazalete: bool = Field(default=False, alias="hasWristband")
    postrado: bool = Field(default=False, alias="isBedridden")
    dispositivos: List[str] = Field(default_factory=list, alias="devices")
    detalle_dispositivos: Optional[DetalleDispositivos] = Field(default=None, alias="deviceDetails")
    complicacion_quirurgica: bool = Field(default=False, alias="surgicalComplication")
    es_upc: bool = Field(default=False, alias="isUPC")
    # Ubicación libre (usada en camas extra)
    ubicacion: Optional[str] = Field(default="", alias="location")

    # Categorización y entrega de turno
    cudyr: Optional[PuntajeCudyr] = Field(default=None, alias="cudyr")
    nota_entrega: Optional[str] = Field(default="", alias="handoffNote")

    @property
    def esta_ocupada(self) -> bool:
        """True si hay un paciente (nombre no vacío)."""
        return bool(self.nombre and self.nombre.strip())

    @property
    def esta_vacia(self) -> bool:
        """Cama libre: sin paciente y sin bloqueo."""
        return not self.esta_ocupada and not self.bloqueada

    def __repr__(self) -> str:
        return f"PacienteCuna(cama_id={self.cama_id}, nombre={self.nombre!r})"


class Paciente(PacienteCuna):
    """
    Ocupante principal de una cama.

    Puede contener una cuna clínica (RN enfermo que comparte
    la cama con su madre). La cuna nunca contiene otra cuna.
    """
    cuna_clinica: Optional[PacienteCuna] = Field(default=None, alias="clinicalCrib")

    def __repr__(self) -> str:
        return (
            f"Paciente(cama_id={self.cama_id}, nombre={self.nombre!r}, "
            f"cuna={self.cuna_clinica is not None})"
        )


MapaCamas = Dict[str, Paciente]
