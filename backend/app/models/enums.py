"""
Enumeraciones del sistema.
Centralizadas para evitar imports circulares.

Los valores coinciden con los almacenados en el documento JSON
de cada registro diario (formato de respaldo).
"""
from enum import Enum


class TipoCamaEnum(str, Enum):
    """Tipo de cama del catálogo."""
    UTI = "UTI"
    MEDIA = "MEDIA"


class ModoCamaEnum(str, Enum):
    """Mobiliario configurado en el espacio físico."""
    CAMA = "Cama"
    CUNA = "Cuna"


class EspecialidadEnum(str, Enum):
    """Especialidad clínica del paciente."""
    MEDICINA = "Medicina Interna"
    CIRUGIA = "Cirugía"
    TRAUMATOLOGIA = "Traumatología"
    GINECOLOGIA = "Ginecología"
    PSIQUIATRIA = "Psiquiatría"
    PEDIATRIA = "Pediatría"
    OBSTETRICIA = "Obstetricia"
    OTRO = "Otro"
    VACIA = ""


class EstadoPacienteEnum(str, Enum):
    """Estado clínico del paciente."""
    GRAVE = "Grave"
    DE_CUIDADO = "De cuidado"
    ESTABLE = "Estable"
    VACIO = ""


class TipoDocumentoEnum(str, Enum):
    """Tipo de documento de identidad."""
    RUT = "RUT"
    PASAPORTE = "Pasaporte"


class SexoBiologicoEnum(str, Enum):
    """Sexo biológico."""
    MASCULINO = "Masculino"
    FEMENINO = "Femenino"
    INDETERMINADO = "Indeterminado"


class PrevisionEnum(str, Enum):
    """Previsión de salud."""
    FONASA = "Fonasa"
    ISAPRE = "Isapre"
    PARTICULAR = "Particular"


class OrigenIngresoEnum(str, Enum):
    """Origen del ingreso hospitalario."""
    CAE = "CAE"
    APS = "APS"
    URGENCIAS = "Urgencias"
    PABELLON = "Pabellón"
    OTRO = "Otro"


class CondicionPermanenciaEnum(str, Enum):
    """Condición de permanencia en la isla."""
    RESIDENTE = "Residente"
    TURISTA_NACIONAL = "Turista Nacional"
    TURISTA_EXTRANJERO = "Turista Extranjero"


class EstadoAltaEnum(str, Enum):
    """Condición del paciente al egreso."""
    VIVO = "Vivo"
    FALLECIDO = "Fallecido"


class TipoIntervencionEnum(str, Enum):
    """Tipo de intervención ambulatoria (CMA)."""
    CIRUGIA_MAYOR_AMBULATORIA = "Cirugía Mayor Ambulatoria"
    PROCEDIMIENTO_MEDICO_AMBULATORIO = "Procedimiento Médico Ambulatorio"


class ModoMovimientoEnum(str, Enum):
    """Modo de la operación mover/copiar."""
    MOVER = "move"
    COPIAR = "copy"


class EspacioAlmacenamiento(str, Enum):
    """
    Espacio de nombres del almacenamiento local.

    DEMO está completamente aislado de PRODUCCION y nunca
    se sincroniza con el almacén remoto.
    """
    PRODUCCION = "produccion"
    DEMO = "demo"


class EstadoSincronizacionEnum(str, Enum):
    """Estado de la última sincronización con el almacén remoto."""
    IDLE = "idle"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"


# ============================================
# CONSTANTES RELACIONADAS CON ENUMS
# ============================================

# Dispositivos con seguimiento de fechas de instalación/retiro (IAAS)
DISPOSITIVOS_CON_FECHAS = ["CUP", "CVC", "VMI"]
