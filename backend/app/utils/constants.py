"""
Constantes del sistema.
Valores fijos utilizados en toda la aplicación: catálogo de camas,
opciones clínicas y encabezados de exportación.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from app.models.enums import TipoCamaEnum


# ============================================
# CATÁLOGO DE CAMAS
# ============================================

@dataclass(frozen=True)
class DefinicionCama:
    """Definición estática de una cama del catálogo."""
    id: str
    nombre: str
    tipo: TipoCamaEnum
    es_cuna_por_defecto: bool = False
    es_extra: bool = False


class CatalogoCamas:
    """
    Catálogo ordenado e inmutable de camas.

    Se construye una sola vez al iniciar el proceso. La única
    "gestión" posible es activar camas extra en cada registro
    diario (campo activeExtraBeds), nunca modificar el catálogo.
    """

    def __init__(self, camas: Iterable[DefinicionCama]):
        self._camas: Tuple[DefinicionCama, ...] = tuple(camas)
        self._por_id = {cama.id: cama for cama in self._camas}
        self._por_tipo: Dict[TipoCamaEnum, List[DefinicionCama]] = {}
        for cama in self._camas:
            self._por_tipo.setdefault(cama.tipo, []).append(cama)

    def __iter__(self):
        return iter(self._camas)

    def __len__(self) -> int:
        return len(self._camas)

    def __contains__(self, cama_id: str) -> bool:
        return cama_id in self._por_id

    def obtener(self, cama_id: str) -> Optional[DefinicionCama]:
        """Obtiene la definición de una cama o None si no existe."""
        return self._por_id.get(cama_id)

    def todas(self) -> List[DefinicionCama]:
        return list(self._camas)

    def regulares(self) -> List[DefinicionCama]:
        """Camas que no son extra (cuentan en la capacidad base)."""
        return [c for c in self._camas if not c.es_extra]

    def por_tipo(self, tipo: TipoCamaEnum) -> List[DefinicionCama]:
        """Camas de un tipo, en el orden del catálogo (extras incluidas)."""
        return list(self._por_tipo.get(TipoCamaEnum(tipo), []))

    def extras(self) -> List[DefinicionCama]:
        return [c for c in self._camas if c.es_extra]

    def activas(self, camas_extra_activas: Iterable[str]) -> List[DefinicionCama]:
        """Camas regulares más las camas extra habilitadas en el día."""
        extras = set(camas_extra_activas or [])
        return [c for c in self._camas if not c.es_extra or c.id in extras]


CATALOGO_CAMAS = CatalogoCamas([
    # UTI (4 camas)
    DefinicionCama("R1", "R1", TipoCamaEnum.UTI),
    DefinicionCama("R2", "R2", TipoCamaEnum.UTI),
    DefinicionCama("R3", "R3", TipoCamaEnum.UTI),
    DefinicionCama("R4", "R4", TipoCamaEnum.UTI),
    # Neonatología (2 camas)
    DefinicionCama("NEO1", "NEO 1", TipoCamaEnum.MEDIA),
    DefinicionCama("NEO2", "NEO 2", TipoCamaEnum.MEDIA),
    # Hospitalización general (12 camas)
    DefinicionCama("H1C1", "H1C1", TipoCamaEnum.MEDIA),
    DefinicionCama("H1C2", "H1C2", TipoCamaEnum.MEDIA),
    DefinicionCama("H2C1", "H2C1", TipoCamaEnum.MEDIA),
    DefinicionCama("H2C2", "H2C2", TipoCamaEnum.MEDIA),
    DefinicionCama("H3C1", "H3C1", TipoCamaEnum.MEDIA),
    DefinicionCama("H3C2", "H3C2", TipoCamaEnum.MEDIA),
    DefinicionCama("H4C1", "H4C1", TipoCamaEnum.MEDIA),
    DefinicionCama("H4C2", "H4C2", TipoCamaEnum.MEDIA),
    DefinicionCama("H5C1", "H5C1", TipoCamaEnum.MEDIA),
    DefinicionCama("H5C2", "H5C2", TipoCamaEnum.MEDIA),
    DefinicionCama("H6C1", "H6C1", TipoCamaEnum.MEDIA),
    DefinicionCama("H6C2", "H6C2", TipoCamaEnum.MEDIA),
    # Camas extra (sobrecupo)
    DefinicionCama("E1", "E1", TipoCamaEnum.MEDIA, es_extra=True),
    DefinicionCama("E2", "E2", TipoCamaEnum.MEDIA, es_extra=True),
    DefinicionCama("E3", "E3", TipoCamaEnum.MEDIA, es_extra=True),
    DefinicionCama("E4", "E4", TipoCamaEnum.MEDIA, es_extra=True),
    DefinicionCama("E5", "E5", TipoCamaEnum.MEDIA, es_extra=True),
])

# Capacidad base del servicio (solo camas regulares)
CAPACIDAD_HOSPITAL = len(CATALOGO_CAMAS.regulares())


# ============================================
# OPCIONES CLÍNICAS
# ============================================

DISPOSITIVOS = ["VVP", "CVC", "LA", "CUP", "VMNI", "CNAF", "VMI"]

METODOS_EVACUACION = [
    "Avión comercial",
    "Aerocardal",
    "Avión FACH",
]

# El acompañante solo aplica a evacuaciones en vuelo comercial
METODO_EVACUACION_CON_ACOMPANANTE = "Avión comercial"

CENTROS_RECEPTORES = [
    "Hospital Salvador",
    "Instituto Nacional del Tórax",
    "Hospital Tisné",
    "Hospital Dr. Luis Calvo Mackenna",
    "Extrasistema",
    "Otro",
]

CENTRO_RECEPTOR_OTRO = "Otro"

MOTIVOS_BLOQUEO = ["Mantención", "Aislamiento", "Falla Eléctrica"]

# Número fijo de turnos de enfermería por registro
CUPOS_ENFERMERIA = 2

NOMINA_ENFERMERIA_DEFAULT = ["Enfermero/a 1", "Enfermero/a 2"]


# ============================================
# CONSTANTES DE VALIDACIÓN
# ============================================

# Máximo de errores de validación informados al importar
MAX_ERRORES_IMPORTACION = 5

PUNTAJE_CUDYR_MAXIMO = 3


# ============================================
# CONSTANTES DE EXPORTACIÓN
# ============================================

ENCABEZADOS_CSV = [
    "ID Cama",
    "Nombre Cama",
    "Ubicación",
    "Tipo Cama",
    "Mobiliario",
    "Cuna RN Sano",
    "Bloqueada",
    "Motivo Bloqueo",
    "Paciente",
    "Tipo Doc",
    "RUT/Pasaporte",
    "F. Nacimiento",
    "Edad",
    "Sexo",
    "Previsión",
    "Origen Ingreso",
    "Detalle Origen",
    "Cond. Permanencia",
    "Rapanui",
    "Diagnóstico",
    "Comentarios Dx",
    "Especialidad",
    "Estado",
    "F. Ingreso",
    "Brazalete",
    "Postrado",
    "Dispositivos",
    "CUP F.Instalación",
    "CUP F.Retiro",
    "CVC F.Instalación",
    "CVC F.Retiro",
    "VMI F.Inicio",
    "VMI F.Término",
    "Comp. Qx",
    "UPC",
    "Nota Entrega",
    "Enfermero/a",
]

ENCABEZADOS_CSV_ALTAS = ["Cama", "Tipo", "Paciente", "RUT", "Diagnóstico", "Estado", "Edad", "Previsión"]

ENCABEZADOS_CSV_TRASLADOS = [
    "Cama", "Tipo", "Paciente", "RUT", "Diagnóstico",
    "Medio", "Centro", "Acompañante", "Edad", "Previsión",
]

MARCADOR_ALTAS = "--- ALTAS ---"
MARCADOR_TRASLADOS = "--- TRASLADOS ---"

ENCABEZADOS_CENSO_BRUTO = [
    "FECHA", "CAMA", "TIPO_CAMA", "UBICACION", "MODO_CAMA", "TIENE_ACOMPANANTE",
    "BLOQUEADA", "MOTIVO_BLOQUEO",
    "PACIENTE", "RUT", "EDAD", "SEXO", "PREVISION", "ORIGEN", "ORIGEN_INGRESO", "ES_RAPANUI",
    "DIAGNOSTICO", "ESPECIALIDAD", "ESTADO", "FECHA_INGRESO",
    "BRAZALETE", "POSTRADO", "DISPOSITIVOS", "COMP_QUIRURGICA", "UPC",
    "ENFERMEROS", "ULTIMA_ACTUALIZACION",
]

ENCABEZADOS_CUDYR = [
    "FECHA", "CAMA", "PACIENTE", "RUT",
    "PUNTAJE_DEPENDENCIA", "PUNTAJE_RIESGO",
    "DEPENDENCIA", "RIESGO", "CATEGORIA",
]
