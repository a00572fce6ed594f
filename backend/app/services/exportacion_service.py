"""
Servicio de exportación e importación.

Formatos:
- Respaldo JSON: mapa fecha -> registro (mismo formato del documento persistido).
- CSV del censo de un día: 37 columnas, más bloques de altas y traslados.
- Filas de censo bruto para un rango de fechas (reportes).
- Resumen CUDYR diario.

Solo se generan los datos; el formato de planilla/PDF queda fuera.
"""
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Union
import csv
import io
import json
import logging

from app.core.exceptions import ImportacionError
from app.models.paciente import PacienteCuna
from app.models.registro import RegistroDiario
from app.repositories.registro_repo import RegistroRepository
from app.schemas.respaldo import validar_respaldo
from app.services.cudyr_service import calcular_cudyr
from app.utils.constants import (
    CATALOGO_CAMAS,
    CENTRO_RECEPTOR_OTRO,
    ENCABEZADOS_CENSO_BRUTO,
    ENCABEZADOS_CSV,
    ENCABEZADOS_CSV_ALTAS,
    ENCABEZADOS_CSV_TRASLADOS,
    ENCABEZADOS_CUDYR,
    MARCADOR_ALTAS,
    MARCADOR_TRASLADOS,
    MAX_ERRORES_IMPORTACION,
)
from app.utils.fechas import formatear_fecha_reporte, hoy_iso, parsear_marca_tiempo

logger = logging.getLogger("censo_camas.exportacion")

SUFIJO_CUNA = "-C"
TIPO_CUNA = "Cuna"


# ============================================
# HELPERS
# ============================================

def _si_no(valor: Any) -> str:
    return "SI" if valor else "NO"


def _texto(valor: Any) -> str:
    if valor is None:
        return ""
    if isinstance(valor, Enum):
        return str(valor.value)
    return str(valor)


def enfermeros_del_registro(registro: RegistroDiario) -> List[str]:
    """Nombres del turno; usa el campo heredado nurseName si no hay lista."""
    nombres = [n for n in registro.enfermeras if n]
    if nombres:
        return nombres
    if registro.nombre_enfermera:
        return [registro.nombre_enfermera]
    return []


def _fecha_dispositivo(paciente: PacienteCuna, dispositivo: str, campo: str) -> str:
    detalle = paciente.detalle_dispositivos
    fechas = getattr(detalle, dispositivo, None) if detalle is not None else None
    return formatear_fecha_reporte(getattr(fechas, campo, None) if fechas is not None else None)


def _a_csv(filas: Iterable[List[Any]]) -> str:
    salida = io.StringIO()
    writer = csv.writer(salida, lineterminator="\n")
    for fila in filas:
        writer.writerow(fila)
    return salida.getvalue()


# ============================================
# RESPALDO JSON
# ============================================

def nombre_archivo_respaldo(fecha: Optional[str] = None) -> str:
    return f"respaldo_censo_{fecha or hoy_iso()}.json"


def exportar_json(registros: Dict[str, RegistroDiario]) -> str:
    """Serializa el mapa completo de registros (indentado, UTF-8)."""
    datos = {fecha: registro.a_documento() for fecha, registro in sorted(registros.items())}
    return json.dumps(datos, indent=2, ensure_ascii=False)


def importar_json(contenido: Union[str, bytes, Dict[str, Any]], repo: RegistroRepository) -> int:
    """
    Valida un respaldo y lo fusiona con el almacenamiento.

    La fusión es superficial por fecha: las fechas del respaldo
    reemplazan a las existentes y el resto se conserva.

    Args:
        contenido: JSON (texto, bytes o ya decodificado)
        repo: Repository del espacio de destino

    Returns:
        Número de registros importados

    Raises:
        ImportacionError: Si el JSON no se puede leer o no cumple el formato
            (con hasta 5 errores "ruta: mensaje"). No se escribe nada.
    """
    if isinstance(contenido, (str, bytes)):
        try:
            datos = json.loads(contenido)
        except ValueError:
            raise ImportacionError("Error al procesar el archivo JSON.")
    else:
        datos = contenido

    respaldo, errores = validar_respaldo(datos)
    if respaldo is None:
        logger.warning(f"Importación rechazada: {len(errores)} error(es) de validación")
        raise ImportacionError(
            "El archivo JSON no cumple con el formato requerido",
            errores[:MAX_ERRORES_IMPORTACION],
        )

    return repo.fusionar(respaldo.root)


# ============================================
# CSV DEL CENSO DIARIO
# ============================================

def nombre_archivo_csv(fecha: str) -> str:
    return f"censo_{fecha}.csv"


def fila_csv(
    cama_id: str,
    nombre_cama: str,
    tipo_cama: str,
    paciente: PacienteCuna,
    enfermeros: str,
    ubicacion: Optional[str] = None,
) -> List[str]:
    """Fila de 37 columnas para un paciente (o cama bloqueada)."""
    p = paciente
    return [
        cama_id,
        nombre_cama,
        ubicacion or p.ubicacion or "",
        tipo_cama,
        _texto(p.modo_cama) or "Cama",
        _si_no(p.tiene_cuna_acompanante),
        _si_no(p.bloqueada),
        p.motivo_bloqueo or "",
        p.nombre,
        _texto(p.tipo_documento) or "RUT",
        p.rut,
        formatear_fecha_reporte(p.fecha_nacimiento),
        p.edad,
        _texto(p.sexo_biologico),
        _texto(p.prevision),
        _texto(p.origen_ingreso),
        p.detalle_origen_ingreso or "",
        _texto(p.condicion_permanencia),
        _si_no(p.es_rapanui),
        p.diagnostico,
        p.comentarios_diagnostico or "",
        _texto(p.especialidad),
        _texto(p.estado),
        formatear_fecha_reporte(p.fecha_ingreso),
        _si_no(p.tiene_brazalete),
        _si_no(p.postrado),
        "|".join(p.dispositivos),
        _fecha_dispositivo(p, "CUP", "fecha_instalacion"),
        _fecha_dispositivo(p, "CUP", "fecha_retiro"),
        _fecha_dispositivo(p, "CVC", "fecha_instalacion"),
        _fecha_dispositivo(p, "CVC", "fecha_retiro"),
        _fecha_dispositivo(p, "VMI", "fecha_instalacion"),
        _fecha_dispositivo(p, "VMI", "fecha_retiro"),
        _si_no(p.complicacion_quirurgica),
        _si_no(p.es_upc),
        p.nota_entrega or "",
        enfermeros,
    ]


def filas_csv(registro: RegistroDiario) -> List[List[str]]:
    """
    Todas las filas del CSV de un día (sin serializar).

    Orden: encabezado, camas ocupadas o bloqueadas (cada cuna clínica
    con nombre como fila "<id>-C"), bloque de altas y bloque de traslados.
    """
    enfermeros = " & ".join(enfermeros_del_registro(registro))
    filas: List[List[str]] = [list(ENCABEZADOS_CSV)]

    for definicion in CATALOGO_CAMAS:
        p = registro.camas.get(definicion.id)
        if p is None:
            continue

        if p.bloqueada or p.esta_ocupada:
            filas.append(fila_csv(
                definicion.id, definicion.nombre, definicion.tipo.value, p, enfermeros
            ))

        if p.cuna_clinica is not None and p.cuna_clinica.nombre:
            filas.append(fila_csv(
                definicion.id + SUFIJO_CUNA,
                f"{definicion.nombre} (Cuna Clínica)",
                TIPO_CUNA,
                p.cuna_clinica,
                enfermeros,
                ubicacion=p.ubicacion,
            ))

    if registro.altas:
        filas.extend([[], [MARCADOR_ALTAS], list(ENCABEZADOS_CSV_ALTAS)])
        for alta in registro.altas:
            filas.append([
                alta.nombre_cama,
                alta.tipo_cama,
                _texto(alta.nombre_paciente),
                _texto(alta.rut),
                _texto(alta.diagnostico),
                _texto(alta.estado),
                _texto(alta.edad),
                _texto(alta.prevision),
            ])

    if registro.traslados:
        filas.extend([[], [MARCADOR_TRASLADOS], list(ENCABEZADOS_CSV_TRASLADOS)])
        for traslado in registro.traslados:
            centro = (
                traslado.centro_receptor_otro
                if traslado.centro_receptor == CENTRO_RECEPTOR_OTRO
                else traslado.centro_receptor
            )
            filas.append([
                traslado.nombre_cama,
                traslado.tipo_cama,
                _texto(traslado.nombre_paciente),
                _texto(traslado.rut),
                _texto(traslado.diagnostico),
                traslado.metodo_evacuacion,
                _texto(centro),
                _texto(traslado.acompanante),
                _texto(traslado.edad),
                _texto(traslado.prevision),
            ])

    return filas


def exportar_csv(registro: RegistroDiario) -> str:
    """
    CSV del censo de un día.

    Los valores con coma, comilla o salto de línea se encierran entre
    comillas (las comillas internas se duplican).
    """
    return _a_csv(filas_csv(registro))


# ============================================
# CENSO BRUTO (REPORTES)
# ============================================

def _fila_bruta(
    fecha: str,
    cama_id: str,
    tipo_cama: str,
    p: PacienteCuna,
    enfermeros: str,
    ultima_actualizacion: str,
    ubicacion: Optional[str] = None,
) -> List[str]:
    return [
        fecha,
        cama_id,
        tipo_cama,
        ubicacion or p.ubicacion or "",
        _texto(p.modo_cama) or "Cama",
        _si_no(p.tiene_cuna_acompanante),
        _si_no(p.bloqueada),
        p.motivo_bloqueo or "",
        p.nombre or "",
        p.rut or "",
        p.edad or "",
        _texto(p.sexo_biologico),
        _texto(p.prevision),
        _texto(p.condicion_permanencia),
        _texto(p.origen_ingreso),
        _si_no(p.es_rapanui),
        p.diagnostico or "",
        _texto(p.especialidad),
        _texto(p.estado),
        formatear_fecha_reporte(p.fecha_ingreso),
        _si_no(p.tiene_brazalete),
        _si_no(p.postrado),
        ", ".join(p.dispositivos),
        _si_no(p.complicacion_quirurgica),
        _si_no(p.es_upc),
        enfermeros,
        ultima_actualizacion,
    ]


def filas_censo_bruto(registro: RegistroDiario) -> List[List[str]]:
    """
    Filas del censo bruto de un registro (sin encabezado).

    Omite camas extra no activas y camas vacías; las cunas clínicas
    con nombre generan una fila "<id>-C" con la ubicación de la madre.
    """
    enfermeros = " & ".join(enfermeros_del_registro(registro))
    marca = parsear_marca_tiempo(registro.ultima_actualizacion)
    ultima = marca.strftime("%d-%m-%Y %H:%M:%S") if marca else ""

    filas = []
    for definicion in CATALOGO_CAMAS.activas(registro.camas_extra_activas):
        p = registro.camas.get(definicion.id)
        if p is None:
            continue

        if p.esta_ocupada or p.bloqueada:
            filas.append(_fila_bruta(
                registro.fecha, definicion.id, definicion.tipo.value, p, enfermeros, ultima
            ))

        if p.cuna_clinica is not None and p.cuna_clinica.nombre:
            filas.append(_fila_bruta(
                registro.fecha, definicion.id + SUFIJO_CUNA, TIPO_CUNA,
                p.cuna_clinica, enfermeros, ultima, ubicacion=p.ubicacion,
            ))
    return filas


def exportar_censo_bruto(registros: Iterable[RegistroDiario]) -> str:
    """CSV del censo bruto para varios días (ordenados por fecha)."""
    filas: List[List[str]] = [list(ENCABEZADOS_CENSO_BRUTO)]
    for registro in sorted(registros, key=lambda r: r.fecha):
        filas.extend(filas_censo_bruto(registro))
    return _a_csv(filas)


# ============================================
# RESUMEN CUDYR
# ============================================

def filas_cudyr(registro: RegistroDiario) -> List[List[Any]]:
    """
    Resumen CUDYR del día: una fila por paciente ocupado con puntaje
    (incluidas las cunas clínicas).
    """
    filas = []
    for definicion in CATALOGO_CAMAS.activas(registro.camas_extra_activas):
        p = registro.camas.get(definicion.id)
        if p is None:
            continue

        pacientes = [(definicion.nombre, p)]
        if p.cuna_clinica is not None:
            pacientes.append((f"{definicion.nombre} (Cuna)", p.cuna_clinica))

        for nombre_cama, paciente in pacientes:
            if not paciente.esta_ocupada or paciente.cudyr is None:
                continue
            resultado = calcular_cudyr(paciente.cudyr)
            filas.append([
                registro.fecha,
                nombre_cama,
                paciente.nombre,
                paciente.rut,
                resultado.puntaje_dependencia,
                resultado.puntaje_riesgo,
                resultado.categoria_dependencia,
                resultado.categoria_riesgo,
                resultado.categoria,
            ])
    return filas


def exportar_cudyr(registro: RegistroDiario) -> str:
    return _a_csv([list(ENCABEZADOS_CUDYR), *filas_cudyr(registro)])
