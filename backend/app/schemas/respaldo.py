"""
Schema del respaldo JSON (importación / exportación).

Un respaldo es un mapa fecha -> RegistroDiario con las mismas claves
camelCase del documento persistido.
"""
from typing import Any, Dict, List, Optional, Tuple

from pydantic import RootModel, ValidationError as PydanticValidationError

from app.models.registro import RegistroDiario
from app.utils.validators import PATRON_FECHA, validar_formato_rut


class Respaldo(RootModel[Dict[str, RegistroDiario]]):
    """Respaldo completo: fecha -> registro."""

    def a_documento(self) -> Dict[str, Any]:
        return {fecha: registro.a_documento() for fecha, registro in self.root.items()}


def _ruta(loc: Tuple[Any, ...]) -> str:
    return ".".join(str(parte) for parte in loc)


def _validar_paciente(ruta: List[Any], paciente: Dict[str, Any]) -> List[str]:
    errores = []
    if not validar_formato_rut(paciente.get("rut")):
        errores.append(f"{_ruta(tuple(ruta + ['rut']))}: Formato de RUT inválido")
    fecha_ingreso = paciente.get("admissionDate")
    # En respaldos solo se valida el formato; la fecha futura se bloquea al editar
    if isinstance(fecha_ingreso, str) and fecha_ingreso and not PATRON_FECHA.match(fecha_ingreso):
        errores.append(
            f"{_ruta(tuple(ruta + ['admissionDate']))}: Formato de fecha inválido (YYYY-MM-DD)"
        )
    cuna = paciente.get("clinicalCrib")
    if isinstance(cuna, dict):
        errores.extend(_validar_paciente(ruta + ["clinicalCrib"], cuna))
    return errores


def _validar_formatos(datos: Dict[str, Any]) -> List[str]:
    """Reglas de formato que no expresa el modelo (RUT, fecha de ingreso)."""
    errores = []
    for fecha, registro in datos.items():
        if not isinstance(registro, dict):
            continue
        for cama_id, paciente in (registro.get("beds") or {}).items():
            if isinstance(paciente, dict):
                errores.extend(_validar_paciente([fecha, "beds", cama_id], paciente))
    return errores


def validar_respaldo(datos: Any) -> Tuple[Optional[Respaldo], List[str]]:
    """
    Valida un respaldo.

    Args:
        datos: JSON decodificado

    Returns:
        Tupla (respaldo, errores). Si hay errores el respaldo es None.
        Cada error tiene la forma "ruta.al.campo: mensaje".
    """
    try:
        respaldo = Respaldo.model_validate(datos)
    except PydanticValidationError as e:
        return None, [f"{_ruta(err['loc'])}: {err['msg']}" for err in e.errors()]

    errores = _validar_formatos(datos)
    if errores:
        return None, errores
    return respaldo, []
