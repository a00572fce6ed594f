"""
Endpoints de Enfermería: turno del día y nómina de enfermeros/as.
"""
from typing import List

from fastapi import APIRouter, Depends

from app.api.dependencias import ejecutar_operacion, get_registro_service
from app.schemas.registro import EnfermeraUpdate, NominaUpdate
from app.schemas.responses import OperacionResponse
from app.services import enfermeria_service
from app.services.registro_service import RegistroService
from app.utils.constants import NOMINA_ENFERMERIA_DEFAULT

router = APIRouter()


@router.put("/turno/{fecha}", response_model=OperacionResponse)
async def actualizar_turno(
    fecha: str,
    data: EnfermeraUpdate,
    service: RegistroService = Depends(get_registro_service),
):
    """Asigna un enfermero/a a uno de los 2 cupos del turno."""
    return await ejecutar_operacion(
        service, fecha,
        lambda r: enfermeria_service.actualizar_enfermera(r, data.indice, data.nombre),
        "enfermeria_actualizada",
    )


@router.get("/nomina", response_model=List[str])
def obtener_nomina(service: RegistroService = Depends(get_registro_service)):
    """Nómina de enfermeros/as. Si nunca se guardó, se retorna la nómina por defecto."""
    return service.obtener_nomina() or list(NOMINA_ENFERMERIA_DEFAULT)


@router.put("/nomina", response_model=List[str])
def guardar_nomina(
    data: NominaUpdate,
    service: RegistroService = Depends(get_registro_service),
):
    return service.guardar_nomina(data.nombres)
