"""
Endpoints de Cirugía Mayor Ambulatoria (CMA).
"""
from fastapi import APIRouter, Depends

from app.api.dependencias import ejecutar_operacion, get_registro_service
from app.schemas.registro import CMACreate, CMAUpdate
from app.schemas.responses import OperacionResponse
from app.services import cma_service
from app.services.registro_service import RegistroService

router = APIRouter()


@router.post("", response_model=OperacionResponse)
async def agregar_cma(
    fecha: str,
    data: CMACreate,
    service: RegistroService = Depends(get_registro_service),
):
    datos = data.model_dump()
    return await ejecutar_operacion(
        service, fecha,
        lambda r: cma_service.agregar_cma(r, datos),
        "cma_registrada",
    )


@router.patch("/{cma_id}", response_model=OperacionResponse)
async def actualizar_cma(
    fecha: str,
    cma_id: str,
    data: CMAUpdate,
    service: RegistroService = Depends(get_registro_service),
):
    """Corrige datos de una entrada CMA. Solo se aplican los campos enviados."""
    cambios = data.model_dump(exclude_unset=True)
    return await ejecutar_operacion(
        service, fecha,
        lambda r: cma_service.actualizar_cma(r, cma_id, cambios),
        "cma_actualizada",
    )


@router.delete("/{cma_id}", response_model=OperacionResponse)
async def eliminar_cma(
    fecha: str,
    cma_id: str,
    service: RegistroService = Depends(get_registro_service),
):
    return await ejecutar_operacion(
        service, fecha,
        lambda r: cma_service.eliminar_cma(r, cma_id),
        "cma_eliminada",
    )
