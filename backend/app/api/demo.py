"""
Endpoints de datos de demostración.
Los registros generados se guardan siempre en el espacio demo.
"""
from typing import Optional
import random
import re

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from app.core.database import get_session
from app.models.enums import EspacioAlmacenamiento
from app.models.registro import PATRON_FECHA_ISO
from app.schemas.registro import DemoRequest
from app.schemas.responses import MessageResponse
from app.services import demo_service
from app.services.registro_service import RegistroService
from app.utils.fechas import hoy_iso, parsear_fecha

router = APIRouter()


def get_demo_service(session: Session = Depends(get_session)) -> RegistroService:
    return RegistroService(session, EspacioAlmacenamiento.DEMO)


@router.post("/generar", response_model=MessageResponse)
def generar_demo(
    data: Optional[DemoRequest] = None,
    service: RegistroService = Depends(get_demo_service),
):
    """
    Genera datos de demostración para un día, una semana o un mes.

    Con semilla el resultado es reproducible.
    """
    data = data or DemoRequest()
    fecha = data.fecha or hoy_iso()
    inicio = parsear_fecha(fecha)
    if not re.match(PATRON_FECHA_ISO, fecha) or inicio is None:
        raise HTTPException(status_code=400, detail="Formato de fecha inválido (YYYY-MM-DD)")

    rng = random.Random(data.semilla)

    if data.periodo == "semana":
        registros = demo_service.generar_demo_semana(fecha, rng)
    elif data.periodo == "mes":
        registros = demo_service.generar_demo_mes(
            data.anio or inicio.year,
            data.mes or inicio.month,
            rng,
        )
    else:
        registros = demo_service.generar_demo_dia(fecha, rng)

    guardados = service.repo.guardar_varios(registros)
    return MessageResponse(
        success=True,
        message=f"{guardados} registro(s) de demostración generados",
        data={"fechas": [r.fecha for r in registros]},
    )


@router.delete("", response_model=MessageResponse)
def eliminar_demo(service: RegistroService = Depends(get_demo_service)):
    """Elimina todos los registros del espacio demo."""
    eliminados = service.eliminar_todos()
    return MessageResponse(
        success=True,
        message=f"{eliminados} registro(s) de demostración eliminados",
    )
