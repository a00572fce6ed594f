"""
Servicio de registros diarios.

Orquesta el ciclo de vida del día: inicialización (en blanco o
copiando el día anterior), confirmación de cambios (escritura local,
espejo remoto y estado de sincronización) y recepción de
actualizaciones remotas.

Las operaciones de negocio son funciones puras (cama_service,
alta_service, ...); este servicio es el único que hace I/O.
"""
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple
import logging

from sqlmodel import Session

from app.core.exceptions import RegistroNotFoundError, SincronizacionError
from app.models.enums import EspacioAlmacenamiento, EstadoSincronizacionEnum
from app.models.paciente import Paciente, PacienteCuna
from app.models.registro import RegistroDiario
from app.repositories.registro_repo import RegistroRepository
from app.services.cudyr_service import puntaje_vacio
from app.services.paciente_factory import clonar_paciente, crear_paciente_vacio
from app.services.sincronizacion_service import (
    AlmacenRemoto,
    ResolutorConflictos,
    obtener_resolutor,
)
from app.utils.constants import CATALOGO_CAMAS, CUPOS_ENFERMERIA, CatalogoCamas
from app.utils.fechas import marca_tiempo_actual

logger = logging.getLogger("censo_camas.registros")

MENSAJE_SINCRONIZACION_FALLIDA = "Guardado localmente, sincronización fallida"

Operacion = Callable[[RegistroDiario], RegistroDiario]


# ============================================
# INICIALIZACIÓN DEL DÍA (PURA)
# ============================================

def crear_registro_vacio(fecha: str, catalogo: CatalogoCamas = CATALOGO_CAMAS) -> RegistroDiario:
    """
    Registro en blanco: todas las camas del catálogo vacías.

    Args:
        fecha: Fecha YYYY-MM-DD
        catalogo: Catálogo de camas

    Returns:
        RegistroDiario sin pacientes ni eventos
    """
    return RegistroDiario(
        fecha=fecha,
        camas={c.id: crear_paciente_vacio(c.id, catalogo) for c in catalogo},
        altas=[],
        traslados=[],
        cma=[],
        ultima_actualizacion=marca_tiempo_actual(),
        enfermeras=[""] * CUPOS_ENFERMERIA,
        camas_extra_activas=[],
    )


def _reiniciar_cudyr(paciente: PacienteCuna) -> PacienteCuna:
    # Solo se reinicia un puntaje existente; la ausencia se conserva
    cambios = {}
    if paciente.cudyr is not None:
        cambios["cudyr"] = puntaje_vacio()
    if isinstance(paciente, Paciente) and paciente.cuna_clinica is not None:
        cambios["cuna_clinica"] = _reiniciar_cudyr(paciente.cuna_clinica)
    return paciente.model_copy(update=cambios) if cambios else paciente


def clonar_desde_anterior(
    fecha: str,
    anterior: RegistroDiario,
    catalogo: CatalogoCamas = CATALOGO_CAMAS,
) -> RegistroDiario:
    """
    Registro nuevo que arrastra los pacientes del día anterior.

    - Camas ocupadas o bloqueadas: copia profunda con CUDYR en cero
      (también el de la cuna clínica).
    - Camas vacías: solo conservan mobiliario y cuna de acompañante.
    - Camas extra: conservan la ubicación.
    - Se copian las camas extra activas; altas, traslados, CMA y
      enfermeros/as comienzan vacíos.
    """
    registro = crear_registro_vacio(fecha, catalogo)
    camas = dict(registro.camas)

    for definicion in catalogo:
        previo = anterior.camas.get(definicion.id)
        if previo is None:
            continue

        if previo.esta_ocupada or previo.bloqueada:
            nuevo = _reiniciar_cudyr(clonar_paciente(previo))
        else:
            nuevo = camas[definicion.id].model_copy(update={
                "modo_cama": previo.modo_cama or camas[definicion.id].modo_cama,
                "tiene_cuna_acompanante": bool(previo.tiene_cuna_acompanante),
            })

        if definicion.es_extra and previo.ubicacion:
            nuevo = nuevo.model_copy(update={"ubicacion": previo.ubicacion})

        camas[definicion.id] = nuevo

    return registro.model_copy(update={
        "camas": camas,
        "camas_extra_activas": list(anterior.camas_extra_activas),
    }).model_copy(deep=True)


# ============================================
# ORQUESTACIÓN
# ============================================

@dataclass
class ResultadoConfirmacion:
    """Resultado de confirmar un cambio."""
    registro: RegistroDiario
    estado_sincronizacion: EstadoSincronizacionEnum
    cambio: bool = True
    mensaje: Optional[str] = None


class RegistroService:
    """
    Servicio de registros de un espacio de almacenamiento.

    Uso:
        service = RegistroService(session, espacio, almacen_remoto)
        resultado = await service.aplicar(fecha, lambda r: agregar_alta(r, "R1", "Vivo"))
    """

    def __init__(
        self,
        session: Session,
        espacio: EspacioAlmacenamiento = EspacioAlmacenamiento.PRODUCCION,
        almacen_remoto: Optional[AlmacenRemoto] = None,
        resolutor: Optional[ResolutorConflictos] = None,
    ):
        self.espacio = EspacioAlmacenamiento(espacio)
        self.repo = RegistroRepository(session, self.espacio)
        self.almacen_remoto = almacen_remoto
        self.resolutor = resolutor or obtener_resolutor(self.espacio)

    @property
    def sincroniza_remoto(self) -> bool:
        """El espacio demo nunca se sincroniza."""
        return self.almacen_remoto is not None and self.espacio == EspacioAlmacenamiento.PRODUCCION

    # ============================================
    # LECTURA
    # ============================================

    def obtener(self, fecha: str) -> Optional[RegistroDiario]:
        return self.repo.obtener_por_fecha(fecha)

    def obtener_o_error(self, fecha: str) -> RegistroDiario:
        registro = self.repo.obtener_por_fecha(fecha)
        if registro is None:
            raise RegistroNotFoundError(fecha)
        return registro

    def obtener_anterior(self, fecha: str) -> Optional[RegistroDiario]:
        return self.repo.obtener_anterior(fecha)

    def obtener_todos(self) -> Dict[str, RegistroDiario]:
        return self.repo.obtener_todos_registros()

    def obtener_rango(self, desde: str, hasta: str) -> List[RegistroDiario]:
        return self.repo.obtener_rango(desde, hasta)

    def fechas_disponibles(self) -> List[str]:
        return self.repo.fechas_disponibles()

    # ============================================
    # ESCRITURA
    # ============================================

    async def inicializar_dia(self, fecha: str, copiar_anterior: bool = False) -> ResultadoConfirmacion:
        """
        Crea el registro de una fecha.

        Si el registro ya existe se retorna sin cambios.

        Args:
            fecha: Fecha YYYY-MM-DD
            copiar_anterior: Copiar pacientes del registro anterior más cercano

        Returns:
            ResultadoConfirmacion (cambio=False si ya existía)
        """
        existente = self.repo.obtener_por_fecha(fecha)
        if existente is not None:
            return ResultadoConfirmacion(
                registro=existente,
                estado_sincronizacion=EstadoSincronizacionEnum.IDLE,
                cambio=False,
            )

        anterior = self.repo.obtener_anterior(fecha) if copiar_anterior else None
        if copiar_anterior and anterior is None:
            logger.warning(f"No hay registro anterior a {fecha}; se inicializa en blanco")

        if anterior is not None:
            registro = clonar_desde_anterior(fecha, anterior)
            logger.info(f"Día {fecha} inicializado copiando {anterior.fecha}")
        else:
            registro = crear_registro_vacio(fecha)
            logger.info(f"Día {fecha} inicializado en blanco")

        return await self.confirmar(None, registro)

    async def confirmar(
        self,
        anterior: Optional[RegistroDiario],
        nuevo: RegistroDiario,
    ) -> ResultadoConfirmacion:
        """
        Persiste el resultado de una operación pura.

        1. Si la operación no tuvo efecto (mismo objeto), no escribe nada.
        2. Escritura local sincrónica.
        3. Espejo remoto (salvo espacio demo o remoto deshabilitado).
           Un fallo remoto no revierte la escritura local.

        Args:
            anterior: Registro antes de la operación
            nuevo: Registro retornado por la operación

        Returns:
            ResultadoConfirmacion con el estado de sincronización
        """
        if nuevo is anterior:
            return ResultadoConfirmacion(
                registro=nuevo,
                estado_sincronizacion=EstadoSincronizacionEnum.IDLE,
                cambio=False,
            )

        self.repo.guardar_registro(nuevo)
        self.resolutor.registrar_cambio_local(nuevo.fecha)

        if not self.sincroniza_remoto:
            return ResultadoConfirmacion(
                registro=nuevo,
                estado_sincronizacion=EstadoSincronizacionEnum.SAVED,
            )

        try:
            await self.almacen_remoto.guardar(nuevo)
        except SincronizacionError as e:
            logger.error(f"Fallo de sincronización remota para {nuevo.fecha}: {e.message}")
            return ResultadoConfirmacion(
                registro=nuevo,
                estado_sincronizacion=EstadoSincronizacionEnum.ERROR,
                mensaje=MENSAJE_SINCRONIZACION_FALLIDA,
            )

        return ResultadoConfirmacion(
            registro=nuevo,
            estado_sincronizacion=EstadoSincronizacionEnum.SAVED,
        )

    async def aplicar(self, fecha: str, operacion: Operacion) -> ResultadoConfirmacion:
        """
        Carga el registro, aplica una operación pura y confirma el resultado.

        Raises:
            RegistroNotFoundError: Si no existe registro para la fecha
        """
        actual = self.obtener_o_error(fecha)
        return await self.confirmar(actual, operacion(actual))

    async def guardar(self, registro: RegistroDiario) -> ResultadoConfirmacion:
        """Guarda un registro completo (reemplazo por fecha)."""
        return await self.confirmar(None, registro)

    def eliminar_todos(self) -> int:
        return self.repo.eliminar_todos()

    # ============================================
    # ACTUALIZACIONES REMOTAS
    # ============================================

    def recibir_remoto(self, remoto: RegistroDiario) -> bool:
        """
        Procesa un registro recibido del almacén remoto.

        Returns:
            True si se aceptó y se escribió localmente
        """
        if self.espacio == EspacioAlmacenamiento.DEMO:
            return False

        local = self.repo.obtener_por_fecha(remoto.fecha)
        if not self.resolutor.aceptar_remoto(local, remoto):
            return False

        self.repo.guardar_registro(remoto)
        logger.info(f"Registro {remoto.fecha} actualizado desde el almacén remoto")
        return True

    async def sincronizar_desde_remoto(self, fecha: str) -> Tuple[Optional[RegistroDiario], bool]:
        """
        Lee el registro remoto de la fecha y lo aplica si corresponde.

        Returns:
            Tupla (registro local resultante o None, True si se aplicó el remoto)

        Raises:
            SincronizacionError: Si el almacén remoto no responde
        """
        if not self.sincroniza_remoto:
            return self.repo.obtener_por_fecha(fecha), False

        remoto = await self.almacen_remoto.obtener(fecha)
        aceptado = remoto is not None and self.recibir_remoto(remoto)
        return self.repo.obtener_por_fecha(fecha), aceptado

    # ============================================
    # NÓMINA DE ENFERMERÍA
    # ============================================

    def obtener_nomina(self) -> List[str]:
        return self.repo.obtener_nomina()

    def guardar_nomina(self, nombres: List[str]) -> List[str]:
        limpios = [n.strip() for n in nombres if n and n.strip()]
        logger.info(f"Nómina de enfermería actualizada ({len(limpios)} nombres)")
        return self.repo.guardar_nomina(limpios)
