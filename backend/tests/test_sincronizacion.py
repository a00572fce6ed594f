"""
Tests de sincronización remota y resolución de conflictos.
"""
import asyncio
import json

import httpx
import pytest

from app.core.exceptions import SincronizacionError
from app.services.registro_service import crear_registro_vacio
from app.services.sincronizacion_service import (
    AlmacenRemotoHTTP,
    AlmacenRemotoMemoria,
    ResolutorConflictos,
    documento_remoto,
    normalizar_documento_remoto,
)


class Reloj:
    """Reloj manual en segundos."""

    def __init__(self):
        self.ahora = 100.0

    def __call__(self):
        return self.ahora


def con_marca(fecha, marca):
    return crear_registro_vacio(fecha).model_copy(update={"ultima_actualizacion": marca})


class TestResolutorConflictos:
    """Tests de la regla last-writer-wins con supresión de eco."""

    def test_sin_local_acepta(self, fecha):
        resolutor = ResolutorConflictos(reloj=Reloj())
        assert resolutor.aceptar_remoto(None, crear_registro_vacio(fecha)) is True

    def test_remoto_claramente_mas_nuevo_acepta(self, fecha):
        resolutor = ResolutorConflictos(reloj=Reloj())
        resolutor.registrar_cambio_local(fecha)

        local = con_marca(fecha, "2025-01-15T10:00:00.000Z")
        remoto = con_marca(fecha, "2025-01-15T10:00:01.500Z")
        assert resolutor.aceptar_remoto(local, remoto) is True

    def test_eco_dentro_de_la_ventana_se_descarta(self, fecha):
        reloj = Reloj()
        resolutor = ResolutorConflictos(reloj=reloj)
        resolutor.registrar_cambio_local(fecha)
        reloj.ahora += 0.2

        local = con_marca(fecha, "2025-01-15T10:00:00.000Z")
        remoto = con_marca(fecha, "2025-01-15T10:00:00.500Z")
        assert resolutor.aceptar_remoto(local, remoto) is False

    def test_fuera_de_la_ventana_acepta(self, fecha):
        reloj = Reloj()
        resolutor = ResolutorConflictos(reloj=reloj)
        resolutor.registrar_cambio_local(fecha)
        reloj.ahora += 1.0

        local = con_marca(fecha, "2025-01-15T10:00:00.000Z")
        remoto = con_marca(fecha, "2025-01-15T10:00:00.500Z")
        assert resolutor.aceptar_remoto(local, remoto) is True

    def test_ventana_por_fecha(self, fecha):
        resolutor = ResolutorConflictos(reloj=Reloj())
        resolutor.registrar_cambio_local("2025-01-14")

        local = con_marca(fecha, "2025-01-15T10:00:00.000Z")
        remoto = con_marca(fecha, "2025-01-15T10:00:00.000Z")
        assert resolutor.aceptar_remoto(local, remoto) is True


class TestDocumentoRemoto:
    """Tests del formato del documento remoto."""

    def test_campos_ausentes_como_null(self, registro):
        documento = documento_remoto(registro)
        assert "clinicalCrib" in documento["beds"]["R1"]
        assert documento["beds"]["R1"]["clinicalCrib"] is None

    def test_normalizar_quita_cuna_null(self, registro):
        documento = documento_remoto(registro)
        normalizado = normalizar_documento_remoto(documento)

        assert "clinicalCrib" not in normalizado["beds"]["R1"]
        assert "clinicalCrib" in documento["beds"]["R1"]

    def test_almacen_memoria_notifica(self, registro):
        almacen = AlmacenRemotoMemoria()
        recibidos = []
        anular = almacen.suscribir(registro.fecha, recibidos.append)

        asyncio.run(almacen.guardar(registro))
        anular()
        asyncio.run(almacen.guardar(registro))

        assert len(recibidos) == 1
        assert recibidos[0].fecha == registro.fecha
        assert recibidos[0].camas["R1"].cuna_clinica is None


class TestAlmacenRemotoHTTP:
    """Tests del almacén remoto HTTP con transporte simulado."""

    def crear_almacen(self, handler):
        return AlmacenRemotoHTTP(
            "https://remoto.test/api/",
            token="secreto",
            hospital_id="hanga_roa",
            transport=httpx.MockTransport(handler),
        )

    def test_guardar_envia_documento(self, registro):
        peticiones = []

        def handler(request):
            peticiones.append(request)
            return httpx.Response(200, json={"ok": True})

        asyncio.run(self.crear_almacen(handler).guardar(registro))

        request = peticiones[0]
        assert request.method == "PUT"
        assert request.url.path == f"/api/hospitals/hanga_roa/records/{registro.fecha}"
        assert request.headers["Authorization"] == "Bearer secreto"
        assert json.loads(request.content)["date"] == registro.fecha

    def test_guardar_rechazado(self, registro):
        almacen = self.crear_almacen(lambda request: httpx.Response(500))
        with pytest.raises(SincronizacionError):
            asyncio.run(almacen.guardar(registro))

    def test_error_de_conexion(self, registro):
        def handler(request):
            raise httpx.ConnectError("sin red", request=request)

        with pytest.raises(SincronizacionError):
            asyncio.run(self.crear_almacen(handler).guardar(registro))

    def test_obtener_inexistente(self, fecha):
        almacen = self.crear_almacen(lambda request: httpx.Response(404))
        assert asyncio.run(almacen.obtener(fecha)) is None

    def test_obtener_normaliza(self, registro):
        documento = documento_remoto(registro)
        almacen = self.crear_almacen(lambda request: httpx.Response(200, json=documento))

        recibido = asyncio.run(almacen.obtener(registro.fecha))
        assert recibido.fecha == registro.fecha
        assert recibido.camas["R1"].cuna_clinica is None
