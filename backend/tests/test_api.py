"""
Tests de integración de la API.
"""
import asyncio

from app.api.dependencias import get_registro_service
from app.models.enums import EspacioAlmacenamiento
from app.services.registro_service import RegistroService, crear_registro_vacio
from app.services.sincronizacion_service import AlmacenRemotoMemoria, ResolutorConflictos
from main import app


class TestRegistrosAPI:
    """Tests de los endpoints de registros."""

    def test_crear_y_obtener_registro(self, client, fecha, crear_registro_api):
        data = crear_registro_api()
        assert data["cambio"] is True
        assert data["estado_sincronizacion"] == "saved"
        assert data["registro"]["date"] == fecha

        response = client.get(f"/api/registros/{fecha}")
        assert response.status_code == 200
        assert "R1" in response.json()["beds"]

    def test_crear_existente_sin_cambios(self, crear_registro_api):
        crear_registro_api()
        assert crear_registro_api()["cambio"] is False

    def test_fecha_invalida(self, client):
        response = client.post("/api/registros/15-01-2025")
        assert response.status_code == 400

    def test_registro_inexistente(self, client):
        assert client.get("/api/registros/2020-01-01").status_code == 404

    def test_listar_fechas(self, client, crear_registro_api):
        crear_registro_api("2025-01-14")
        crear_registro_api("2025-01-15")
        assert client.get("/api/registros").json() == ["2025-01-15", "2025-01-14"]

    def test_espacio_demo_aislado(self, client, fecha, crear_registro_api):
        crear_registro_api(demo=True)
        assert client.get(f"/api/registros/{fecha}").status_code == 404
        assert client.get(f"/api/registros/{fecha}", params={"demo": True}).status_code == 200

    def test_guardar_fecha_distinta(self, client, fecha, crear_registro_api):
        documento = crear_registro_api()["registro"]
        response = client.put("/api/registros/2025-01-16", json=documento)
        assert response.status_code == 400

    def test_recibir_remoto(self, client, fecha, crear_registro_api):
        documento = crear_registro_api()["registro"]
        documento["beds"]["R1"]["patientName"] = "Desde Remoto"
        documento["lastUpdated"] = "2099-01-01T00:00:00.000Z"

        response = client.post(f"/api/registros/{fecha}/remoto", json=documento)
        assert response.json()["success"] is True
        assert client.get(f"/api/registros/{fecha}").json()["beds"]["R1"]["patientName"] == "Desde Remoto"


class TestCamasAPI:
    """Tests de los endpoints de camas."""

    def test_actualizar_campos(self, client, fecha, crear_registro_api):
        crear_registro_api()
        response = client.patch(
            f"/api/registros/{fecha}/camas/R1",
            json={"campos": {"patientName": "Ana Tuki", "age": "30a"}},
        )
        assert response.status_code == 200
        assert response.json()["registro"]["beds"]["R1"]["patientName"] == "Ana Tuki"

        cama = client.get(f"/api/registros/{fecha}/camas/R1").json()
        assert cama["paciente"]["age"] == "30a"
        assert cama["cudyr"]["categorizado"] is False

    def test_fecha_ingreso_futura_sin_cambio(self, client, fecha, crear_registro_api):
        crear_registro_api()
        response = client.put(
            f"/api/registros/{fecha}/camas/R1/campo",
            json={"campo": "admissionDate", "valor": "2999-01-01"},
        )
        assert response.status_code == 200
        assert response.json()["cambio"] is False

    def test_cama_inexistente(self, client, fecha, crear_registro_api):
        crear_registro_api()
        response = client.patch(f"/api/registros/{fecha}/camas/X9", json={"campos": {}})
        assert response.status_code == 404

    def test_sin_registro(self, client, fecha):
        response = client.patch(f"/api/registros/{fecha}/camas/R1", json={"campos": {"nombre": "A"}})
        assert response.status_code == 404

    def test_cudyr_fuera_de_rango(self, client, fecha, crear_registro_api):
        crear_registro_api()
        response = client.put(
            f"/api/registros/{fecha}/camas/R1/cudyr", json={"item": "movilizacion", "valor": 5}
        )
        assert response.status_code == 422

    def test_bloqueo_sin_body(self, client, fecha, crear_registro_api):
        crear_registro_api()
        response = client.post(f"/api/registros/{fecha}/camas/H1C1/bloqueo")
        assert response.json()["registro"]["beds"]["H1C1"]["isBlocked"] is True


class TestEgresosAPI:
    """Tests de altas y traslados vía API."""

    def ocupar(self, client, fecha, cama_id, nombre="Ana Tuki"):
        client.patch(f"/api/registros/{fecha}/camas/{cama_id}", json={"campos": {"nombre": nombre}})

    def test_alta_y_deshacer(self, client, fecha, crear_registro_api):
        crear_registro_api()
        self.ocupar(client, fecha, "R1")

        response = client.post(f"/api/registros/{fecha}/altas", json={"cama_id": "R1", "estado": "Vivo"})
        alta_id = response.json()["registro"]["discharges"][0]["id"]

        response = client.post(f"/api/registros/{fecha}/altas/{alta_id}/deshacer")
        assert response.status_code == 200
        assert response.json()["mensaje"] == "Se deshizo el alta de Ana Tuki."
        assert response.json()["registro"]["beds"]["R1"]["patientName"] == "Ana Tuki"

    def test_deshacer_con_cama_ocupada(self, client, fecha, crear_registro_api):
        crear_registro_api()
        self.ocupar(client, fecha, "R1")
        response = client.post(f"/api/registros/{fecha}/altas", json={"cama_id": "R1", "estado": "Vivo"})
        alta_id = response.json()["registro"]["discharges"][0]["id"]
        self.ocupar(client, fecha, "R1", "Otro Paciente")

        response = client.post(f"/api/registros/{fecha}/altas/{alta_id}/deshacer")
        assert response.status_code == 409
        assert "ya está ocupada" in response.json()["detail"]

    def test_estado_alta_invalido(self, client, fecha, crear_registro_api):
        crear_registro_api()
        response = client.post(f"/api/registros/{fecha}/altas", json={"cama_id": "R1", "estado": "Perdido"})
        assert response.status_code == 422

    def test_traslado(self, client, fecha, crear_registro_api):
        crear_registro_api()
        self.ocupar(client, fecha, "R2")

        response = client.post(f"/api/registros/{fecha}/traslados", json={
            "cama_id": "R2",
            "metodo_evacuacion": "Aerocardal",
            "centro_receptor": "Hospital Salvador",
        })
        traslado = response.json()["registro"]["transfers"][0]
        assert traslado["receivingCenter"] == "Hospital Salvador"

        response = client.patch(
            f"/api/registros/{fecha}/traslados/{traslado['id']}",
            json={"centro_receptor": "Hospital Tisné"},
        )
        assert response.json()["registro"]["transfers"][0]["receivingCenter"] == "Hospital Tisné"


class TestEstadisticasYExportacionAPI:
    """Tests de estadísticas, exportación e importación."""

    def test_estadisticas_del_dia(self, client, fecha, crear_registro_api):
        crear_registro_api()
        client.patch(f"/api/registros/{fecha}/camas/R1", json={"campos": {"nombre": "Ana"}})

        response = client.get(f"/api/estadisticas/{fecha}")
        assert response.status_code == 200
        assert response.json()["camas_ocupadas"] == 1

    def test_rango_invertido(self, client):
        response = client.get("/api/estadisticas", params={"desde": "2025-01-15", "hasta": "2025-01-01"})
        assert response.status_code == 400

    def test_exportar_csv(self, client, fecha, crear_registro_api):
        crear_registro_api()
        response = client.get(f"/api/exportacion/csv/{fecha}")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert f'filename="censo_{fecha}.csv"' in response.headers["content-disposition"]

    def test_exportar_e_importar_json(self, client, fecha, crear_registro_api):
        crear_registro_api()
        respaldo = client.get("/api/exportacion/json").json()
        assert list(respaldo) == [fecha]

        response = client.post("/api/exportacion/importar", params={"demo": True}, json=respaldo)
        assert response.status_code == 200
        assert response.json()["registros_importados"] == 1
        assert client.get(f"/api/registros/{fecha}", params={"demo": True}).status_code == 200

    def test_importar_invalido(self, client, fecha, crear_registro_api):
        documento = crear_registro_api()["registro"]
        documento["beds"]["R1"]["rut"] = "xx"

        response = client.post("/api/exportacion/importar", json={fecha: documento})
        assert response.status_code == 422
        assert response.json()["errores"] == [f"{fecha}.beds.R1.rut: Formato de RUT inválido"]


class TestEnfermeriaYDemoAPI:
    """Tests de enfermería y datos demo."""

    def test_nomina_por_defecto(self, client):
        assert client.get("/api/enfermeria/nomina").json() == ["Enfermero/a 1", "Enfermero/a 2"]

    def test_guardar_nomina(self, client):
        client.put("/api/enfermeria/nomina", json={"nombres": [" Ana ", ""]})
        assert client.get("/api/enfermeria/nomina").json() == ["Ana"]

    def test_turno(self, client, fecha, crear_registro_api):
        crear_registro_api()
        response = client.put(f"/api/enfermeria/turno/{fecha}", json={"indice": 0, "nombre": "Ana"})
        assert response.json()["registro"]["nurses"] == ["Ana", ""]

    def test_generar_y_eliminar_demo(self, client):
        response = client.post("/api/demo/generar", json={"periodo": "semana", "fecha": "2025-01-01", "semilla": 1})
        assert response.status_code == 200
        assert len(response.json()["data"]["fechas"]) == 7

        assert client.get("/api/registros").json() == []
        assert len(client.get("/api/registros", params={"demo": True}).json()) == 7

        response = client.delete("/api/demo")
        assert response.json()["success"] is True
        assert client.get("/api/registros", params={"demo": True}).json() == []

    def test_demo_fecha_invalida(self, client):
        response = client.post("/api/demo/generar", json={"fecha": "mañana"})
        assert response.status_code == 400

    def test_demo_fecha_con_hora(self, client):
        response = client.post("/api/demo/generar", json={"fecha": "2025-01-01T10:00"})
        assert response.status_code == 400
        assert client.get("/api/registros", params={"demo": True}).json() == []


class TestHealthYWebSocket:
    """Tests de health check y WebSocket."""

    def test_health(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_websocket_suscripcion_y_ping(self, client, fecha):
        with client.websocket_connect("/api/ws") as websocket:
            websocket.send_json({"action": "subscribe", "fecha": fecha})
            assert websocket.receive_json() == {"tipo": "subscribed", "fecha": fecha}

            websocket.send_json({"action": "ping"})
            assert websocket.receive_json() == {"tipo": "pong"}

    def test_readiness_cuenta_registros_por_espacio(self, client, crear_registro_api):
        crear_registro_api()
        crear_registro_api("2025-01-16", demo=True)

        response = client.get("/api/health/readiness")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"
        assert response.json()["registros"] == {"produccion": 1, "demo": 1}

    def test_websocket_fecha_ignora_mensaje_invalido(self, client, fecha):
        with client.websocket_connect(f"/api/ws/{fecha}") as websocket:
            websocket.send_text("no es json")
            websocket.send_json({"action": "ping"})
            assert websocket.receive_json() == {"tipo": "pong"}

    def test_sincronizar_notifica_suscriptores(self, client, session, fecha, ocupar):
        almacen = AlmacenRemotoMemoria()
        asyncio.run(almacen.guardar(ocupar(crear_registro_vacio(fecha), "R4")))
        app.dependency_overrides[get_registro_service] = lambda: RegistroService(
            session, EspacioAlmacenamiento.PRODUCCION, almacen, ResolutorConflictos(reloj=lambda: 0.0)
        )

        with client.websocket_connect("/api/ws") as websocket:
            websocket.send_json({"action": "subscribe", "fecha": fecha})
            websocket.receive_json()

            response = client.post(f"/api/registros/{fecha}/sincronizar")
            assert response.status_code == 200
            assert response.json()["beds"]["R4"]["patientName"] == "María Tuki"

            mensaje = websocket.receive_json()
            assert mensaje["tipo"] == "registro_remoto"
            assert mensaje["fecha"] == fecha
