"""
Tests del log de CMA y del turno de enfermería.
"""
from app.services import cma_service, enfermeria_service


class TestCMA:
    """Tests del registro de Cirugía Mayor Ambulatoria."""

    def test_agregar_genera_id_y_marca_tiempo(self, registro):
        nuevo = cma_service.agregar_cma(registro, {
            "id": "ignorado",
            "nombre_paciente": "Rosa Hotu",
            "diagnostico": "Colelitiasis",
        })

        entrada = nuevo.cma[0]
        assert entrada.id != "ignorado"
        assert entrada.marca_tiempo is not None
        assert entrada.tipo_intervencion == "Cirugía Mayor Ambulatoria"
        assert registro.cma == []

    def test_agregar_acepta_alias(self, registro):
        nuevo = cma_service.agregar_cma(registro, {
            "patientName": "Rosa Hotu",
            "interventionType": "Procedimiento Médico Ambulatorio",
        })
        assert nuevo.cma[0].nombre_paciente == "Rosa Hotu"
        assert nuevo.cma[0].tipo_intervencion == "Procedimiento Médico Ambulatorio"

    def test_actualizar_combina_cambios(self, registro):
        registro = cma_service.agregar_cma(registro, {"nombre_paciente": "Rosa Hotu", "edad": "40a"})
        cma_id = registro.cma[0].id

        nuevo = cma_service.actualizar_cma(registro, cma_id, {"diagnosis": "Hernia"})
        entrada = nuevo.cma[0]
        assert entrada.diagnostico == "Hernia"
        assert entrada.nombre_paciente == "Rosa Hotu"
        assert entrada.id == cma_id

    def test_actualizar_tipo_invalido_sin_efecto(self, registro):
        registro = cma_service.agregar_cma(registro, {"nombre_paciente": "Rosa Hotu"})
        nuevo = cma_service.actualizar_cma(registro, registro.cma[0].id, {"tipo_intervencion": "X"})
        assert nuevo is registro

    def test_actualizar_inexistente_sin_efecto(self, registro):
        assert cma_service.actualizar_cma(registro, "no-existe", {"rut": "1-9"}) is registro

    def test_eliminar(self, registro):
        registro = cma_service.agregar_cma(registro, {"nombre_paciente": "A"})
        registro = cma_service.agregar_cma(registro, {"nombre_paciente": "B"})

        nuevo = cma_service.eliminar_cma(registro, registro.cma[0].id)
        assert [c.nombre_paciente for c in nuevo.cma] == ["B"]

    def test_eliminar_inexistente_sin_efecto(self, registro):
        assert cma_service.eliminar_cma(registro, "no-existe") is registro


class TestEnfermeria:
    """Tests de los cupos del turno de enfermería."""

    def test_normalizar_rellena_y_recorta(self):
        assert enfermeria_service.normalizar_enfermeras([]) == ["", ""]
        assert enfermeria_service.normalizar_enfermeras(["A"]) == ["A", ""]
        assert enfermeria_service.normalizar_enfermeras(["A", "B", "C"]) == ["A", "B"]

    def test_actualizar_enfermera(self, registro):
        nuevo = enfermeria_service.actualizar_enfermera(registro, 1, "Ana Pate")
        assert nuevo.enfermeras == ["", "Ana Pate"]
        assert registro.enfermeras == ["", ""]

    def test_indice_fuera_de_rango_sin_efecto(self, registro):
        assert enfermeria_service.actualizar_enfermera(registro, 2, "Ana") is registro
        assert enfermeria_service.actualizar_enfermera(registro, -1, "Ana") is registro
