"""
Tests de altas y traslados (registro, corrección y deshacer).
"""
from app.services import alta_service, traslado_service
from app.services.cama_service import reemplazar_cama
from app.services.estadisticas_service import calcular_estadisticas_registro


class TestAltas:
    """Tests de altas."""

    def test_alta_libera_cama_y_guarda_instantanea(self, registro, ocupar):
        registro = ocupar(registro, "H1C1", ubicacion="Sala 1")
        nuevo = alta_service.agregar_alta(registro, "H1C1", "Vivo")

        assert nuevo.camas["H1C1"].esta_vacia
        assert nuevo.camas["H1C1"].ubicacion == "Sala 1"
        assert len(nuevo.altas) == 1

        alta = nuevo.altas[0]
        assert alta.estado == "Vivo"
        assert alta.nombre_paciente == "María Tuki"
        assert alta.cama_id == "H1C1"
        assert alta.tipo_cama == "MEDIA"
        assert alta.prevision == "Fonasa"
        assert alta.origen == "Residente"
        assert alta.es_anidado is False
        assert alta.datos_originales.nombre == "María Tuki"

    def test_alta_en_cama_vacia_sin_efecto(self, registro):
        assert alta_service.agregar_alta(registro, "H1C1", "Vivo") is registro

    def test_alta_con_cuna_genera_evento_anidado(self, registro, ocupar_con_cuna):
        registro = ocupar_con_cuna(registro, "H2C1")
        nuevo = alta_service.agregar_alta(registro, "H2C1", "Vivo", "Vivo")

        assert len(nuevo.altas) == 2
        cuna = nuevo.altas[1]
        assert cuna.es_anidado is True
        assert cuna.nombre_cama == "H2C1 (Cuna)"
        assert cuna.tipo_cama == "Cuna"
        assert cuna.nombre_paciente == "RN de María Tuki"
        # Previsión y origen se toman de la madre
        assert cuna.prevision == "Fonasa"
        assert nuevo.camas["H2C1"].cuna_clinica is None

    def test_alta_sin_estado_cuna_solo_madre(self, registro, ocupar_con_cuna):
        registro = ocupar_con_cuna(registro, "H2C1")
        nuevo = alta_service.agregar_alta(registro, "H2C1", "Vivo")
        assert len(nuevo.altas) == 1

    def test_deshacer_alta_restaura_paciente(self, registro, ocupar):
        registro = alta_service.agregar_alta(ocupar(registro, "H1C1"), "H1C1", "Vivo")
        alta_id = registro.altas[0].id

        resultado = alta_service.deshacer_alta(registro, alta_id)
        assert resultado.exito is True
        assert resultado.registro.camas["H1C1"].nombre == "María Tuki"
        assert resultado.registro.altas == []

    def test_deshacer_alta_con_cama_ocupada(self, registro, ocupar):
        registro = alta_service.agregar_alta(ocupar(registro, "H1C1"), "H1C1", "Vivo")
        registro = ocupar(registro, "H1C1", nombre="Pedro Atan")

        resultado = alta_service.deshacer_alta(registro, registro.altas[0].id)
        assert resultado.exito is False
        assert resultado.registro is registro
        assert "ya está ocupada" in resultado.mensaje

    def test_deshacer_cuna_requiere_madre(self, registro, ocupar_con_cuna):
        registro = ocupar_con_cuna(registro, "H2C1")
        registro = alta_service.agregar_alta(registro, "H2C1", "Vivo", "Vivo")
        cuna_id = registro.altas[1].id

        resultado = alta_service.deshacer_alta(registro, cuna_id)
        assert resultado.exito is False
        assert "Madre / Tutor" in resultado.mensaje

    def test_deshacer_cuna_con_madre_restaurada(self, registro, ocupar_con_cuna):
        registro = ocupar_con_cuna(registro, "H2C1")
        registro = alta_service.agregar_alta(registro, "H2C1", "Vivo", "Vivo")
        madre_id, cuna_id = registro.altas[0].id, registro.altas[1].id

        registro = alta_service.deshacer_alta(registro, madre_id).registro
        resultado = alta_service.deshacer_alta(registro, cuna_id)

        assert resultado.exito is True
        cama = resultado.registro.camas["H2C1"]
        assert cama.nombre == "María Tuki"
        assert cama.cuna_clinica.nombre == "RN de María Tuki"
        assert cama.tiene_cuna_acompanante is False

    def test_deshacer_madre_no_restaura_cuna_con_alta_propia(self, registro, ocupar_con_cuna):
        registro = ocupar_con_cuna(registro, "H2C1")
        registro = alta_service.agregar_alta(registro, "H2C1", "Vivo", "Vivo")
        madre_id = registro.altas[0].id

        resultado = alta_service.deshacer_alta(registro, madre_id)

        assert resultado.exito is True
        cama = resultado.registro.camas["H2C1"]
        assert cama.nombre == "María Tuki"
        assert cama.cuna_clinica is None
        assert [a.nombre_paciente for a in resultado.registro.altas] == ["RN de María Tuki"]
        assert calcular_estadisticas_registro(resultado.registro).total_hospitalizados == 1

    def test_deshacer_madre_sin_alta_de_cuna_restaura_ambas(self, registro, ocupar_con_cuna):
        registro = ocupar_con_cuna(registro, "H2C1")
        registro = alta_service.agregar_alta(registro, "H2C1", "Vivo")

        resultado = alta_service.deshacer_alta(registro, registro.altas[0].id)

        assert resultado.registro.camas["H2C1"].cuna_clinica.nombre == "RN de María Tuki"
        assert calcular_estadisticas_registro(resultado.registro).total_hospitalizados == 2

    def test_deshacer_alta_inexistente(self, registro):
        resultado = alta_service.deshacer_alta(registro, "no-existe")
        assert resultado.exito is False
        assert resultado.registro is registro

    def test_actualizar_estado_alta(self, registro, ocupar):
        registro = alta_service.agregar_alta(ocupar(registro, "H1C1"), "H1C1", "Vivo")
        nuevo = alta_service.actualizar_alta(registro, registro.altas[0].id, "Fallecido")
        assert nuevo.altas[0].estado == "Fallecido"

    def test_eliminar_alta_no_restaura(self, registro, ocupar):
        registro = alta_service.agregar_alta(ocupar(registro, "H1C1"), "H1C1", "Vivo")
        nuevo = alta_service.eliminar_alta(registro, registro.altas[0].id)
        assert nuevo.altas == []
        assert nuevo.camas["H1C1"].esta_vacia


class TestTraslados:
    """Tests de traslados."""

    def test_traslado_con_acompanante_en_vuelo_comercial(self, registro, ocupar):
        registro = ocupar(registro, "R1")
        nuevo = traslado_service.agregar_traslado(
            registro, "R1", "Avión comercial", "Hospital Salvador", acompanante="Hija"
        )

        traslado = nuevo.traslados[0]
        assert traslado.metodo_evacuacion == "Avión comercial"
        assert traslado.centro_receptor == "Hospital Salvador"
        assert traslado.acompanante == "Hija"
        assert traslado.tipo_cama == "UTI"
        assert nuevo.camas["R1"].esta_vacia

    def test_acompanante_solo_en_vuelo_comercial(self, registro, ocupar):
        registro = ocupar(registro, "R1")
        nuevo = traslado_service.agregar_traslado(
            registro, "R1", "Aerocardal", "Hospital Salvador", acompanante="Hija"
        )
        assert nuevo.traslados[0].acompanante is None

    def test_centro_otro_guarda_texto_libre(self, registro, ocupar):
        registro = ocupar(registro, "R1")
        nuevo = traslado_service.agregar_traslado(
            registro, "R1", "Avión FACH", "Otro", centro_receptor_otro="Clínica Alemana"
        )
        assert nuevo.traslados[0].centro_receptor_otro == "Clínica Alemana"

    def test_cuna_con_nombre_acompana_a_la_madre(self, registro, ocupar_con_cuna):
        registro = ocupar_con_cuna(registro, "H4C2")
        nuevo = traslado_service.agregar_traslado(registro, "H4C2", "Aerocardal", "Hospital Tisné")

        assert len(nuevo.traslados) == 2
        assert nuevo.traslados[1].es_anidado is True
        assert nuevo.traslados[1].centro_receptor == "Hospital Tisné"

    def test_deshacer_madre_trasladada_deja_cuna_en_su_evento(self, registro, ocupar_con_cuna):
        registro = ocupar_con_cuna(registro, "H4C2")
        registro = traslado_service.agregar_traslado(registro, "H4C2", "Aerocardal", "Hospital Tisné")

        resultado = traslado_service.deshacer_traslado(registro, registro.traslados[0].id)

        assert resultado.registro.camas["H4C2"].cuna_clinica is None
        assert len(resultado.registro.traslados) == 1
        assert resultado.registro.traslados[0].es_anidado is True

    def test_traslado_en_cama_vacia_sin_efecto(self, registro):
        assert traslado_service.agregar_traslado(registro, "R1", "Aerocardal", "Hospital Tisné") is registro

    def test_deshacer_traslado(self, registro, ocupar):
        registro = traslado_service.agregar_traslado(
            ocupar(registro, "R3"), "R3", "Aerocardal", "Hospital Tisné"
        )
        resultado = traslado_service.deshacer_traslado(registro, registro.traslados[0].id)

        assert resultado.exito is True
        assert resultado.registro.camas["R3"].nombre == "María Tuki"
        assert resultado.registro.traslados == []

    def test_deshacer_traslado_con_cama_ocupada(self, registro, ocupar):
        registro = traslado_service.agregar_traslado(
            ocupar(registro, "R3"), "R3", "Aerocardal", "Hospital Tisné"
        )
        registro = ocupar(registro, "R3", nombre="Otro Paciente")

        resultado = traslado_service.deshacer_traslado(registro, registro.traslados[0].id)
        assert resultado.exito is False
        assert "el traslado" in resultado.mensaje

    def test_deshacer_conserva_ubicacion_actual(self, registro, ocupar):
        registro = ocupar(registro, "E1", ubicacion="Pasillo")
        registro = traslado_service.agregar_traslado(registro, "E1", "Aerocardal", "Hospital Tisné")
        cama = registro.camas["E1"].model_copy(update={"ubicacion": "Box 3"})
        registro = reemplazar_cama(registro, "E1", cama)

        resultado = traslado_service.deshacer_traslado(registro, registro.traslados[0].id)
        assert resultado.registro.camas["E1"].ubicacion == "Box 3"

    def test_actualizar_traslado_con_alias(self, registro, ocupar):
        registro = traslado_service.agregar_traslado(
            ocupar(registro, "R3"), "R3", "Aerocardal", "Hospital Tisné"
        )
        traslado_id = registro.traslados[0].id

        nuevo = traslado_service.actualizar_traslado(
            registro, traslado_id, {"receivingCenter": "Hospital Salvador", "patientName": "X"}
        )
        assert nuevo.traslados[0].centro_receptor == "Hospital Salvador"
        assert nuevo.traslados[0].nombre_paciente == "María Tuki"

    def test_actualizar_traslado_sin_campos_editables(self, registro, ocupar):
        registro = traslado_service.agregar_traslado(
            ocupar(registro, "R3"), "R3", "Aerocardal", "Hospital Tisné"
        )
        assert traslado_service.actualizar_traslado(
            registro, registro.traslados[0].id, {"rut": "1-9"}
        ) is registro

    def test_eliminar_traslado(self, registro, ocupar):
        registro = traslado_service.agregar_traslado(
            ocupar(registro, "R3"), "R3", "Aerocardal", "Hospital Tisné"
        )
        nuevo = traslado_service.eliminar_traslado(registro, registro.traslados[0].id)
        assert nuevo.traslados == []
        assert nuevo.camas["R3"].esta_vacia
