"""
Tests de operaciones sobre camas y cuna clínica.
"""
from app.models.enums import TipoCamaEnum
from app.services import alta_service, cama_service, cuna_service
from app.services.estadisticas_service import calcular_estadisticas_registro
from app.utils.constants import CATALOGO_CAMAS


class TestActualizarPaciente:
    """Tests de actualización de campos del paciente."""

    def test_actualizar_campo_retorna_registro_nuevo(self, registro, hoy):
        nuevo = cama_service.actualizar_campo(registro, "R1", "nombre", "Juan Pakarati", hoy)

        assert nuevo is not registro
        assert nuevo.camas["R1"].nombre == "Juan Pakarati"
        assert registro.camas["R1"].nombre == ""

    def test_acepta_alias_del_documento(self, registro, hoy):
        nuevo = cama_service.actualizar_campo(registro, "R1", "patientName", "Juan Pakarati", hoy)
        assert nuevo.camas["R1"].nombre == "Juan Pakarati"

    def test_fecha_ingreso_futura_sin_efecto(self, registro, hoy):
        nuevo = cama_service.actualizar_campo(registro, "R1", "fecha_ingreso", "2025-01-16", hoy)
        assert nuevo is registro

    def test_fecha_ingreso_hoy_aceptada(self, registro, hoy):
        nuevo = cama_service.actualizar_campo(registro, "R1", "admissionDate", "2025-01-15", hoy)
        assert nuevo.camas["R1"].fecha_ingreso == "2025-01-15"

    def test_cama_inexistente_sin_efecto(self, registro):
        assert cama_service.actualizar_campo(registro, "X9", "nombre", "Ana") is registro

    def test_campo_desconocido_sin_efecto(self, registro):
        assert cama_service.actualizar_campo(registro, "R1", "no_existe", "x") is registro

    def test_campo_protegido_sin_efecto(self, registro):
        assert cama_service.actualizar_campo(registro, "R1", "bedId", "R2") is registro

    def test_valor_invalido_sin_efecto(self, registro):
        assert cama_service.actualizar_campo(registro, "R1", "estado", "Inventado") is registro

    def test_actualizar_campos_descarta_rechazados(self, registro, hoy):
        nuevo = cama_service.actualizar_campos(
            registro, "H1C1",
            {"nombre": "Ana Hey", "fecha_ingreso": "2030-01-01", "diagnostico": "Apendicitis"},
            hoy,
        )
        paciente = nuevo.camas["H1C1"]
        assert paciente.nombre == "Ana Hey"
        assert paciente.diagnostico == "Apendicitis"
        assert paciente.fecha_ingreso == ""

    def test_actualizar_campos_sin_cambios_validos(self, registro, hoy):
        nuevo = cama_service.actualizar_campos(registro, "H1C1", {"fecha_ingreso": "2030-01-01"}, hoy)
        assert nuevo is registro

    def test_renueva_ultima_actualizacion(self, registro):
        anterior = registro.ultima_actualizacion
        nuevo = cama_service.actualizar_campo(registro, "R1", "nombre", "Ana")
        assert nuevo.ultima_actualizacion >= anterior
        assert nuevo.ultima_actualizacion.endswith("Z")


class TestCudyr:
    """Tests de actualización de ítems CUDYR."""

    def test_crea_puntaje_si_no_existe(self, registro, ocupar):
        registro = ocupar(registro, "R1")
        assert registro.camas["R1"].cudyr is None

        nuevo = cama_service.actualizar_cudyr(registro, "R1", "movilizacion", 3)
        assert nuevo.camas["R1"].cudyr.movilizacion == 3
        assert nuevo.camas["R1"].cudyr.cambio_ropa == 0

    def test_acepta_alias(self, registro, ocupar):
        registro = ocupar(registro, "R1")
        nuevo = cama_service.actualizar_cudyr(registro, "R1", "vitalSigns", 2)
        assert nuevo.camas["R1"].cudyr.signos_vitales == 2

    def test_item_desconocido_sin_efecto(self, registro):
        assert cama_service.actualizar_cudyr(registro, "R1", "inventado", 1) is registro

    def test_valor_fuera_de_rango_sin_efecto(self, registro):
        assert cama_service.actualizar_cudyr(registro, "R1", "movilizacion", 9) is registro


class TestLimpiarYMover:
    """Tests de limpieza y movimiento de pacientes."""

    def test_limpiar_conserva_solo_ubicacion(self, registro, ocupar_con_cuna):
        registro = ocupar_con_cuna(registro, "E1")
        paciente = registro.camas["E1"].model_copy(update={"ubicacion": "Pasillo"})
        registro = cama_service.reemplazar_cama(registro, "E1", paciente)

        nuevo = cama_service.limpiar_paciente(registro, "E1")
        limpio = nuevo.camas["E1"]
        assert limpio.esta_vacia
        assert limpio.ubicacion == "Pasillo"
        assert limpio.cuna_clinica is None
        assert limpio.tiene_cuna_acompanante is False

    def test_limpiar_todas_vacia_logs(self, registro, ocupar):
        from app.services.alta_service import agregar_alta

        registro = agregar_alta(ocupar(registro, "R1"), "R1", "Vivo")
        registro = ocupar(registro, "R2")

        nuevo = cama_service.limpiar_todas_las_camas(registro)
        assert all(p.esta_vacia for p in nuevo.camas.values())
        assert nuevo.altas == []
        assert nuevo.traslados == []
        assert len(nuevo.camas) == len(CATALOGO_CAMAS)

    def test_mover_libera_origen(self, registro, ocupar):
        registro = ocupar(registro, "H1C1")
        nuevo = cama_service.mover_o_copiar_paciente(registro, "move", "H1C1", "H2C2")

        assert nuevo.camas["H1C1"].esta_vacia
        destino = nuevo.camas["H2C2"]
        assert destino.nombre == "María Tuki"
        assert destino.cama_id == "H2C2"

    def test_copiar_conserva_origen(self, registro, ocupar):
        registro = ocupar(registro, "H1C1")
        nuevo = cama_service.mover_o_copiar_paciente(registro, "copy", "H1C1", "H2C2")

        assert nuevo.camas["H1C1"].nombre == "María Tuki"
        assert nuevo.camas["H2C2"].nombre == "María Tuki"

    def test_destino_conserva_su_ubicacion(self, registro, ocupar):
        registro = ocupar(registro, "H1C1", ubicacion="Sala 1")
        destino = registro.camas["E2"].model_copy(update={"ubicacion": "Box 2"})
        registro = cama_service.reemplazar_cama(registro, "E2", destino)

        nuevo = cama_service.mover_o_copiar_paciente(registro, "move", "H1C1", "E2")
        assert nuevo.camas["E2"].ubicacion == "Box 2"
        assert nuevo.camas["H1C1"].ubicacion == "Sala 1"

    def test_mover_desde_cama_vacia_sin_efecto(self, registro):
        assert cama_service.mover_o_copiar_paciente(registro, "move", "H1C1", "H2C2") is registro

    def test_mover_a_la_misma_cama_sin_efecto(self, registro, ocupar):
        registro = ocupar(registro, "H1C1")
        assert cama_service.mover_o_copiar_paciente(registro, "move", "H1C1", "H1C1") is registro

    def test_copia_sin_referencias_compartidas(self, registro, ocupar):
        registro = ocupar(registro, "H1C1", dispositivos=["VVP"])
        nuevo = cama_service.mover_o_copiar_paciente(registro, "copy", "H1C1", "H2C2")

        nuevo.camas["H2C2"].dispositivos.append("CUP")
        assert nuevo.camas["H1C1"].dispositivos == ["VVP"]


class TestBloqueoYCamasExtra:
    """Tests de bloqueo y camas extra."""

    def test_bloquear_y_desbloquear(self, registro):
        bloqueado = cama_service.alternar_bloqueo_cama(registro, "H5C1", "Aislamiento")
        assert bloqueado.camas["H5C1"].bloqueada is True
        assert bloqueado.camas["H5C1"].motivo_bloqueo == "Aislamiento"

        desbloqueado = cama_service.alternar_bloqueo_cama(bloqueado, "H5C1")
        assert desbloqueado.camas["H5C1"].bloqueada is False
        assert desbloqueado.camas["H5C1"].motivo_bloqueo == ""

    def test_alternar_cama_extra(self, registro):
        activa = cama_service.alternar_cama_extra(registro, "E3")
        assert activa.camas_extra_activas == ["E3"]

        inactiva = cama_service.alternar_cama_extra(activa, "E3")
        assert inactiva.camas_extra_activas == []

    def test_cama_regular_no_es_extra(self, registro):
        assert cama_service.alternar_cama_extra(registro, "R1") is registro


class TestCunaClinica:
    """Tests del ciclo de vida de la cuna clínica."""

    def test_crear_cuna_en_cama_vacia_sin_efecto(self, registro):
        assert cuna_service.crear_cuna(registro, "H3C1") is registro

    def test_crear_cuna_desactiva_cuna_acompanante(self, registro, ocupar):
        registro = ocupar(registro, "H3C1", tiene_cuna_acompanante=True)
        nuevo = cuna_service.crear_cuna(registro, "H3C1")

        paciente = nuevo.camas["H3C1"]
        assert paciente.cuna_clinica is not None
        assert paciente.cuna_clinica.modo_cama == "Cuna"
        assert paciente.cuna_clinica.nombre == ""
        assert paciente.tiene_cuna_acompanante is False

    def test_crear_cuna_reemplaza_existente(self, registro, ocupar_con_cuna):
        registro = ocupar_con_cuna(registro, "H3C1")
        nuevo = cuna_service.crear_cuna(registro, "H3C1")
        assert nuevo.camas["H3C1"].cuna_clinica.nombre == ""

    def test_actualizar_campo_cuna(self, registro, ocupar, hoy):
        registro = cuna_service.crear_cuna(ocupar(registro, "H3C1"), "H3C1")
        nuevo = cuna_service.actualizar_campo_cuna(registro, "H3C1", "patientName", "RN Tuki", hoy)
        assert nuevo.camas["H3C1"].cuna_clinica.nombre == "RN Tuki"

    def test_actualizar_cuna_inexistente_sin_efecto(self, registro, ocupar):
        registro = ocupar(registro, "H3C1")
        assert cuna_service.actualizar_campo_cuna(registro, "H3C1", "nombre", "RN") is registro

    def test_fecha_ingreso_futura_en_cuna_sin_efecto(self, registro, ocupar, hoy):
        registro = cuna_service.crear_cuna(ocupar(registro, "H3C1"), "H3C1")
        nuevo = cuna_service.actualizar_campo_cuna(registro, "H3C1", "fecha_ingreso", "2026-01-01", hoy)
        assert nuevo is registro

    def test_cuna_no_acepta_cuna_anidada(self, registro, ocupar):
        registro = cuna_service.crear_cuna(ocupar(registro, "H3C1"), "H3C1")
        assert cuna_service.actualizar_campo_cuna(registro, "H3C1", "clinicalCrib", {}) is registro

    def test_eliminar_cuna(self, registro, ocupar_con_cuna):
        registro = ocupar_con_cuna(registro, "H3C1")
        nuevo = cuna_service.eliminar_cuna(registro, "H3C1")
        assert nuevo.camas["H3C1"].cuna_clinica is None
        assert nuevo.camas["H3C1"].nombre == "María Tuki"


class TestCatalogo:
    """Tests del catálogo de camas y de la partición del censo."""

    def test_por_tipo(self):
        assert [c.id for c in CATALOGO_CAMAS.por_tipo(TipoCamaEnum.UTI)] == ["R1", "R2", "R3", "R4"]
        medias = CATALOGO_CAMAS.por_tipo(TipoCamaEnum.MEDIA)
        assert medias[0].id == "NEO1"
        assert medias[-1].id == "E5"
        assert len(medias) + 4 == len(CATALOGO_CAMAS)

    def test_particion_se_mantiene_tras_operaciones(self, registro, ocupar, ocupar_con_cuna):
        registro = ocupar(registro, "R1")
        registro = ocupar_con_cuna(registro, "H2C1")
        registro = cama_service.alternar_bloqueo_cama(registro, "H5C1", "Aislamiento")
        registro = cama_service.mover_o_copiar_paciente(registro, "move", "R1", "R2")
        registro = alta_service.agregar_alta(registro, "H2C1", "Vivo")
        registro = ocupar(registro, "H6C2")

        stats = calcular_estadisticas_registro(registro)
        libres = sum(1 for c in CATALOGO_CAMAS if registro.camas[c.id].esta_vacia)
        assert stats.camas_ocupadas == 2
        assert stats.camas_bloqueadas == 1
        assert stats.camas_ocupadas + stats.camas_bloqueadas + libres == len(CATALOGO_CAMAS)

    def test_deshacer_y_repetir_vuelve_al_mismo_estado(self, registro, ocupar):
        original = ocupar(registro, "H1C1", ubicacion="Sala 1")
        con_alta = alta_service.agregar_alta(original, "H1C1", "Vivo")

        deshecho = alta_service.deshacer_alta(con_alta, con_alta.altas[0].id).registro
        assert deshecho.camas == original.camas
        assert deshecho.altas == original.altas

        repetido = alta_service.agregar_alta(deshecho, "H1C1", "Vivo")
        assert repetido.camas == con_alta.camas
        assert [a.model_dump(exclude={"id"}) for a in repetido.altas] == [
            a.model_dump(exclude={"id"}) for a in con_alta.altas
        ]
