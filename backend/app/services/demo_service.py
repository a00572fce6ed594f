"""
Generador de datos de demostración.

Genera registros diarios realistas (perfiles clínicos por especialidad,
neonatos en camas NEO, pacientes UPC en UTI, madres con cuna) y los
evoluciona día a día con altas, traslados e ingresos.

La fuente de azar es inyectable (random.Random) para tests
deterministas. Los registros generados solo deben guardarse en el
espacio DEMO.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Set
import random

from app.models.cudyr import PuntajeCudyr
from app.models.enums import (
    EspecialidadEnum,
    EstadoAltaEnum,
    EstadoPacienteEnum,
    ModoCamaEnum,
    TipoCamaEnum,
)
from app.models.paciente import Paciente, PacienteCuna
from app.models.registro import Alta, RegistroDiario, Traslado
from app.services.egreso_service import datos_evento_cuna, datos_evento_principal
from app.services.paciente_factory import cama_limpia, crear_paciente_vacio
from app.utils.constants import (
    CATALOGO_CAMAS,
    CENTRO_RECEPTOR_OTRO,
    CENTROS_RECEPTORES,
    DISPOSITIVOS,
    METODOS_EVACUACION,
    MOTIVOS_BLOQUEO,
)
from app.utils.fechas import dias_entre, fechas_del_mes, marca_tiempo_actual, sumar_dias
from app.utils.validators import formatear_rut

# ============================================
# PERFILES CLÍNICOS
# ============================================


@dataclass(frozen=True)
class PerfilClinico:
    diagnostico: str
    estado: EstadoPacienteEnum
    upc: bool
    estadia_promedio: int


PERFILES_CLINICOS: Dict[EspecialidadEnum, List[PerfilClinico]] = {
    EspecialidadEnum.MEDICINA: [
        PerfilClinico("Neumonía Adquirida en Comunidad", EstadoPacienteEnum.DE_CUIDADO, False, 7),
        PerfilClinico("Insuficiencia Cardíaca Descompensada", EstadoPacienteEnum.GRAVE, True, 10),
        PerfilClinico("EPOC Exacerbado", EstadoPacienteEnum.DE_CUIDADO, False, 6),
        PerfilClinico("Crisis Hipertensiva", EstadoPacienteEnum.DE_CUIDADO, False, 3),
        PerfilClinico("Sepsis Origen Urinario", EstadoPacienteEnum.GRAVE, True, 12),
        PerfilClinico("Descompensación Diabética", EstadoPacienteEnum.DE_CUIDADO, False, 4),
    ],
    EspecialidadEnum.CIRUGIA: [
        PerfilClinico("Apendicitis Aguda Operada", EstadoPacienteEnum.ESTABLE, False, 3),
        PerfilClinico("Colecistitis Aguda Operada", EstadoPacienteEnum.ESTABLE, False, 2),
        PerfilClinico("Abdomen Agudo en Estudio", EstadoPacienteEnum.DE_CUIDADO, False, 5),
        PerfilClinico("Fractura de Cadera Operada", EstadoPacienteEnum.ESTABLE, False, 8),
        PerfilClinico("Politraumatismo", EstadoPacienteEnum.GRAVE, True, 14),
    ],
    EspecialidadEnum.OBSTETRICIA: [
        PerfilClinico("Post Parto Vaginal", EstadoPacienteEnum.ESTABLE, False, 2),
        PerfilClinico("Post Cesárea", EstadoPacienteEnum.ESTABLE, False, 3),
        PerfilClinico("Preeclampsia Severa", EstadoPacienteEnum.GRAVE, True, 7),
        PerfilClinico("Embarazo Alto Riesgo", EstadoPacienteEnum.DE_CUIDADO, False, 10),
    ],
    EspecialidadEnum.PEDIATRIA: [
        PerfilClinico("Bronquiolitis", EstadoPacienteEnum.DE_CUIDADO, False, 4),
        PerfilClinico("Síndrome Diarreico Agudo", EstadoPacienteEnum.ESTABLE, False, 2),
        PerfilClinico("SDR Neonatal", EstadoPacienteEnum.GRAVE, True, 10),
        PerfilClinico("Neumonía Pediátrica", EstadoPacienteEnum.DE_CUIDADO, False, 5),
    ],
    EspecialidadEnum.TRAUMATOLOGIA: [
        PerfilClinico("Fractura de Fémur", EstadoPacienteEnum.ESTABLE, False, 6),
        PerfilClinico("Fractura de Tibia Operada", EstadoPacienteEnum.ESTABLE, False, 4),
        PerfilClinico("Trauma Craneoencefálico Severo", EstadoPacienteEnum.GRAVE, True, 15),
    ],
}

NOMBRES_DEMO = [
    "Juan Pérez", "María González", "Carlos Tapia", "Ana Tuki", "José Paoa",
    "Elena Huke", "Roberto Nahoe", "Carmen Pakarati", "Luis Tepano", "Sofía Hotu",
    "Pedro Pont", "Marta Tuki", "Lucas Atan", "Isabel Haoa", "Nicolás Pate",
    "Diego Rapu", "Valentina Hey", "Matías Araki", "Camila Teao", "Sebastián Make",
    "Francisca Riroroko", "Gabriel Hotus", "Antonia Veri", "Tomás Hereveri", "Javiera Pakomio",
]

ENFERMEROS_DEMO = ["Enfermero Demo 1", "Enfermero Demo 2"]

ESTADIA_PROMEDIO_DEFAULT = 5
PROBABILIDAD_BLOQUEO = 0.05
PROBABILIDAD_OCUPACION = 0.85

MEJORA_ESTADO = {
    EstadoPacienteEnum.GRAVE.value: EstadoPacienteEnum.DE_CUIDADO.value,
    EstadoPacienteEnum.DE_CUIDADO.value: EstadoPacienteEnum.ESTABLE.value,
}


class GeneradorDemo:
    """
    Generador con estado propio (nombres ya usados y fuente de azar).

    Uso:
        generador = GeneradorDemo(random.Random(42))
        registros = generador.generar_semana("2025-01-01")
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self._nombres_usados: Set[str] = set()

    # ============================================
    # HELPERS
    # ============================================

    def _nombre_unico(self) -> str:
        for _ in range(50):
            nombre = self.rng.choice(NOMBRES_DEMO)
            if nombre not in self._nombres_usados:
                self._nombres_usados.add(nombre)
                return nombre
        return f"{self.rng.choice(NOMBRES_DEMO)} {self.rng.randint(1, 99)}"

    def _rut(self) -> str:
        return formatear_rut(str(self.rng.randint(5_000_000, 24_999_999)))

    def _cudyr(self, es_upc: bool, tiene_dispositivos: bool) -> PuntajeCudyr:
        def item() -> int:
            return self.rng.randint(0, 3)

        return PuntajeCudyr(
            cambio_ropa=item(),
            movilizacion=item(),
            alimentacion=item(),
            eliminacion=item(),
            psicosocial=item(),
            vigilancia=item(),
            signos_vitales=item(),
            balance_hidrico=item(),
            oxigenoterapia=self.rng.randint(2, 3) if es_upc else item(),
            via_aerea=self.rng.randint(2, 3) if es_upc else item(),
            intervenciones_profesionales=item(),
            cuidado_piel=item(),
            farmacologia=item(),
            elementos_invasivos=self.rng.randint(1, 2) if tiene_dispositivos else item(),
        )

    # ============================================
    # PACIENTES
    # ============================================

    def nuevo_paciente(self, cama_id: str, fecha_ingreso: str) -> Paciente:
        """
        Genera un paciente según el tipo de cama.

        UTI: paciente UPC grave. NEO: neonato en cuna. Resto: mezcla de
        especialidades, con algunas pacientes obstétricas con cuna.
        """
        definicion = CATALOGO_CAMAS.obtener(cama_id)
        rng = self.rng
        datos = {
            "nombre": self._nombre_unico(),
            "rut": self._rut(),
            "tipo_documento": "RUT",
            "sexo_biologico": rng.choice(["Masculino", "Femenino"]),
            "prevision": rng.choice(["Fonasa", "Isapre"]),
            "fecha_ingreso": fecha_ingreso,
            "origen_ingreso": rng.choice(["Urgencias", "CAE", "APS"]),
            "condicion_permanencia": rng.choice(["Residente", "Turista Nacional"]),
            "tiene_brazalete": True,
            "es_rapanui": rng.random() > 0.5,
            "dispositivos": [],
        }
        cuna: Optional[PacienteCuna] = None

        if definicion in CATALOGO_CAMAS.por_tipo(TipoCamaEnum.UTI):
            especialidad = rng.choice([EspecialidadEnum.MEDICINA, EspecialidadEnum.CIRUGIA])
            graves = [p for p in PERFILES_CLINICOS[especialidad] if p.upc]
            perfil = rng.choice(graves)
            datos.update({
                "especialidad": especialidad.value,
                "diagnostico": perfil.diagnostico,
                "estado": EstadoPacienteEnum.GRAVE.value,
                "es_upc": True,
                "edad": f"{rng.randint(20, 79)}a",
                "dispositivos": [rng.choice(["VVP", "CVC", "CUP", "VMI"])],
            })
        elif cama_id.startswith("NEO"):
            perfil = rng.choice(PERFILES_CLINICOS[EspecialidadEnum.PEDIATRIA])
            datos.update({
                "modo_cama": ModoCamaEnum.CUNA.value,
                "especialidad": EspecialidadEnum.PEDIATRIA.value,
                "diagnostico": perfil.diagnostico,
                "estado": perfil.estado.value,
                "es_upc": perfil.upc,
                "edad": f"{rng.randint(0, 19)}d",
            })
        elif datos["sexo_biologico"] == "Femenino" and rng.random() > 0.7:
            perfil = rng.choice(PERFILES_CLINICOS[EspecialidadEnum.OBSTETRICIA])
            datos.update({
                "especialidad": EspecialidadEnum.OBSTETRICIA.value,
                "diagnostico": perfil.diagnostico,
                "estado": perfil.estado.value,
                "es_upc": perfil.upc,
                "edad": f"{rng.randint(18, 37)}a",
            })
            if rng.random() > 0.6 and "Parto" in perfil.diagnostico:
                datos["tiene_cuna_acompanante"] = True
            elif rng.random() > 0.7:
                cuna = PacienteCuna(
                    cama_id=cama_id,
                    modo_cama=ModoCamaEnum.CUNA,
                    nombre=f"RN de {datos['nombre']}",
                    edad="2d",
                    especialidad=EspecialidadEnum.PEDIATRIA,
                    diagnostico="SDR Recién Nacido",
                    estado=EstadoPacienteEnum.DE_CUIDADO,
                    sexo_biologico=rng.choice(["Masculino", "Femenino"]),
                    fecha_ingreso=fecha_ingreso,
                )
        else:
            especialidad = rng.choice([
                EspecialidadEnum.MEDICINA,
                EspecialidadEnum.CIRUGIA,
                EspecialidadEnum.TRAUMATOLOGIA,
            ])
            perfil = rng.choice(PERFILES_CLINICOS[especialidad])
            datos.update({
                "especialidad": especialidad.value,
                "diagnostico": perfil.diagnostico,
                "estado": perfil.estado.value,
                "es_upc": perfil.upc,
                "edad": f"{rng.randint(10, 79)}a",
            })

        if not datos.get("es_upc") and rng.random() > 0.7:
            datos["dispositivos"] = [rng.choice(DISPOSITIVOS)]

        datos["cudyr"] = self._cudyr(bool(datos.get("es_upc")), bool(datos["dispositivos"]))

        base = crear_paciente_vacio(cama_id).model_dump()
        base.update(datos)
        base["cuna_clinica"] = cuna.model_dump() if cuna is not None else None
        return Paciente.model_validate(base)

    # ============================================
    # REGISTROS
    # ============================================

    def generar_registro(self, fecha: str) -> RegistroDiario:
        """
        Registro inicial: 5% de camas regulares bloqueadas, 85% ocupadas,
        camas extra vacías.
        """
        camas = {}
        for definicion in CATALOGO_CAMAS:
            paciente = crear_paciente_vacio(definicion.id)
            if not definicion.es_extra:
                azar = self.rng.random()
                if azar < PROBABILIDAD_BLOQUEO:
                    paciente = paciente.model_copy(update={
                        "bloqueada": True,
                        "motivo_bloqueo": self.rng.choice(MOTIVOS_BLOQUEO),
                    })
                elif azar < PROBABILIDAD_BLOQUEO + PROBABILIDAD_OCUPACION:
                    paciente = self.nuevo_paciente(definicion.id, fecha)
            camas[definicion.id] = paciente

        return RegistroDiario(
            fecha=fecha,
            camas=camas,
            ultima_actualizacion=marca_tiempo_actual(),
            enfermeras=list(ENFERMEROS_DEMO),
            camas_extra_activas=[],
        )

    def _estadia_promedio(self, paciente: Paciente) -> int:
        try:
            especialidad = EspecialidadEnum(paciente.especialidad or EspecialidadEnum.MEDICINA.value)
        except ValueError:
            return ESTADIA_PROMEDIO_DEFAULT
        for perfil in PERFILES_CLINICOS.get(especialidad, []):
            if perfil.diagnostico == paciente.diagnostico:
                return perfil.estadia_promedio
        return ESTADIA_PROMEDIO_DEFAULT

    def evolucionar(self, anterior: RegistroDiario, fecha: str) -> RegistroDiario:
        """
        Registro del día siguiente con continuidad de pacientes.

        La probabilidad de alta crece con los días de estadía (tope 30%);
        los pacientes UPC tienen mayor probabilidad de traslado. Luego
        ingresan 2-4 pacientes en camas regulares libres.
        """
        camas: Dict[str, Paciente] = {}
        altas: List[Alta] = []
        traslados: List[Traslado] = []

        for cama_id, paciente in anterior.camas.items():
            nuevo = paciente.model_copy(deep=True)

            if paciente.esta_ocupada and not paciente.bloqueada:
                dias = max(0, dias_entre(paciente.fecha_ingreso or anterior.fecha, fecha))
                prob_alta = min(0.3, dias / self._estadia_promedio(paciente) * 0.15)
                prob_traslado = 0.1 if paciente.es_upc else 0.02
                azar = self.rng.random()

                if azar < prob_alta:
                    estado = EstadoAltaEnum.VIVO if self.rng.random() > 0.02 else EstadoAltaEnum.FALLECIDO
                    datos_cuna = datos_evento_cuna(cama_id, paciente)
                    principal = datos_evento_principal(cama_id, paciente, incluir_cuna=datos_cuna is None)
                    altas.append(Alta(**principal, estado=estado))
                    if datos_cuna is not None:
                        altas.append(Alta(**datos_cuna, estado=EstadoAltaEnum.VIVO))
                    nuevo = cama_limpia(cama_id, paciente.ubicacion)
                elif azar < prob_alta + prob_traslado:
                    centros = [c for c in CENTROS_RECEPTORES if c != CENTRO_RECEPTOR_OTRO]
                    traslados.append(Traslado(
                        **datos_evento_principal(cama_id, paciente),
                        metodo_evacuacion=self.rng.choice(METODOS_EVACUACION),
                        centro_receptor=self.rng.choice(centros),
                        centro_receptor_otro="",
                    ))
                    nuevo = cama_limpia(cama_id, paciente.ubicacion)
                elif self.rng.random() < 0.1 and paciente.estado in MEJORA_ESTADO:
                    nuevo = nuevo.model_copy(update={"estado": MEJORA_ESTADO[paciente.estado]})

            camas[cama_id] = nuevo

        libres = [
            d.id for d in CATALOGO_CAMAS.regulares()
            if d.id in camas and camas[d.id].esta_vacia
        ]
        ingresos = min(len(libres), self.rng.randint(2, 4))
        for cama_id in libres[:ingresos]:
            camas[cama_id] = self.nuevo_paciente(cama_id, fecha)

        return RegistroDiario(
            fecha=fecha,
            camas=camas,
            altas=altas,
            traslados=traslados,
            ultima_actualizacion=marca_tiempo_actual(),
            enfermeras=list(anterior.enfermeras),
            camas_extra_activas=list(anterior.camas_extra_activas),
        )

    def generar_periodo(self, fechas: List[str]) -> List[RegistroDiario]:
        """Primer día generado, los siguientes evolucionados del anterior."""
        self._nombres_usados.clear()
        registros: List[RegistroDiario] = []
        for fecha in fechas:
            if not registros:
                registros.append(self.generar_registro(fecha))
            else:
                registros.append(self.evolucionar(registros[-1], fecha))
        return registros


# ============================================
# API FUNCIONAL
# ============================================

def generar_registro_demo(fecha: str, rng: Optional[random.Random] = None) -> RegistroDiario:
    return GeneradorDemo(rng).generar_registro(fecha)


def evolucionar_registro(
    anterior: RegistroDiario,
    fecha: str,
    rng: Optional[random.Random] = None,
) -> RegistroDiario:
    return GeneradorDemo(rng).evolucionar(anterior, fecha)


def generar_demo_dia(fecha: str, rng: Optional[random.Random] = None) -> List[RegistroDiario]:
    return GeneradorDemo(rng).generar_periodo([fecha])


def generar_demo_semana(fecha_inicio: str, rng: Optional[random.Random] = None) -> List[RegistroDiario]:
    """7 registros consecutivos desde fecha_inicio."""
    fechas = [sumar_dias(fecha_inicio, i) for i in range(7)]
    return GeneradorDemo(rng).generar_periodo(fechas)


def generar_demo_mes(anio: int, mes: int, rng: Optional[random.Random] = None) -> List[RegistroDiario]:
    """
    Un registro por cada día del mes.

    Args:
        anio: Año (ej: 2025)
        mes: Mes 1-12
    """
    return GeneradorDemo(rng).generar_periodo(fechas_del_mes(anio, mes))
