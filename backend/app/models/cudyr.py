"""
Modelo de categorización CUDYR.

Instrumento de 14 ítems: 6 de dependencia y 8 de riesgo.
Los puntajes derivados se calculan en app/services/cudyr_service.py.
"""
from pydantic import BaseModel, ConfigDict, Field


# Ítems de dependencia (nombre de atributo)
ITEMS_DEPENDENCIA = (
    "cambio_ropa",
    "movilizacion",
    "alimentacion",
    "eliminacion",
    "psicosocial",
    "vigilancia",
)

# Ítems de riesgo (nombre de atributo)
ITEMS_RIESGO = (
    "signos_vitales",
    "balance_hidrico",
    "oxigenoterapia",
    "via_aerea",
    "intervenciones_profesionales",
    "cuidado_piel",
    "farmacologia",
    "elementos_invasivos",
)


class PuntajeCudyr(BaseModel):
    """
    Puntajes individuales CUDYR.

    El modelo tolera valores 0-4 porque existen respaldos con ese rango;
    la API solo acepta 0-3 (ver app/schemas/registro.py).
    """
    model_config = ConfigDict(populate_by_name=True)

    # Dependencia
    cambio_ropa: int = Field(default=0, ge=0, le=4, alias="changeClothes")
    movilizacion: int = Field(default=0, ge=0, le=4, alias="mobilization")
    alimentacion: int = Field(default=0, ge=0, le=4, alias="feeding")
    eliminacion: int = Field(default=0, ge=0, le=4, alias="elimination")
    psicosocial: int = Field(default=0, ge=0, le=4, alias="psychosocial")
    vigilancia: int = Field(default=0, ge=0, le=4, alias="surveillance")

    # Riesgo
    signos_vitales: int = Field(default=0, ge=0, le=4, alias="vitalSigns")
    balance_hidrico: int = Field(default=0, ge=0, le=4, alias="fluidBalance")
    oxigenoterapia: int = Field(default=0, ge=0, le=4, alias="oxygenTherapy")
    via_aerea: int = Field(default=0, ge=0, le=4, alias="airway")
    intervenciones_profesionales: int = Field(default=0, ge=0, le=4, alias="proInterventions")
    cuidado_piel: int = Field(default=0, ge=0, le=4, alias="skinCare")
    farmacologia: int = Field(default=0, ge=0, le=4, alias="pharmacology")
    elementos_invasivos: int = Field(default=0, ge=0, le=4, alias="invasiveElements")
