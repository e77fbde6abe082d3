from dataclasses import dataclass
from pydantic import BaseModel, ConfigDict

UNKNOWN = "Unknown"
NO_DISEASE = "None"
NOT_AVAILABLE = "Not available"

HEALTHY = "Healthy"
DISEASED = "Diseased"

# Claves exactas del informe final, en este orden
REPORT_FIELDS = (
    "plant_name",
    "botanical_name",
    "uses",
    "health_status",
    "disease_name",
    "solution",
)


@dataclass(frozen=True)
class Credentials:
    plant_id_key: str
    openai_key: str

    def __repr__(self):
        # No mostrar secretos en logs
        return "Credentials(plant_id_key=***, openai_key=***)"


@dataclass(frozen=True)
class IdentificationResult:
    common_name: str = UNKNOWN
    scientific_name: str = UNKNOWN


@dataclass(frozen=True)
class HealthResult:
    disease_name: str = NO_DISEASE

    @property
    def status(self):
        return health_status_for(self.disease_name)


class NarrativeReport(BaseModel):
    """Informe final: seis campos de texto, ni más ni menos."""

    # Solo texto (sin coerción de números/bool); claves extra se descartan
    model_config = ConfigDict(strict=True, extra="ignore")

    plant_name: str
    botanical_name: str
    uses: str
    health_status: str
    disease_name: str
    solution: str

    @classmethod
    def fallback(cls, identification: IdentificationResult, health: HealthResult):
        """Informe mínimo con lo que ya sabemos de Plant.id (sin campos de IA)."""
        return cls(
            plant_name=identification.common_name,
            botanical_name=identification.scientific_name,
            uses=NOT_AVAILABLE,
            health_status=health.status,
            disease_name=health.disease_name,
            solution=NOT_AVAILABLE,
        )

    def to_dict(self):
        return self.model_dump()


def health_status_for(disease_name: str) -> str:
    return HEALTHY if disease_name == NO_DISEASE else DISEASED


def _text_or(value, default):
    """Coerción opcional -> valor por defecto (None, vacío o no-string)."""
    if isinstance(value, str) and value.strip():
        return value
    return default


def _first(items):
    if isinstance(items, list) and items and isinstance(items[0], dict):
        return items[0]
    return {}


def parse_identification(api_response) -> IdentificationResult:
    """Parsea la respuesta de /v2/identify y se queda con la mejor sugerencia."""
    if not isinstance(api_response, dict):
        return IdentificationResult()

    best = _first(api_response.get('suggestions'))
    details = best.get('plant_details') or {}
    if not isinstance(details, dict):
        details = {}

    return IdentificationResult(
        common_name=_text_or(best.get('plant_name'), UNKNOWN),
        scientific_name=_text_or(details.get('scientific_name'), UNKNOWN),
    )


def parse_health(api_response) -> HealthResult:
    """Parsea /v2/health_assessment: primera enfermedad o 'None'."""
    if not isinstance(api_response, dict):
        return HealthResult()

    assessment = api_response.get('health_assessment') or {}
    if not isinstance(assessment, dict):
        return HealthResult()

    # Solo un nombre ausente o null es "None"; un nombre vacío sigue siendo enfermedad
    name = _first(assessment.get('diseases')).get('name')
    return HealthResult(disease_name=name if isinstance(name, str) else NO_DISEASE)
