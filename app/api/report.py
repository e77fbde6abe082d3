import logging
from pydantic import ValidationError

from app.core.errors import UpstreamMalformedError
from app.models.plant import NarrativeReport

logger = logging.getLogger(__name__)


def parse_narrative(content):
    """Valida el JSON de OpenAI contra NarrativeReport (seis campos de texto)."""
    if not content:
        raise UpstreamMalformedError("Empty narrative content")

    try:
        report = NarrativeReport.model_validate_json(content)
    except ValidationError as e:
        raise UpstreamMalformedError(
            f"Invalid narrative from OpenAI ({e.error_count()} errors)"
        ) from e

    return report.model_dump()


def merge_report(content, identification, health):
    try:
        return parse_narrative(content)
    except UpstreamMalformedError as e:
        logger.warning(f"⚠️ {e.message} -> usando informe de respaldo")
        return NarrativeReport.fallback(identification, health).to_dict()
