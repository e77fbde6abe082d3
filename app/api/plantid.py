import logging
import requests

from app.models.plant import parse_identification, parse_health, IdentificationResult, HealthResult

logger = logging.getLogger(__name__)

IDENTIFY_ENDPOINT = "https://api.plant.id/v2/identify"
HEALTH_ENDPOINT = "https://api.plant.id/v2/health_assessment"

PLANT_DETAILS = ['common_names', 'scientific_name', 'url', 'wiki_description']


def _headers(api_key):
    return {
        "Content-Type": "application/json",
        "Api-Key": api_key
    }


def _post_plant_id(endpoint, api_key, data, timeout=None):
    """
    POST a Plant.id. Cualquier fallo de transporte o cuerpo no-JSON
    se trata como "sin datos" ({}), nunca como excepción.
    """
    try:
        resp = requests.post(endpoint, headers=_headers(api_key), json=data, timeout=timeout)
    except requests.RequestException as e:
        logger.warning(f"⚠️ Error comunicando con Plant.id ({endpoint}): {e}")
        return {}

    try:
        return resp.json()
    except ValueError:
        logger.warning(f"⚠️ Respuesta no-JSON de Plant.id ({endpoint}), status {resp.status_code}")
        return {}


def identify(image_b64, api_key, timeout=None) -> IdentificationResult:
    logger.info("🌱 Identificando planta en Plant.id")
    data = {
        "images": [image_b64],
        "plant_details": PLANT_DETAILS
    }
    result = parse_identification(_post_plant_id(IDENTIFY_ENDPOINT, api_key, data, timeout))
    logger.info(f"🌱 Identificación: {result.common_name} ({result.scientific_name})")
    return result


def assess_health(image_b64, api_key, timeout=None) -> HealthResult:
    logger.info("🩺 Evaluando salud en Plant.id")
    data = {"images": [image_b64]}
    result = parse_health(_post_plant_id(HEALTH_ENDPOINT, api_key, data, timeout))
    logger.info(f"🩺 Salud: {result.status} (enfermedad: {result.disease_name})")
    return result
