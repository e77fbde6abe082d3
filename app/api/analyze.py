import base64
import logging
from concurrent.futures import ThreadPoolExecutor
from flask import request, jsonify, Blueprint
from werkzeug.exceptions import HTTPException

from app.api import plantid, narrative
from app.api.report import merge_report
from app.core.config import Settings, resolve_credentials
from app.core.errors import PlantAnalysisError, ConfigurationError, InputError

logger = logging.getLogger(__name__)

# --- CONFIGURACIÓN DEL BLUEPRINT ---
analyze_bp = Blueprint('analyze', __name__, url_prefix='/plant-api')

IMAGE_FIELD = 'plantImage'
NO_IMAGE_MESSAGE = "No image uploaded."


def encode_image(image_bytes):
    return base64.b64encode(image_bytes).decode("utf-8")


def _lookup(image_b64, credentials, settings):
    """Identificación + salud. En paralelo solo si PARALLEL_LOOKUPS está activo."""
    key = credentials.plant_id_key
    timeout = settings.http_timeout

    if not settings.parallel_lookups:
        identification = plantid.identify(image_b64, key, timeout)
        health = plantid.assess_health(image_b64, key, timeout)
        return identification, health

    with ThreadPoolExecutor(max_workers=2) as pool:
        identification = pool.submit(plantid.identify, image_b64, key, timeout)
        health = pool.submit(plantid.assess_health, image_b64, key, timeout)
        return identification.result(), health.result()


def analyze_image(image_bytes, credentials, settings):
    """Pipeline completo: imagen -> Plant.id -> OpenAI -> informe de seis campos."""
    image_b64 = encode_image(image_bytes)

    identification, health = _lookup(image_b64, credentials, settings)

    content = narrative.request_narrative(
        identification,
        health,
        credentials.openai_key,
        model=settings.openai_model,
        max_tokens=settings.openai_max_tokens,
        timeout=settings.http_timeout,
    )

    return merge_report(content, identification, health)


def _read_upload():
    file = request.files.get(IMAGE_FIELD)
    if file is None or file.filename == '':
        raise InputError(NO_IMAGE_MESSAGE)
    return file.read()


# --- RUTAS ---

@analyze_bp.errorhandler(PlantAnalysisError)
def handle_analysis_error(error):
    logger.warning(f"❌ {type(error).__name__}: {error.message}")
    return jsonify(error.to_dict()), error.status_code


@analyze_bp.errorhandler(Exception)
def handle_unexpected_error(error):
    # Errores HTTP de Flask/werkzeug (413, 405...) conservan su código
    if isinstance(error, HTTPException):
        return jsonify({"error": error.description}), error.code

    logger.exception(f"❌ Error inesperado en /analyze: {error}")
    return jsonify({"error": f"Server error: {type(error).__name__}"}), 500


@analyze_bp.route('/analyze', methods=['POST'])
def analyze_plant():
    settings = Settings.from_env()

    # 1. Credenciales (antes de cualquier llamada externa)
    credentials = resolve_credentials(settings.env_file)

    # 2. Imagen
    image_bytes = _read_upload()

    # 3. Pipeline
    report = analyze_image(image_bytes, credentials, settings)
    return jsonify(report), 200


@analyze_bp.route('/health', methods=['GET'])
def health():
    settings = Settings.from_env()
    try:
        resolve_credentials(settings.env_file)
        keys_configured = True
    except ConfigurationError:
        keys_configured = False

    return jsonify({
        "module": "analyze",
        "status": "active",
        "keys_configured": keys_configured
    }), 200
