import os
from dataclasses import dataclass
from dotenv import dotenv_values

from app.core.errors import ConfigurationError
from app.models.plant import Credentials

PROYECTO_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

PLANT_ID_KEY_NAME = 'PLANT_ID_API_KEY'
OPENAI_KEY_NAME = 'OPENAI_API_KEY'

MISSING_KEYS_MESSAGE = "API keys not set. Please create a .env file with your API keys."


def _as_bool(value):
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def _as_timeout(value):
    # Sin valor = sin timeout (comportamiento por defecto de requests)
    if value is None or str(value).strip() == "":
        return None
    return float(value)


@dataclass(frozen=True)
class Settings:
    env_file: str
    http_timeout: float = None
    openai_model: str = "gpt-4o-mini"
    openai_max_tokens: int = 900
    parallel_lookups: bool = False
    port: int = 8282

    @classmethod
    def from_env(cls, environ=None):
        env = os.environ if environ is None else environ
        env_file = env.get('ENV_FILE', os.path.join(PROYECTO_ROOT, '.env'))

        # El .env se lee sin tocar os.environ; el entorno del proceso manda
        file_values = {}
        if os.path.isfile(env_file):
            file_values = {k: v for k, v in dotenv_values(env_file).items() if v is not None}
        env = {**file_values, **env}

        return cls(
            env_file=env_file,
            http_timeout=_as_timeout(env.get('HTTP_TIMEOUT')),
            openai_model=env.get('OPENAI_MODEL', 'gpt-4o-mini'),
            openai_max_tokens=int(env.get('OPENAI_MAX_TOKENS', '900')),
            parallel_lookups=_as_bool(env.get('PARALLEL_LOOKUPS', 'false')),
            port=int(env.get('PORT', '8282')),
        )


def resolve_credentials(env_file=None, environ=None) -> Credentials:
    """
    Resuelve las dos API keys.
    Primero el fichero .env (si existe), después el entorno del proceso para
    las claves que el fichero no define. Lanza ConfigurationError si falta alguna.
    """
    env = os.environ if environ is None else environ

    file_values = {}
    if env_file and os.path.isfile(env_file):
        file_values = dotenv_values(env_file)

    def _lookup(name):
        return file_values.get(name) or env.get(name) or ''

    plant_id_key = _lookup(PLANT_ID_KEY_NAME).strip()
    openai_key = _lookup(OPENAI_KEY_NAME).strip()

    if not plant_id_key or not openai_key:
        raise ConfigurationError(MISSING_KEYS_MESSAGE)

    return Credentials(plant_id_key=plant_id_key, openai_key=openai_key)
