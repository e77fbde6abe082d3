import logging
import requests

from app.core.errors import UpstreamEmptyError
from app.models.plant import IdentificationResult, HealthResult

logger = logging.getLogger(__name__)

CHAT_ENDPOINT = "https://api.openai.com/v1/chat/completions"

NO_RESPONSE_MESSAGE = "No response from OpenAI."

SYSTEM_MESSAGE = "You are a helpful plant analysis assistant."

PROMPT_TEMPLATE = """
You are a botanist and plant expert.
Analyze the given plant information and return a structured report in JSON format with these exact fields:
plant_name, botanical_name, uses, health_status, disease_name, solution.

Information:
Plant Name: {plant_name}
Botanical Name: {botanical_name}
Health Status: {health_status}
Disease Name: {disease_name}

Write one detailed paragraph for each field's content.
"""


def build_prompt(identification: IdentificationResult, health: HealthResult) -> str:
    return PROMPT_TEMPLATE.format(
        plant_name=identification.common_name,
        botanical_name=identification.scientific_name,
        health_status=health.status,
        disease_name=health.disease_name,
    )


def build_payload(prompt, model="gpt-4o-mini", max_tokens=900):
    return {
        "model": model,
        "response_format": {"type": "json_object"},
        "messages": [
            {"role": "system", "content": SYSTEM_MESSAGE},
            {"role": "user", "content": prompt}
        ],
        "max_tokens": max_tokens
    }


def extract_content(chat_data):
    """choices[0].message.content o None si la respuesta no lo trae."""
    if not isinstance(chat_data, dict):
        return None
    choices = chat_data.get('choices')
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    message = choices[0].get('message') or {}
    if not isinstance(message, dict):
        return None
    content = message.get('content')
    return content if isinstance(content, str) and content else None


def request_narrative(identification, health, api_key, model="gpt-4o-mini", max_tokens=900, timeout=None):
    """
    Pide a OpenAI el informe narrativo.
    Sin cuerpo de respuesta -> UpstreamEmptyError (terminal).
    Cuerpo sin contenido utilizable -> None (lo resuelve el merger con el fallback).
    """
    headers = {
        "Content-Type": "application/json",
        "Authorization": f"Bearer {api_key}"
    }
    payload = build_payload(build_prompt(identification, health), model, max_tokens)

    logger.info(f"🤖 Pidiendo informe a OpenAI ({model})")
    try:
        resp = requests.post(CHAT_ENDPOINT, headers=headers, json=payload, timeout=timeout)
    except requests.RequestException as e:
        logger.warning(f"⚠️ Error comunicando con OpenAI: {e}")
        raise UpstreamEmptyError(NO_RESPONSE_MESSAGE) from e

    if not resp.content:
        logger.warning(f"⚠️ OpenAI respondió sin cuerpo (status {resp.status_code})")
        raise UpstreamEmptyError(NO_RESPONSE_MESSAGE)

    try:
        chat_data = resp.json()
    except ValueError:
        logger.warning(f"⚠️ Respuesta no-JSON de OpenAI (status {resp.status_code})")
        return None

    return extract_content(chat_data)
