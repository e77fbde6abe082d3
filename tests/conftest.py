import io
import json

import pytest
import requests

from app.api.narrative import CHAT_ENDPOINT
from app.api.plantid import IDENTIFY_ENDPOINT, HEALTH_ENDPOINT


class FakeResponse:
    def __init__(self, body=None, status_code=200, raw=None):
        if raw is not None:
            self.content = raw
        elif body is None:
            self.content = b""
        else:
            self.content = json.dumps(body).encode("utf-8")
        self.status_code = status_code
        self.text = self.content.decode("utf-8", errors="replace")

    def json(self):
        return json.loads(self.content)


class FakePlantServices:
    """Sustituye requests.post: responde por URL y guarda cada llamada."""

    def __init__(self):
        self.calls = []
        self.responses = {
            IDENTIFY_ENDPOINT: FakeResponse({
                "suggestions": [
                    {"plant_name": "Rose", "plant_details": {"scientific_name": "Rosa"}}
                ]
            }),
            HEALTH_ENDPOINT: FakeResponse({
                "health_assessment": {"diseases": [{"name": "Leaf spot"}]}
            }),
            CHAT_ENDPOINT: chat_response(json.dumps({
                "plant_name": "Rose",
                "botanical_name": "Rosa",
                "uses": "Ornamental gardens and perfume.",
                "health_status": "Diseased",
                "disease_name": "Leaf spot",
                "solution": "Remove affected leaves and apply fungicide."
            })),
        }

    def __call__(self, url, headers=None, json=None, timeout=None, **kwargs):
        self.calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        response = self.responses[url]
        if isinstance(response, Exception):
            raise response
        return response

    def urls(self):
        return [c["url"] for c in self.calls]


def chat_response(content):
    return FakeResponse({"choices": [{"message": {"role": "assistant", "content": content}}]})


@pytest.fixture
def services(monkeypatch):
    fake = FakePlantServices()
    monkeypatch.setattr(requests, "post", fake)
    return fake


@pytest.fixture
def keys_env(monkeypatch, tmp_path):
    """Entorno limpio con las dos keys y sin fichero .env."""
    monkeypatch.setenv("ENV_FILE", str(tmp_path / "missing.env"))
    monkeypatch.setenv("PLANT_ID_API_KEY", "plant-key")
    monkeypatch.setenv("OPENAI_API_KEY", "openai-key")
    monkeypatch.delenv("PARALLEL_LOOKUPS", raising=False)
    monkeypatch.delenv("HTTP_TIMEOUT", raising=False)
    return monkeypatch


@pytest.fixture
def client():
    from app.main import app
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def image_upload(data=b"\x89PNG fake image bytes", filename="leaf.jpg"):
    return {"plantImage": (io.BytesIO(data), filename)}
