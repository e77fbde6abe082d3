import logging
from flask import Flask
from flask_cors import CORS
from app.api.analyze import analyze_bp
from app.core.config import Settings

# Configura logging para ver las peticiones
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(message)s')

app = Flask(__name__)
CORS(app)

# Respuestas JSON legibles y en el orden del informe
app.json.compact = False
app.json.sort_keys = False

# Registrar blueprint
app.register_blueprint(analyze_bp)

@app.route('/')
def home():
    return {
        "service": "Plant Analysis API",
        "version": "v1",
        "description": "Identificación de plantas y salud con Plant.id, informe narrativo con OpenAI",
        "base_url": "http://localhost:8282/plant-api",
        "authentication": {
            "type": "none",
            "provider_keys": ["PLANT_ID_API_KEY", "OPENAI_API_KEY"]
        },
        "endpoints": [
            {
                "path": "/plant-api/analyze",
                "method": "POST",
                "auth_required": False,
                "description": "Analiza una foto de planta y devuelve un informe de seis campos",
                "body": {
                    "plantImage": "file (multipart/form-data)"
                },
                "response": {
                    "plant_name": "string",
                    "botanical_name": "string",
                    "uses": "string",
                    "health_status": "Healthy | Diseased",
                    "disease_name": "string",
                    "solution": "string"
                },
                "errors": {
                    "400": {"error": "No image uploaded."},
                    "500": {"error": "API keys not set. Please create a .env file with your API keys."},
                    "502": {"error": "No response from OpenAI."}
                },
                "external_api": [
                    "Plant.id v2 identify",
                    "Plant.id v2 health_assessment",
                    "OpenAI chat completions"
                ]
            },
            {
                "path": "/plant-api/health",
                "method": "GET",
                "auth_required": False,
                "description": "Healthcheck del módulo analyze",
                "response": {
                    "module": "analyze",
                    "status": "active",
                    "keys_configured": "boolean"
                }
            }
        ]
    }


if __name__ == "__main__":
    app.run(host='0.0.0.0', port=Settings.from_env().port, debug=True)
