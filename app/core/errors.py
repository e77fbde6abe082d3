# Errores del pipeline de análisis. Cada uno sabe cómo se muestra al cliente.


class PlantAnalysisError(Exception):
    """Error terminal: se devuelve al cliente como {"error": mensaje}."""

    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"error": self.message}


class ConfigurationError(PlantAnalysisError):
    """Faltan las API keys (Plant.id u OpenAI)."""

    status_code = 500


class InputError(PlantAnalysisError):
    """La petición no trae imagen."""

    status_code = 400


class UpstreamEmptyError(PlantAnalysisError):
    """OpenAI no devolvió nada."""

    status_code = 502


class UpstreamMalformedError(PlantAnalysisError):
    # Nunca llega al cliente: el merger lo captura y genera el fallback
    status_code = 502
