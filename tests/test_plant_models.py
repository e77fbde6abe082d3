"""
Tests del parseo de respuestas de Plant.id y del informe de respaldo.
"""
import pytest

from app.models.plant import (
    parse_identification,
    parse_health,
    health_status_for,
    IdentificationResult,
    HealthResult,
    NarrativeReport,
    REPORT_FIELDS,
)


class TestParseIdentification:
    def test_best_suggestion(self):
        result = parse_identification({
            "suggestions": [
                {"plant_name": "Rose", "plant_details": {"scientific_name": "Rosa"}},
                {"plant_name": "Tulip", "plant_details": {"scientific_name": "Tulipa"}},
            ]
        })
        assert result == IdentificationResult("Rose", "Rosa")

    def test_empty_suggestions(self):
        result = parse_identification({"suggestions": []})
        assert result.common_name == "Unknown"
        assert result.scientific_name == "Unknown"

    @pytest.mark.parametrize("payload", [
        {},
        None,
        "not json",
        {"suggestions": None},
        {"suggestions": [{"plant_name": None}]},
    ])
    def test_degrades_to_unknown(self, payload):
        assert parse_identification(payload) == IdentificationResult()

    def test_missing_scientific_name_only(self):
        result = parse_identification({"suggestions": [{"plant_name": "Basil"}]})
        assert result == IdentificationResult("Basil", "Unknown")


class TestParseHealth:
    def test_first_disease(self):
        result = parse_health({
            "health_assessment": {"diseases": [{"name": "Leaf spot"}, {"name": "Rust"}]}
        })
        assert result.disease_name == "Leaf spot"
        assert result.status == "Diseased"

    @pytest.mark.parametrize("payload", [
        {"health_assessment": {"diseases": []}},
        {"health_assessment": {}},
        {},
        None,
    ])
    def test_no_disease_is_healthy(self, payload):
        result = parse_health(payload)
        assert result.disease_name == "None"
        assert result.status == "Healthy"


def test_health_status_for():
    assert health_status_for("None") == "Healthy"
    assert health_status_for("Powdery mildew") == "Diseased"


def test_fallback_report():
    report = NarrativeReport.fallback(
        IdentificationResult("Rose", "Rosa"),
        HealthResult("Leaf spot"),
    ).to_dict()

    assert tuple(report) == REPORT_FIELDS
    assert report == {
        "plant_name": "Rose",
        "botanical_name": "Rosa",
        "uses": "Not available",
        "health_status": "Diseased",
        "disease_name": "Leaf spot",
        "solution": "Not available",
    }


def test_blank_disease_name_is_still_a_disease():
    result = parse_health({"health_assessment": {"diseases": [{"name": ""}]}})
    assert result.disease_name == ""
    assert result.status == "Diseased"


def test_null_disease_name_is_healthy():
    result = parse_health({"health_assessment": {"diseases": [{"name": None}]}})
    assert result == HealthResult("None")
