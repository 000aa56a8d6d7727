"""
Pytest fixtures and configuration for screener engine tests.
Provides common screener definitions and file helpers.
"""

import json

import pytest
import yaml

from screener_engine.schemas.screener import ScreenerDefinition


@pytest.fixture
def yes_no_definition():
    """One required yes_no question and a single do_not_use rule."""
    return ScreenerDefinition.model_validate({
        "title": "Pregnancy screener",
        "questions": [
            {"id": "q1", "type": "yes_no", "text": "Are you pregnant?", "required": True},
        ],
        "logic": {
            "rules": [
                {"condition": "q1 == 'yes'", "outcome": "do_not_use"},
            ],
            "defaultOutcome": "ok_to_use",
        },
    })


@pytest.fixture
def ldl_definition():
    """Numeric LDL question bounded to 0..300."""
    return ScreenerDefinition.model_validate({
        "title": "LDL screener",
        "questions": [
            {
                "id": "ldl",
                "type": "numeric",
                "text": "What is your most recent LDL cholesterol (mg/dL)?",
                "validation": {"min": 0, "max": 300},
            },
        ],
        "logic": {
            "rules": [
                {"condition": "ldl > 130", "outcome": "ask_a_doctor"},
            ],
            "defaultOutcome": "ok_to_use",
        },
    })


@pytest.fixture
def statin_screener_json():
    """Raw screenerJson for a statin screener with every question type."""
    return {
        "title": "Statin OTC screener",
        "description": "Self-selection screener for an over-the-counter statin",
        "questions": [
            {"id": "pregnant", "type": "yes_no", "text": "Are you pregnant or breastfeeding?"},
            {
                "id": "age",
                "type": "numeric",
                "text": "How old are you?",
                "validation": {"min": 18, "max": 120},
            },
            {
                "id": "ldl",
                "type": "numeric",
                "text": "What is your most recent LDL cholesterol (mg/dL)?",
                "validation": {"min": 0, "max": 400},
            },
            {
                "id": "liver",
                "type": "multiple_choice",
                "text": "Have you ever been diagnosed with liver disease?",
                "options": ["never", "past", "current"],
            },
            {
                "id": "zip",
                "type": "text",
                "text": "ZIP code",
                "required": False,
                "validation": {"regex": "^\\d{5}$"},
            },
        ],
        "logic": {
            "rules": [
                {
                    "condition": "pregnant == 'yes'",
                    "outcome": "do_not_use",
                    "message": "Statins must not be used during pregnancy.",
                },
                {
                    "condition": "liver == 'current'",
                    "outcome": "do_not_use",
                    "message": "Active liver disease is a contraindication.",
                },
                {
                    "condition": "ldl >= 190 || age >= 75",
                    "outcome": "ask_a_doctor",
                    "message": "Your doctor should manage this treatment.",
                },
                {
                    "condition": "ldl >= 130 && liver != 'past'",
                    "outcome": "ok_to_use",
                },
            ],
            "defaultOutcome": "ask_a_doctor",
        },
        "disclaimers": ["This screener does not replace medical advice."],
    }


@pytest.fixture
def statin_definition(statin_screener_json):
    return ScreenerDefinition.model_validate(statin_screener_json)


@pytest.fixture
def complete_statin_answers():
    """Answers that pass validation and match the ok_to_use rule."""
    return {"pregnant": "no", "age": 52, "ldl": 160, "liver": "never"}


@pytest.fixture
def write_json(tmp_path):
    """Write a document to a JSON file under tmp_path and return its path."""
    def _write(name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def write_yaml(tmp_path):
    """Write a document to a YAML file under tmp_path and return its path."""
    def _write(name, data):
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data), encoding="utf-8")
        return path
    return _write
