"""
Utility module for loading screener definitions and answer sets from disk.

Definitions are accepted either as a bare ``screenerJson`` document or as a
persisted screener-version row that wraps it under ``screenerJson``. Both
JSON and YAML files are supported.
"""

import json
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from screener_engine.schemas.screener import ScreenerDefinition

YAML_SUFFIXES = {".yaml", ".yml"}


class DefinitionLoadError(Exception):
    """Raised when a definition or answer file cannot be loaded or is invalid."""
    pass


def _read_document(file_path: str | Path) -> Any:
    path = Path(file_path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                return yaml.safe_load(f)
            return json.load(f)
    except FileNotFoundError:
        raise DefinitionLoadError(f"File not found: {file_path}")
    except UnicodeDecodeError as e:
        raise DefinitionLoadError(f"Cannot decode {file_path} as UTF-8: {e}")
    except json.JSONDecodeError as e:
        raise DefinitionLoadError(f"Invalid JSON in {file_path}: {e}")
    except yaml.YAMLError as e:
        raise DefinitionLoadError(f"Invalid YAML in {file_path}: {e}")
    except OSError as e:
        raise DefinitionLoadError(f"Cannot read {file_path}: {e}")


def load_definition(file_path: str | Path) -> ScreenerDefinition:
    """
    Load and validate a screener definition file.

    Args:
        file_path: Path to a .json, .yaml or .yml file

    Returns:
        Validated ScreenerDefinition

    Raises:
        DefinitionLoadError: If the file cannot be read or fails validation

    Expected structure:
        {
            "title": str,
            "questions": [...],
            "logic": {"rules": [...], "defaultOutcome": str}
        }
        or {"screenerJson": {...}}
    """
    document = _read_document(file_path)

    if not isinstance(document, dict):
        raise DefinitionLoadError("Definition must be a JSON/YAML object")

    if "screenerJson" in document:
        document = document["screenerJson"]
        if not isinstance(document, dict):
            raise DefinitionLoadError("'screenerJson' must be an object")

    try:
        return ScreenerDefinition.model_validate(document)
    except ValidationError as e:
        raise DefinitionLoadError(f"Invalid screener definition in {file_path}: {e}")


def load_answers(file_path: str | Path) -> Dict[str, Any]:
    """
    Load an answer set (question id -> answer) from a JSON or YAML file.

    Raises:
        DefinitionLoadError: If the file cannot be read or is not an object
    """
    document = _read_document(file_path)

    if document is None:
        return {}

    if not isinstance(document, dict):
        raise DefinitionLoadError("Answers must be a JSON/YAML object")

    # Session payloads wrap answers as {"answers": {...}}
    if list(document) == ["answers"] and isinstance(document["answers"], dict):
        document = document["answers"]

    return {str(key): value for key, value in document.items()}
