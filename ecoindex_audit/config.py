"""Configuration for ecoindex-audit"""

import os
from pathlib import Path
from typing import Dict, Any, List, Optional

import yaml
import jsonschema

from ecoindex_audit.exceptions import ConfigurationError

# Base paths
PACKAGE_DIR = Path(__file__).parent
TEMPLATES_DIR = PACKAGE_DIR / "templates"
TRANSLATIONS_DIR = PACKAGE_DIR / "translations"

DEFAULT_CONFIG_FILE = "ecoindex-audit.yml"


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


def is_verbose() -> bool:
    return _env_flag("ECOINDEX_VERBOSE")

# ===========================================
# Thresholds
# ===========================================
# value >= pass -> pass, fail <= value < pass -> warning, value < fail -> error

DEFAULT_PASS = 90
DEFAULT_FAIL = 30

DEFAULT_LANG = "en-GB"
DEFAULT_VISITS = 2000

OUTPUT_FORMATS = ["table", "csv", "json", "sonar", "html"]

# ===========================================
# GreenIT page metrics
# ===========================================
# Below "good" the metric passes, above "bad" it is an error.

METRIC_LIMITS = {
    "number_requests": {"good": 40, "bad": 80, "unit": "requests"},
    "page_size": {"good": 1000, "bad": 2000, "unit": "KB"},
    "Page_complexity": {"good": 600, "bad": 1500, "unit": "nodes"},
}

# ===========================================
# Environmental projections
# ===========================================
# gCO2e emitted by an average thermal car per km driven
CAR_GCO2E_PER_KM = 120.0
# Litres of water used by one shower
SHOWER_LITRES = 60.0

# ===========================================
# Lighthouse
# ===========================================

LIGHTHOUSE_COMMAND = os.getenv("ECOINDEX_LIGHTHOUSE_BIN", "lighthouse")
LIGHTHOUSE_TIMEOUT = int(os.getenv("ECOINDEX_LIGHTHOUSE_TIMEOUT", 300))
LIGHTHOUSE_CATEGORIES = {
    "performance": "performance",
    "accessibility": "accessibility",
    "best-practices": "best_practices",
}

# ===========================================
# Configuration file
# ===========================================

CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "urls": {"type": "array", "items": {"type": "string"}},
        "output": {
            "type": "array",
            "items": {
                "oneOf": [
                    {"type": "string"},
                    {
                        "type": "object",
                        "properties": {
                            "callback": {"type": "string", "pattern": "^[\\w.]+:[\\w]+$"},
                            "webhook": {"type": "string"},
                        },
                        "minProperties": 1,
                        "maxProperties": 1,
                        "additionalProperties": False,
                    },
                ]
            },
        },
        "pass": {"type": "number", "minimum": 0, "maximum": 100},
        "fail": {"type": "number", "minimum": 0, "maximum": 100},
        "ecoIndex": {"type": "number", "minimum": 0, "maximum": 100},
        "visits": {"type": "integer", "minimum": 1},
        "lang": {"type": "string"},
        "sonarFilePath": {"type": "string"},
        "outputPathDir": {"type": "string"},
        "minify": {"type": "boolean"},
        "lighthouseReports": {"type": "array", "items": {"type": "string"}},
        "metrics": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "properties": {
                    "good": {"type": "number"},
                    "bad": {"type": "number"},
                },
                "required": ["good", "bad"],
            },
        },
    },
    "additionalProperties": False,
}


def load_config_file(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load and validate a YAML configuration file.

    When no path is given, ``ecoindex-audit.yml`` in the working directory is
    used if it exists; otherwise an empty configuration is returned.
    """
    if path is None:
        path = Path.cwd() / DEFAULT_CONFIG_FILE
        if not path.exists():
            return {}
    path = Path(path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    try:
        jsonschema.validate(instance=data, schema=CONFIG_SCHEMA)
    except jsonschema.ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise ConfigurationError(f"Invalid configuration {path} at {location}: {e.message}") from e

    return data


def get_metric_limits(overrides: Optional[Dict[str, Dict[str, float]]] = None) -> Dict[str, Dict[str, Any]]:
    """Merge user metric limits over the defaults"""
    limits = {name: dict(values) for name, values in METRIC_LIMITS.items()}
    for name, values in (overrides or {}).items():
        if name not in limits:
            raise ConfigurationError(
                f"Unknown metric '{name}', expected one of {', '.join(METRIC_LIMITS)}"
            )
        limits[name].update(values)
    return limits


def default_outputs() -> List[str]:
    outputs = ["table"]
    if _env_flag("ECOINDEX_DISPLAY_HTML"):
        outputs.append("html")
    return outputs
