from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from ..errors import ConfigError
from ..models.config_models import AppConfig, CatalogConfig, CsvColumns, LabelSettings, PdfSettings

"""Config loader.

Responsibilities:
- Load YAML config (default: config/tags.yml)
- Validate against the bundled JSON schema (unknown keys rejected)
- Apply defaults for every missing key
- Apply environment overrides (TAGLABELS_CATALOG_URL), .env already loaded by the CLI
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "CATALOG_URL_ENV",
    "load_config",
]

# taglabels/config/loader.py -> taglabels/config -> taglabels
_package_root = Path(__file__).resolve().parent.parent
SCHEMA_PATH = _package_root / "data" / "config_schema.json"

DEFAULT_CONFIG_PATH = Path("config/tags.yml")
CATALOG_URL_ENV = "TAGLABELS_CATALOG_URL"


def _load_schema() -> dict[str, Any]:
    try:
        return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Check data against the bundled schema; unknown keys and wrong types fail.

    Raises:
        ConfigError: schema file unusable or data invalid. The message names
            the first offending key path, e.g. "label.raster_scale".
    """
    validator = jsonschema.Draft7Validator(_load_schema())
    error = jsonschema.exceptions.best_match(validator.iter_errors(data))
    if error is not None:
        where = ".".join(str(p) for p in error.absolute_path) or "<root>"
        raise ConfigError(f"config validation failed: {where}: {error.message}")


def _build_config(data: dict[str, Any]) -> AppConfig:
    catalog_raw = data.get("catalog", {})
    columns_raw = data.get("csv", {}).get("columns", {})
    label_raw = dict(data.get("label", {}))
    pdf_raw = data.get("pdf", {})

    # YAML list -> tuple (frozen dataclass)
    if "manufacturer_lines" in label_raw:
        label_raw["manufacturer_lines"] = tuple(label_raw["manufacturer_lines"])

    catalog = CatalogConfig(**catalog_raw)
    url_override = os.getenv(CATALOG_URL_ENV)
    if url_override:
        catalog = CatalogConfig(url=url_override, timeout_seconds=catalog.timeout_seconds)

    return AppConfig(
        catalog=catalog,
        columns=CsvColumns(**columns_raw),
        label=LabelSettings(**label_raw),
        pdf=PdfSettings(**pdf_raw),
    )


def load_config(path: Path | None = None) -> AppConfig:
    """Load the application config.

    An explicitly given path must exist. When path is None the default
    location is tried and built-in defaults are used if it is absent.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return _build_config({})
        path = DEFAULT_CONFIG_PATH
    elif not path.exists():
        raise ConfigError(f"config file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)
    return _build_config(data)
