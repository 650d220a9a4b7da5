import json
import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConversionSettings:
    """Tunables of the layout reconstruction, in page units (1/72 inch) unless noted."""

    line_tolerance: float = 5.0
    tab_gap: float = 20.0
    space_gap: float = 5.0
    indent_scale: float = 10.0  # page units -> twips
    font_size_scale: float = 2.0  # points -> half-points
    image_timeout: float = 1.0  # seconds


DEFAULT_SETTINGS = ConversionSettings()


def _project_root() -> str:
    return os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))


def load_settings(path: Optional[str] = None) -> ConversionSettings:
    """Load conversion settings from config/conversion.json (or `path`).

    Missing or unreadable files fall back to the defaults with a warning.
    """
    settings_path = path or os.path.join(_project_root(), "config", "conversion.json")

    if not os.path.exists(settings_path):
        if path:
            logger.warning("Settings file not found at %s, using defaults", settings_path)
        return DEFAULT_SETTINGS

    try:
        with open(settings_path, "r", encoding="utf-8") as settings_file:
            raw = json.load(settings_file) or {}
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not load settings from %s: %s", settings_path, exc)
        return DEFAULT_SETTINGS

    if not isinstance(raw, dict):
        logger.warning("Settings file %s must contain a JSON object, using defaults", settings_path)
        return DEFAULT_SETTINGS

    known = {f.name for f in fields(ConversionSettings)}
    overrides = {}
    for key, value in raw.items():
        if key not in known:
            logger.warning("Ignoring unknown setting %r in %s", key, settings_path)
            continue
        try:
            overrides[key] = float(value)
        except (TypeError, ValueError):
            logger.warning("Setting %r must be a number, got %r", key, value)

    return replace(DEFAULT_SETTINGS, **overrides)
