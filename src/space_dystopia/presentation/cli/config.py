"""CLI configuration helpers for options persistence."""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)

_DEFAULT_TEXT_MODE = "typewriter"
_DEFAULT_TYPEWRITER_DELAY_MS = 30
_MAX_TYPEWRITER_DELAY_MS = 1000
_DEFAULT_DEFEAT_ENDS_ENCOUNTER = True
_DEFAULT_MONOTONE_OBJECTIVES = False

SEED_ENV_VAR = "SPACE_DYSTOPIA_SEED"


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "SpaceDystopia"
        return Path.home() / "SpaceDystopia"
    return Path.home() / ".config" / "space_dystopia"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def default_config() -> Dict[str, object]:
    return {
        "text_display_mode": _DEFAULT_TEXT_MODE,
        "typewriter_delay_ms": _DEFAULT_TYPEWRITER_DELAY_MS,
        "defeat_ends_encounter": _DEFAULT_DEFEAT_ENDS_ENCOUNTER,
        "monotone_objectives": _DEFAULT_MONOTONE_OBJECTIVES,
    }


def _normalize_text_mode(value: object) -> str:
    return "instant" if value == "instant" else _DEFAULT_TEXT_MODE


def _normalize_delay(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        return _DEFAULT_TYPEWRITER_DELAY_MS
    return max(0, min(value, _MAX_TYPEWRITER_DELAY_MS))


def _normalize_bool(value: object, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def normalize_config(raw: Dict[str, object]) -> Dict[str, object]:
    return {
        "text_display_mode": _normalize_text_mode(raw.get("text_display_mode")),
        "typewriter_delay_ms": _normalize_delay(raw.get("typewriter_delay_ms")),
        "defeat_ends_encounter": _normalize_bool(
            raw.get("defeat_ends_encounter"), _DEFAULT_DEFEAT_ENDS_ENCOUNTER
        ),
        "monotone_objectives": _normalize_bool(raw.get("monotone_objectives"), _DEFAULT_MONOTONE_OBJECTIVES),
    }


def load_config(path: Path | None = None) -> Dict[str, object]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return default_config()
    except (OSError, ValueError) as exc:
        logger.warning("Ignoring unreadable config at %s: %s", config_path, exc)
        return default_config()
    if not isinstance(raw, dict):
        logger.warning("Ignoring config at %s: expected a JSON object.", config_path)
        return default_config()
    return normalize_config(raw)


def save_config(config: Dict[str, object], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = normalize_config(config)
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")


def seed_from_env() -> int | None:
    """Return the fixed seed from the environment, if a valid one is set."""
    raw = os.getenv(SEED_ENV_VAR)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw.strip())
    except ValueError:
        logger.warning("Ignoring non-integer %s=%r.", SEED_ENV_VAR, raw)
        return None


def ensure_config(path: Path | None = None) -> Dict[str, object]:
    """Load config, writing the defaults first when no file exists yet."""
    config_path = path or get_default_config_path()
    if not config_path.exists():
        try:
            save_config(default_config(), config_path)
        except OSError as exc:
            logger.warning("Could not write default config to %s: %s", config_path, exc)
    return load_config(config_path)
