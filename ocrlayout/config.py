import json
import logging
import os
from typing import Any, Dict, Iterable, Optional

logger = logging.getLogger(__name__)

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
DEFAULT_CONFIG_PATH = os.path.join(PROJECT_ROOT, "config", "layout.json")


def _resolve_path(base: str, relative: str) -> str:
    return os.path.abspath(os.path.join(base, relative))


def load_layout_config(path: Optional[str] = None, known_keys: Optional[Iterable[str]] = None) -> Dict[str, Any]:
    """Load reconstruction tuning defaults from config/layout.json.

    A relative `path` is resolved against the project root. A missing or
    unreadable file yields an empty dict so built-in defaults apply.
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not os.path.isabs(cfg_path) and not os.path.exists(cfg_path):
        cfg_path = _resolve_path(PROJECT_ROOT, cfg_path)

    if not os.path.exists(cfg_path):
        logger.warning("Layout config not found at %s; using built-in defaults", cfg_path)
        return {}

    try:
        with open(cfg_path, "r", encoding="utf-8") as cfg_file:
            data = json.load(cfg_file) or {}
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not load layout config from %s: %s", cfg_path, exc)
        return {}

    if not isinstance(data, dict):
        logger.warning("Layout config at %s must be a JSON object; ignoring it", cfg_path)
        return {}

    if known_keys is not None:
        unknown = sorted(set(data) - set(known_keys))
        if unknown:
            logger.warning("Ignoring unknown layout config keys: %s", ", ".join(unknown))
    return data
