"""Integration version, read from manifest.json."""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path

_LOGGER = logging.getLogger(__name__)

MANIFEST_PATH = Path(__file__).with_name("manifest.json")


@lru_cache(maxsize=1)
def integration_version() -> str:
    try:
        data = json.loads(MANIFEST_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        _LOGGER.debug("Could not read %s", MANIFEST_PATH, exc_info=True)
        return "0.0.0"
    version = str(data.get("version") or "").strip() if isinstance(data, dict) else ""
    return version or "0.0.0"
