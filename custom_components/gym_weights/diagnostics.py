"""Diagnostics support for Gym Weights.

This file is picked up by Home Assistant automatically when present.
"""

from __future__ import annotations

from typing import Any

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant

from .codec import encode
from .const import DOMAIN
from .version import integration_version


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant,
    entry: ConfigEntry,
) -> dict[str, Any]:
    """Return diagnostics for a config entry."""
    coordinator = hass.data.get(DOMAIN, {}).get(entry.entry_id)

    payload: dict[str, Any] = {
        "entry": {
            "entry_id": entry.entry_id,
            "title": entry.title,
            "version": entry.version,
            "data": dict(entry.data),
            "options": dict(entry.options),
        },
        "integration_version": integration_version(),
    }

    if coordinator is not None:
        store = coordinator.store
        payload["coordinator"] = {
            "last_update_success": bool(getattr(coordinator, "last_update_success", False)),
            "last_exception": repr(getattr(coordinator, "last_exception", None)),
        }
        payload["store"] = {
            "ready": store.is_ready,
            "rev": store.rev,
            "saved_rev": store.saved_rev,
            "pending_writes": store.pending_writes,
        }
        if store.is_ready:
            groups = store.groups
            payload["store"]["group_count"] = len(groups)
            payload["store"]["exercise_count"] = sum(len(g.exercises) for g in groups)
            payload["store"]["groups"] = encode(groups)

    return payload
