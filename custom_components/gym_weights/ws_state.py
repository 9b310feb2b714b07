"""Websocket state helpers."""

from __future__ import annotations

from typing import Any

from .codec import encode
from .const import STEP_KG
from .storage import GymWeightsStore


def public_state(store: GymWeightsStore, *, runtime: dict[str, Any] | None = None) -> dict[str, Any]:
    """Return a stable public payload for the UI."""
    if not store.is_ready:
        return {}
    return {
        "rev": store.rev,
        "step_kg": STEP_KG,
        "groups": encode(store.groups),
        "runtime": runtime or {},
    }
