"""Constants for Gym Weights integration."""

from __future__ import annotations

from homeassistant.const import Platform

DOMAIN = "gym_weights"

PLATFORMS: list[Platform] = [
    Platform.SENSOR,
    Platform.NUMBER,
]

CONF_NAME = "name"

DEFAULT_NAME = "Gym Weights"

# Increment/decrement step for the +/- controls.
STEP_KG = 0.5
MAX_KG = 1000.0

STORAGE_VERSION = 1
STORAGE_KEY_PREFIX = f"{DOMAIN}_groups"
