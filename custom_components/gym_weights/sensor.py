"""Sensor platform for Gym Weights."""

from __future__ import annotations

from typing import Any

from homeassistant.components.sensor import SensorEntity
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .codec import encode_group
from .const import DOMAIN
from .coordinator import GymWeightsCoordinator
from .entity import GymWeightsEntity


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    coordinator: GymWeightsCoordinator = hass.data[DOMAIN][entry.entry_id]
    # Groups are fixed for the lifetime of an entry; only their exercises change.
    async_add_entities([MuscleGroupSensor(coordinator, group.id, group.title) for group in coordinator.data or ()])


class MuscleGroupSensor(GymWeightsEntity, SensorEntity):
    """Exercise count of a muscle group, with the exercises as attributes."""

    _attr_icon = "mdi:arm-flex"
    _attr_native_unit_of_measurement = "exercises"

    def __init__(self, coordinator: GymWeightsCoordinator, group_id: str, title: str) -> None:
        super().__init__(coordinator, group_id=group_id, unique_suffix=f"group_{group_id}")
        self._attr_name = title

    @property
    def available(self) -> bool:
        return super().available and self.group is not None

    @property
    def native_value(self) -> int | None:
        group = self.group
        return len(group.exercises) if group is not None else None

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        group = self.group
        if group is None:
            return {"group_id": self._group_id}
        return {
            "group_id": group.id,
            "title": group.title,
            "exercises": encode_group(group)["exercises"],
        }
