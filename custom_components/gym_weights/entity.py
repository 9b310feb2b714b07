"""Entity helpers for Gym Weights."""

from __future__ import annotations

from homeassistant.config_entries import ConfigEntry
from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.update_coordinator import CoordinatorEntity

from .const import CONF_NAME, DEFAULT_NAME, DOMAIN
from .coordinator import GymWeightsCoordinator
from .models import MuscleGroup, find_group


def device_info_from_entry(entry: ConfigEntry) -> DeviceInfo:
    name = entry.options.get(CONF_NAME, entry.data.get(CONF_NAME, DEFAULT_NAME))
    return DeviceInfo(
        identifiers={(DOMAIN, entry.entry_id)},
        name=str(name),
        manufacturer="Open source",
        model="Gym Weights",
    )


class GymWeightsEntity(CoordinatorEntity[GymWeightsCoordinator]):
    """Base entity bound to one muscle group of a config entry."""

    _attr_has_entity_name = True

    def __init__(self, coordinator: GymWeightsCoordinator, *, group_id: str, unique_suffix: str) -> None:
        super().__init__(coordinator)
        entry = coordinator.entry
        self._group_id = group_id
        self._attr_unique_id = f"{entry.entry_id}_{unique_suffix}"
        self._attr_device_info = device_info_from_entry(entry)

    @property
    def group(self) -> MuscleGroup | None:
        return find_group(self.coordinator.data or (), self._group_id)
