"""Number platform for Gym Weights.

One number entity per exercise; the +/- controls step by STEP_KG.
"""

from __future__ import annotations

import logging

from homeassistant.components.number import NumberEntity, NumberMode
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import UnitOfMass
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers import entity_registry as er
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .const import DOMAIN, MAX_KG, STEP_KG
from .coordinator import GymWeightsCoordinator
from .entity import GymWeightsEntity
from .models import Exercise, find_exercise

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(
    hass: HomeAssistant,
    entry: ConfigEntry,
    async_add_entities: AddEntitiesCallback,
) -> None:
    coordinator: GymWeightsCoordinator = hass.data[DOMAIN][entry.entry_id]
    known: set[tuple[str, str]] = set()

    @callback
    def _add_new_exercises() -> None:
        new: list[ExerciseWeightNumber] = []
        for group in coordinator.data or ():
            for exercise in group.exercises:
                key = (group.id, exercise.id)
                if key in known:
                    continue
                known.add(key)
                new.append(ExerciseWeightNumber(coordinator, group.id, exercise.id))
        if new:
            async_add_entities(new)

    _add_new_exercises()
    entry.async_on_unload(coordinator.async_add_listener(_add_new_exercises))


class ExerciseWeightNumber(GymWeightsEntity, NumberEntity):
    """Working weight of one exercise."""

    _attr_icon = "mdi:weight-kilogram"
    _attr_native_min_value = 0.0
    _attr_native_max_value = MAX_KG
    _attr_native_step = STEP_KG
    _attr_native_unit_of_measurement = UnitOfMass.KILOGRAMS
    _attr_mode = NumberMode.BOX

    def __init__(self, coordinator: GymWeightsCoordinator, group_id: str, exercise_id: str) -> None:
        super().__init__(coordinator, group_id=group_id, unique_suffix=f"{group_id}_{exercise_id}")
        self._exercise_id = exercise_id
        exercise = self.exercise
        self._attr_name = exercise.name if exercise is not None else exercise_id

    @property
    def exercise(self) -> Exercise | None:
        return find_exercise(self.coordinator.data or (), self._group_id, self._exercise_id)

    @property
    def available(self) -> bool:
        return super().available and self.exercise is not None

    @property
    def native_value(self) -> float | None:
        exercise = self.exercise
        return exercise.kg if exercise is not None else None

    @property
    def extra_state_attributes(self) -> dict[str, str]:
        return {"group_id": self._group_id, "exercise_id": self._exercise_id}

    async def async_set_native_value(self, value: float) -> None:
        exercise = self.exercise
        if exercise is None:
            return
        self.coordinator.store.adjust_weight(self._group_id, self._exercise_id, float(value) - exercise.kg)

    @callback
    def _handle_coordinator_update(self) -> None:
        if self.exercise is None:
            _LOGGER.debug("Exercise %s removed, dropping %s", self._exercise_id, self.entity_id)
            registry = er.async_get(self.hass)
            if self.registry_entry is not None:
                registry.async_remove(self.entity_id)
            else:
                self.hass.async_create_task(self.async_remove(force_remove=True))
            return
        super()._handle_coordinator_update()
