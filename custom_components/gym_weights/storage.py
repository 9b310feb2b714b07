"""Storage for Gym Weights (.storage).

State model (schema v1): a list of muscle groups, each with an ordered list of
exercises ({id, name, kg}). The in-memory collection is authoritative; every
effective mutation schedules a background write of the full snapshot.

Writes are best-effort: failures are logged and swallowed, never retried.
Each write carries the revision of its snapshot and is skipped if a newer
snapshot was scheduled meanwhile, so an old snapshot never lands last.
"""

from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import replace
from typing import Any, Callable

from homeassistant.core import HomeAssistant
from homeassistant.helpers.storage import Store

from .codec import DecodeError, decode, encode
from .const import STEP_KG, STORAGE_KEY_PREFIX, STORAGE_VERSION
from .models import (
    SEED_GROUPS,
    Collection,
    Exercise,
    MuscleGroup,
    clamp_kg,
    find_exercise,
    find_group,
    make_exercise_id,
    parse_kg,
)

_LOGGER = logging.getLogger(__name__)

GroupsListener = Callable[[Collection], None]


class StoreNotReadyError(RuntimeError):
    """Raised when the store is used before async_load() completed."""


class GymWeightsStore:
    """Owns the muscle group collection for one config entry."""

    def __init__(self, backend: Store[list[dict[str, Any]]]) -> None:
        self._backend = backend
        self._groups: Collection | None = None
        self._rev = 0
        self._saved_rev: int | None = None
        self._write_lock = asyncio.Lock()
        self._pending: set[asyncio.Task[None]] = set()
        self._listeners: list[GroupsListener] = []

    @classmethod
    def for_entry(cls, hass: HomeAssistant, entry_id: str) -> GymWeightsStore:
        return cls(Store(hass, STORAGE_VERSION, f"{STORAGE_KEY_PREFIX}_{entry_id}"))

    @property
    def is_ready(self) -> bool:
        return self._groups is not None

    @property
    def groups(self) -> Collection:
        if self._groups is None:
            raise StoreNotReadyError("Groups have not been loaded yet")
        return self._groups

    @property
    def rev(self) -> int:
        return self._rev

    @property
    def saved_rev(self) -> int | None:
        return self._saved_rev

    @property
    def pending_writes(self) -> int:
        return len(self._pending)

    async def async_load(self) -> Collection:
        if self._groups is not None:
            return self._groups

        try:
            raw = await self._backend.async_load()
        except Exception:  # noqa: BLE001
            _LOGGER.warning("Could not read stored groups, using defaults", exc_info=True)
            raw = None

        groups: Collection | None = None
        if raw is not None:
            try:
                groups = decode(raw)
            except DecodeError as err:
                _LOGGER.warning("Stored groups are invalid (%s), using defaults", err)

        if groups is None:
            _LOGGER.debug("Seeding default muscle groups")
            self._groups = SEED_GROUPS
            # Persist the seed so the next start reads it back.
            self._schedule_save()
        else:
            _LOGGER.debug("Loaded %d muscle groups from storage", len(groups))
            self._groups = groups
        return self._groups

    def async_add_listener(self, listener: GroupsListener) -> Callable[[], None]:
        """Call ``listener`` with each new collection; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _remove

    def add_exercise(self, group_id: str, raw_name: Any, raw_kg: Any = "") -> Exercise | None:
        groups = self.groups
        name = str(raw_name or "").strip()
        if not name:
            return None
        group = find_group(groups, group_id)
        if group is None:
            return None

        exercise = Exercise(
            id=make_exercise_id(e.id for e in group.exercises),
            name=name,
            kg=parse_kg(raw_kg),
        )
        self._commit_group(groups, replace(group, exercises=(*group.exercises, exercise)))
        return exercise

    def adjust_weight(self, group_id: str, exercise_id: str, delta: Any = STEP_KG) -> Exercise | None:
        groups = self.groups
        if isinstance(delta, bool) or not isinstance(delta, (int, float)):
            return None
        try:
            delta = float(delta)
        except OverflowError:
            return None
        if not math.isfinite(delta):
            return None
        group = find_group(groups, group_id)
        exercise = find_exercise(groups, group_id, exercise_id)
        if group is None or exercise is None:
            return None

        kg = clamp_kg(exercise.kg + delta)
        if kg == exercise.kg:
            return exercise
        updated = replace(exercise, kg=kg)
        exercises = tuple(updated if e.id == exercise_id else e for e in group.exercises)
        self._commit_group(groups, replace(group, exercises=exercises))
        return updated

    def remove_exercise(self, group_id: str, exercise_id: str) -> Exercise | None:
        groups = self.groups
        group = find_group(groups, group_id)
        exercise = find_exercise(groups, group_id, exercise_id)
        if group is None or exercise is None:
            return None

        exercises = tuple(e for e in group.exercises if e.id != exercise_id)
        self._commit_group(groups, replace(group, exercises=exercises))
        return exercise

    def _commit_group(self, groups: Collection, group: MuscleGroup) -> None:
        self._groups = tuple(group if g.id == group.id else g for g in groups)
        self._rev += 1
        self._schedule_save()
        for listener in list(self._listeners):
            listener(self._groups)

    def _schedule_save(self) -> None:
        rev = self._rev
        payload = encode(self.groups)
        task = asyncio.get_running_loop().create_task(self._async_write(rev, payload))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _async_write(self, rev: int, payload: list[dict[str, Any]]) -> None:
        async with self._write_lock:
            if rev < self._rev:
                _LOGGER.debug("Skipping superseded write (rev=%s, current=%s)", rev, self._rev)
                return
            try:
                await self._backend.async_save(payload)
            except Exception:  # noqa: BLE001
                _LOGGER.warning("Failed to persist groups (rev=%s)", rev, exc_info=True)
                return
            self._saved_rev = rev

    async def async_flush(self) -> None:
        """Wait for all scheduled writes to finish."""
        while self._pending:
            await asyncio.gather(*self._pending)

    async def async_remove(self) -> None:
        """Drop the stored collection (config entry removed)."""
        await self.async_flush()
        await self._backend.async_remove()
