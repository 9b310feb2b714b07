"""Encode/decode the muscle group collection for storage.

Persisted payload (a list, never a mapping):

    [{"id": "chest", "title": "Chest",
      "exercises": [{"id": "db_bench", "name": "Dumbbell Bench Press", "kg": 11.0}]}]

Decoding fails closed: any shape mismatch raises DecodeError and callers fall
back to the seed collection.
"""

from __future__ import annotations

import math
from typing import Any

from homeassistant.helpers.json import json_dumps
from homeassistant.util.json import json_loads

from .const import MAX_KG
from .models import Collection, Exercise, MuscleGroup, clamp_kg


class DecodeError(ValueError):
    """Raised when a stored payload cannot be turned into a collection."""


def encode_exercise(exercise: Exercise) -> dict[str, Any]:
    return {"id": exercise.id, "name": exercise.name, "kg": float(exercise.kg)}


def encode_group(group: MuscleGroup) -> dict[str, Any]:
    return {
        "id": group.id,
        "title": group.title,
        "exercises": [encode_exercise(e) for e in group.exercises],
    }


def encode(groups: Collection) -> list[dict[str, Any]]:
    return [encode_group(g) for g in groups]


def dumps(groups: Collection) -> str:
    return json_dumps(encode(groups))


def _require_str(obj: dict[str, Any], key: str, where: str, *, allow_blank: bool = False) -> str:
    value = obj.get(key)
    if not isinstance(value, str):
        raise DecodeError(f"{where}: '{key}' must be a string")
    if not allow_blank and not value.strip():
        raise DecodeError(f"{where}: '{key}' must not be empty")
    return value


def _decode_exercise(raw: Any, where: str) -> Exercise:
    if not isinstance(raw, dict):
        raise DecodeError(f"{where}: expected an object")
    ex_id = _require_str(raw, "id", where)
    name = _require_str(raw, "name", where).strip()
    kg = raw.get("kg")
    if isinstance(kg, bool) or not isinstance(kg, (int, float)):
        raise DecodeError(f"{where}: 'kg' must be a number")
    if kg < 0 or kg > MAX_KG or not math.isfinite(kg):
        raise DecodeError(f"{where}: 'kg' out of range ({kg!r})")
    return Exercise(id=ex_id, name=name, kg=clamp_kg(kg))


def _decode_group(raw: Any, where: str) -> MuscleGroup:
    if not isinstance(raw, dict):
        raise DecodeError(f"{where}: expected an object")
    group_id = _require_str(raw, "id", where)
    title = _require_str(raw, "title", where, allow_blank=True)
    exercises_raw = raw.get("exercises")
    if not isinstance(exercises_raw, list):
        raise DecodeError(f"{where}: 'exercises' must be a list")

    exercises: list[Exercise] = []
    seen: set[str] = set()
    for idx, item in enumerate(exercises_raw):
        ex = _decode_exercise(item, f"{where}.exercises[{idx}]")
        if ex.id in seen:
            raise DecodeError(f"{where}: duplicate exercise id {ex.id!r}")
        seen.add(ex.id)
        exercises.append(ex)
    return MuscleGroup(id=group_id, title=title, exercises=tuple(exercises))


def decode(raw: Any) -> Collection:
    """Decode stored text/bytes or an already-parsed payload."""
    if isinstance(raw, (bytes, bytearray, memoryview, str)):
        try:
            raw = json_loads(raw)
        except ValueError as err:
            raise DecodeError(f"Invalid JSON: {err}") from err

    if not isinstance(raw, list):
        raise DecodeError(f"Expected a list of groups, got {type(raw).__name__}")

    groups: list[MuscleGroup] = []
    seen: set[str] = set()
    for idx, item in enumerate(raw):
        group = _decode_group(item, f"groups[{idx}]")
        if group.id in seen:
            raise DecodeError(f"Duplicate group id {group.id!r}")
        seen.add(group.id)
        groups.append(group)
    return tuple(groups)
