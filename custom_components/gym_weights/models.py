"""Data model for Gym Weights.

A collection is an ordered tuple of muscle groups, each holding an ordered
tuple of exercises. All values are frozen: updates build new tuples and reuse
untouched groups/exercises as-is.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Iterable
from uuid import uuid4

from homeassistant.util import dt as dt_util

from .const import MAX_KG

_DECIMAL_PREFIX = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True, slots=True)
class Exercise:
    """A single exercise with its working weight in kg."""

    id: str
    name: str
    kg: float


@dataclass(frozen=True, slots=True)
class MuscleGroup:
    """A muscle group and its exercises in display order."""

    id: str
    title: str
    exercises: tuple[Exercise, ...] = ()


Collection = tuple[MuscleGroup, ...]


SEED_GROUPS: Collection = (
    MuscleGroup(
        id="chest",
        title="Chest",
        exercises=(
            Exercise(id="db_bench", name="Dumbbell Bench Press", kg=11.0),
            Exercise(id="pec_deck", name="Pec Deck (Machine Fly)", kg=20.0),
        ),
    ),
    MuscleGroup(
        id="triceps",
        title="Triceps",
        exercises=(
            Exercise(id="pushdown", name="Triceps Pushdown (Machine/Cable)", kg=15.0),
            Exercise(id="db_ext", name="Standing Dumbbell Triceps Extension (Two-Arm)", kg=12.5),
        ),
    ),
    MuscleGroup(id="back", title="Back"),
    MuscleGroup(id="legs", title="Legs"),
    MuscleGroup(id="shoulders", title="Shoulders"),
    MuscleGroup(id="biceps", title="Biceps"),
    MuscleGroup(id="core", title="Core"),
)


def clamp_kg(value: Any) -> float:
    """Clamp to 0..MAX_KG and round half-up to one decimal."""
    if isinstance(value, bool):
        return 0.0
    try:
        v = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if not math.isfinite(v):
        return 0.0
    v = min(max(0.0, v), MAX_KG)
    return math.floor(v * 10 + 0.5) / 10


def parse_kg(raw: Any) -> float:
    """Parse user input into a weight; accepts "12.5", "12,5", numbers and blanks."""
    if raw is None:
        return 0.0
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return clamp_kg(raw)
    text = str(raw).strip().replace(",", ".", 1)
    match = _DECIMAL_PREFIX.match(text)
    if match is None:
        return 0.0
    return clamp_kg(match.group(0))


def make_exercise_id(existing: Iterable[str] = ()) -> str:
    """Timestamp plus random suffix, never colliding with ``existing``."""
    taken = set(existing)
    while True:
        millis = int(dt_util.utcnow().timestamp() * 1000)
        candidate = f"{millis}_{uuid4().hex[:12]}"
        if candidate not in taken:
            return candidate


def find_group(groups: Collection, group_id: str) -> MuscleGroup | None:
    return next((g for g in groups if g.id == group_id), None)


def find_exercise(groups: Collection, group_id: str, exercise_id: str) -> Exercise | None:
    group = find_group(groups, group_id)
    if group is None:
        return None
    return next((e for e in group.exercises if e.id == exercise_id), None)
