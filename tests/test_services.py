from __future__ import annotations

from typing import Any

import pytest
import voluptuous as vol

from homeassistant.config_entries import ConfigEntryState
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.gym_weights.codec import encode
from custom_components.gym_weights.const import CONF_NAME, DOMAIN, MAX_KG, STORAGE_KEY_PREFIX
from custom_components.gym_weights.models import SEED_GROUPS, find_exercise
from custom_components.gym_weights.services import (
    _ADJUST_WEIGHT_SCHEMA,
    SERVICE_ADD_EXERCISE,
    SERVICE_ADJUST_WEIGHT,
    SERVICE_GET_GROUPS,
    SERVICE_REMOVE_EXERCISE,
)


async def _call(hass: HomeAssistant, service: str, **data: Any) -> dict[str, Any]:
    return await hass.services.async_call(DOMAIN, service, data, blocking=True, return_response=True)


@pytest.mark.parametrize(
    ("service", "data"),
    [
        (SERVICE_GET_GROUPS, {}),
        (SERVICE_ADD_EXERCISE, {"group_id": "chest", "name": "Fly"}),
        (SERVICE_ADJUST_WEIGHT, {"group_id": "chest", "exercise_id": "db_bench"}),
        (SERVICE_REMOVE_EXERCISE, {"group_id": "chest", "exercise_id": "db_bench"}),
    ],
)
async def test_unknown_entry(hass: HomeAssistant, setup_entry: MockConfigEntry, service, data) -> None:
    response = await _call(hass, service, entry_id="missing", **data)
    assert response == {"ok": False, "error": "entry_not_found"}


async def test_get_groups(hass: HomeAssistant, setup_entry: MockConfigEntry) -> None:
    response = await _call(hass, SERVICE_GET_GROUPS, entry_id=setup_entry.entry_id)
    assert response == {"ok": True, "entry_id": setup_entry.entry_id, "groups": encode(SEED_GROUPS)}


async def test_add_exercise(hass: HomeAssistant, setup_entry: MockConfigEntry) -> None:
    response = await _call(
        hass, SERVICE_ADD_EXERCISE, entry_id=setup_entry.entry_id, group_id="back", name=" Barbell Row ", kg="12,5"
    )

    assert response["ok"] is True
    assert response["entry_id"] == setup_entry.entry_id
    exercise = response["exercise"]
    assert exercise["name"] == "Barbell Row"
    assert exercise["kg"] == 12.5

    store = hass.data[DOMAIN][setup_entry.entry_id].store
    assert find_exercise(store.groups, "back", exercise["id"]).kg == 12.5


@pytest.mark.parametrize(("group_id", "name"), [("chest", "   "), ("forearms", "Wrist Curl")])
async def test_add_exercise_rejected(hass: HomeAssistant, setup_entry: MockConfigEntry, group_id, name) -> None:
    response = await _call(hass, SERVICE_ADD_EXERCISE, entry_id=setup_entry.entry_id, group_id=group_id, name=name)
    assert response == {"ok": False, "error": "rejected"}


async def test_adjust_weight(hass: HomeAssistant, setup_entry: MockConfigEntry) -> None:
    response = await _call(
        hass, SERVICE_ADJUST_WEIGHT, entry_id=setup_entry.entry_id, group_id="chest", exercise_id="db_bench"
    )
    assert response == {
        "ok": True,
        "entry_id": setup_entry.entry_id,
        "exercise": {"id": "db_bench", "name": "Dumbbell Bench Press", "kg": 11.5},
    }

    response = await _call(
        hass, SERVICE_ADJUST_WEIGHT, entry_id=setup_entry.entry_id, group_id="chest", exercise_id="db_bench", delta="-2"
    )
    assert response["exercise"]["kg"] == 9.5


async def test_adjust_weight_not_found(hass: HomeAssistant, setup_entry: MockConfigEntry) -> None:
    response = await _call(
        hass, SERVICE_ADJUST_WEIGHT, entry_id=setup_entry.entry_id, group_id="triceps", exercise_id="db_bench"
    )
    assert response == {"ok": False, "error": "not_found"}


@pytest.mark.parametrize("delta", ["nan", "inf", "-inf", 1e308, MAX_KG + 1])
async def test_adjust_weight_rejects_bad_delta(hass: HomeAssistant, setup_entry: MockConfigEntry, delta) -> None:
    with pytest.raises(vol.Invalid):
        await _call(
            hass,
            SERVICE_ADJUST_WEIGHT,
            entry_id=setup_entry.entry_id,
            group_id="chest",
            exercise_id="db_bench",
            delta=delta,
        )

    store = hass.data[DOMAIN][setup_entry.entry_id].store
    assert find_exercise(store.groups, "chest", "db_bench").kg == 11.0


@pytest.mark.parametrize("delta", ["nan", "inf", float("nan"), float("-inf"), 1e308])
def test_adjust_weight_schema_rejects_delta(delta) -> None:
    with pytest.raises(vol.Invalid):
        _ADJUST_WEIGHT_SCHEMA({"entry_id": "e", "group_id": "chest", "exercise_id": "db_bench", "delta": delta})


@pytest.mark.parametrize(("delta", "expected"), [("2.5", 2.5), (-MAX_KG, -MAX_KG), (1, 1.0)])
def test_adjust_weight_schema_accepts_delta(delta, expected) -> None:
    data = _ADJUST_WEIGHT_SCHEMA({"entry_id": "e", "group_id": "chest", "exercise_id": "db_bench", "delta": delta})
    assert data["delta"] == expected


async def test_remove_exercise(hass: HomeAssistant, setup_entry: MockConfigEntry) -> None:
    response = await _call(
        hass, SERVICE_REMOVE_EXERCISE, entry_id=setup_entry.entry_id, group_id="chest", exercise_id="pec_deck"
    )
    assert response == {
        "ok": True,
        "entry_id": setup_entry.entry_id,
        "removed": {"id": "pec_deck", "name": "Pec Deck (Machine Fly)", "kg": 20.0},
    }

    response = await _call(
        hass, SERVICE_REMOVE_EXERCISE, entry_id=setup_entry.entry_id, group_id="chest", exercise_id="pec_deck"
    )
    assert response == {"ok": False, "error": "not_found"}


async def test_mutations_are_persisted(
    hass: HomeAssistant, setup_entry: MockConfigEntry, hass_storage: dict[str, Any]
) -> None:
    await _call(hass, SERVICE_ADJUST_WEIGHT, entry_id=setup_entry.entry_id, group_id="chest", exercise_id="db_bench")
    store = hass.data[DOMAIN][setup_entry.entry_id].store
    await store.async_flush()

    stored = hass_storage[f"{STORAGE_KEY_PREFIX}_{setup_entry.entry_id}"]["data"]
    assert stored == encode(store.groups)
    assert stored[0]["exercises"][0]["kg"] == 11.5


async def test_oversized_stored_weight_starts_with_defaults(
    hass: HomeAssistant, enable_custom_integrations: None, hass_storage: dict[str, Any]
) -> None:
    entry = MockConfigEntry(domain=DOMAIN, title="Gym", data={CONF_NAME: "Gym"}, entry_id="oversized")
    key = f"{STORAGE_KEY_PREFIX}_{entry.entry_id}"
    hass_storage[key] = {
        "version": 1,
        "minor_version": 1,
        "key": key,
        "data": [{"id": "legs", "title": "Legs", "exercises": [{"id": "sq", "name": "Squat", "kg": 1e308}]}],
    }
    entry.add_to_hass(hass)

    assert await hass.config_entries.async_setup(entry.entry_id)
    await hass.async_block_till_done()
    assert entry.state is ConfigEntryState.LOADED

    response = await _call(hass, SERVICE_GET_GROUPS, entry_id=entry.entry_id)
    assert response["groups"] == encode(SEED_GROUPS)

    assert await hass.config_entries.async_unload(entry.entry_id)
    await hass.async_block_till_done()
    assert hass_storage[key]["data"] == encode(SEED_GROUPS)
