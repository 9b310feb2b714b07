"""Services for Gym Weights."""

from __future__ import annotations

import voluptuous as vol

from homeassistant.core import HomeAssistant, ServiceCall, ServiceResponse, SupportsResponse

from .codec import encode, encode_exercise
from .const import DOMAIN, MAX_KG, STEP_KG

SERVICE_GET_GROUPS = "get_groups"
SERVICE_ADD_EXERCISE = "add_exercise"
SERVICE_ADJUST_WEIGHT = "adjust_weight"
SERVICE_REMOVE_EXERCISE = "remove_exercise"

# Rejects "nan"/"inf" as well as out-of-range steps.
DELTA_KG = vol.All(vol.Coerce(float), vol.Range(min=-MAX_KG, max=MAX_KG))

_ENTRY_SCHEMA = vol.Schema({vol.Required("entry_id"): str})
_ADD_EXERCISE_SCHEMA = vol.Schema(
    {
        vol.Required("entry_id"): str,
        vol.Required("group_id"): str,
        vol.Required("name"): str,
        # Free text on purpose: "12,5" is accepted like the UI input field.
        vol.Optional("kg", default=""): vol.Any(str, vol.Coerce(float)),
    }
)
_ADJUST_WEIGHT_SCHEMA = vol.Schema(
    {
        vol.Required("entry_id"): str,
        vol.Required("group_id"): str,
        vol.Required("exercise_id"): str,
        vol.Optional("delta", default=STEP_KG): DELTA_KG,
    }
)
_EXERCISE_SCHEMA = vol.Schema(
    {
        vol.Required("entry_id"): str,
        vol.Required("group_id"): str,
        vol.Required("exercise_id"): str,
    }
)


async def async_register(hass: HomeAssistant) -> None:
    def _coordinator_for_entry(entry_id: str):
        return hass.data.get(DOMAIN, {}).get(entry_id)

    async def _async_get_groups(call: ServiceCall) -> ServiceResponse:
        entry_id = str(call.data["entry_id"])
        coordinator = _coordinator_for_entry(entry_id)
        if coordinator is None:
            return {"ok": False, "error": "entry_not_found"}
        groups = await coordinator.store.async_load()
        return {"ok": True, "entry_id": entry_id, "groups": encode(groups)}

    async def _async_add_exercise(call: ServiceCall) -> ServiceResponse:
        entry_id = str(call.data["entry_id"])
        coordinator = _coordinator_for_entry(entry_id)
        if coordinator is None:
            return {"ok": False, "error": "entry_not_found"}
        exercise = coordinator.store.add_exercise(
            str(call.data["group_id"]),
            call.data["name"],
            call.data.get("kg"),
        )
        if exercise is None:
            return {"ok": False, "error": "rejected"}
        return {"ok": True, "entry_id": entry_id, "exercise": encode_exercise(exercise)}

    async def _async_adjust_weight(call: ServiceCall) -> ServiceResponse:
        entry_id = str(call.data["entry_id"])
        coordinator = _coordinator_for_entry(entry_id)
        if coordinator is None:
            return {"ok": False, "error": "entry_not_found"}
        exercise = coordinator.store.adjust_weight(
            str(call.data["group_id"]),
            str(call.data["exercise_id"]),
            float(call.data.get("delta", STEP_KG)),
        )
        if exercise is None:
            return {"ok": False, "error": "not_found"}
        return {"ok": True, "entry_id": entry_id, "exercise": encode_exercise(exercise)}

    async def _async_remove_exercise(call: ServiceCall) -> ServiceResponse:
        entry_id = str(call.data["entry_id"])
        coordinator = _coordinator_for_entry(entry_id)
        if coordinator is None:
            return {"ok": False, "error": "entry_not_found"}
        removed = coordinator.store.remove_exercise(str(call.data["group_id"]), str(call.data["exercise_id"]))
        if removed is None:
            return {"ok": False, "error": "not_found"}
        return {"ok": True, "entry_id": entry_id, "removed": encode_exercise(removed)}

    handlers = (
        (SERVICE_GET_GROUPS, _async_get_groups, _ENTRY_SCHEMA, SupportsResponse.ONLY),
        (SERVICE_ADD_EXERCISE, _async_add_exercise, _ADD_EXERCISE_SCHEMA, SupportsResponse.OPTIONAL),
        (SERVICE_ADJUST_WEIGHT, _async_adjust_weight, _ADJUST_WEIGHT_SCHEMA, SupportsResponse.OPTIONAL),
        (SERVICE_REMOVE_EXERCISE, _async_remove_exercise, _EXERCISE_SCHEMA, SupportsResponse.OPTIONAL),
    )
    for name, handler, schema, supports_response in handlers:
        if hass.services.has_service(DOMAIN, name):
            continue
        hass.services.async_register(
            DOMAIN,
            name,
            handler,
            schema=schema,
            supports_response=supports_response,
        )
