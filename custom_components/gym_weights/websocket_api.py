"""Websocket API for Gym Weights."""

from __future__ import annotations

from typing import Any

import voluptuous as vol

from homeassistant.components import websocket_api
from homeassistant.core import HomeAssistant, callback

from .const import DOMAIN, STEP_KG
from .services import DELTA_KG
from .version import integration_version
from .ws_state import public_state


def _runtime_payload() -> dict[str, Any]:
    return {"backend_version": integration_version()}


def _coordinator_or_error(hass: HomeAssistant, connection: websocket_api.ActiveConnection, msg: dict[str, Any]):
    entry_id = msg["entry_id"]
    coordinator = hass.data.get(DOMAIN, {}).get(entry_id)
    if coordinator is None:
        connection.send_error(msg["id"], "entry_not_found", f"No entry found for entry_id={entry_id}")
    return coordinator


def _send_state(connection: websocket_api.ActiveConnection, msg: dict[str, Any], coordinator, **extra: Any) -> None:
    connection.send_result(
        msg["id"],
        {
            "entry_id": msg["entry_id"],
            **extra,
            "state": public_state(coordinator.store, runtime=_runtime_payload()),
        },
    )


@websocket_api.websocket_command({vol.Required("type"): "gym_weights/list_entries"})
@callback
def ws_list_entries(
    hass: HomeAssistant,
    connection: websocket_api.ActiveConnection,
    msg: dict[str, Any],
) -> None:
    entries = hass.config_entries.async_entries(DOMAIN)
    payload = [{"entry_id": entry.entry_id, "title": entry.title} for entry in entries]
    connection.send_result(msg["id"], {"entries": payload})


@websocket_api.websocket_command(
    {
        vol.Required("type"): "gym_weights/get_state",
        vol.Required("entry_id"): str,
    }
)
@websocket_api.async_response
async def ws_get_state(
    hass: HomeAssistant,
    connection: websocket_api.ActiveConnection,
    msg: dict[str, Any],
) -> None:
    coordinator = _coordinator_or_error(hass, connection, msg)
    if coordinator is None:
        return
    await coordinator.store.async_load()
    _send_state(connection, msg, coordinator)


@websocket_api.websocket_command(
    {
        vol.Required("type"): "gym_weights/add_exercise",
        vol.Required("entry_id"): str,
        vol.Required("group_id"): str,
        vol.Required("name"): str,
        vol.Optional("kg", default=""): vol.Any(str, vol.Coerce(float)),
    }
)
@callback
def ws_add_exercise(
    hass: HomeAssistant,
    connection: websocket_api.ActiveConnection,
    msg: dict[str, Any],
) -> None:
    coordinator = _coordinator_or_error(hass, connection, msg)
    if coordinator is None:
        return
    exercise = coordinator.store.add_exercise(str(msg["group_id"]), msg["name"], msg.get("kg"))
    _send_state(connection, msg, coordinator, changed=exercise is not None)


@websocket_api.websocket_command(
    {
        vol.Required("type"): "gym_weights/adjust_weight",
        vol.Required("entry_id"): str,
        vol.Required("group_id"): str,
        vol.Required("exercise_id"): str,
        vol.Optional("delta", default=STEP_KG): DELTA_KG,
    }
)
@callback
def ws_adjust_weight(
    hass: HomeAssistant,
    connection: websocket_api.ActiveConnection,
    msg: dict[str, Any],
) -> None:
    coordinator = _coordinator_or_error(hass, connection, msg)
    if coordinator is None:
        return
    exercise = coordinator.store.adjust_weight(str(msg["group_id"]), str(msg["exercise_id"]), float(msg["delta"]))
    _send_state(connection, msg, coordinator, changed=exercise is not None)


@websocket_api.websocket_command(
    {
        vol.Required("type"): "gym_weights/remove_exercise",
        vol.Required("entry_id"): str,
        vol.Required("group_id"): str,
        vol.Required("exercise_id"): str,
    }
)
@callback
def ws_remove_exercise(
    hass: HomeAssistant,
    connection: websocket_api.ActiveConnection,
    msg: dict[str, Any],
) -> None:
    coordinator = _coordinator_or_error(hass, connection, msg)
    if coordinator is None:
        return
    removed = coordinator.store.remove_exercise(str(msg["group_id"]), str(msg["exercise_id"]))
    _send_state(connection, msg, coordinator, changed=removed is not None)


def async_register(hass: HomeAssistant) -> None:
    websocket_api.async_register_command(hass, ws_list_entries)
    websocket_api.async_register_command(hass, ws_get_state)
    websocket_api.async_register_command(hass, ws_add_exercise)
    websocket_api.async_register_command(hass, ws_adjust_weight)
    websocket_api.async_register_command(hass, ws_remove_exercise)
