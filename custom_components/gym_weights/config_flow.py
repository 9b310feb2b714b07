"""Config flow for Gym Weights."""

from __future__ import annotations

from typing import Any

import voluptuous as vol

from homeassistant import config_entries
from homeassistant.core import callback

from .const import CONF_NAME, DEFAULT_NAME, DOMAIN


def _name_schema(default: str) -> vol.Schema:
    return vol.Schema({vol.Required(CONF_NAME, default=default): str})


def _clean_name(user_input: dict[str, Any]) -> str:
    return str(user_input.get(CONF_NAME, DEFAULT_NAME)).strip() or DEFAULT_NAME


class GymWeightsConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle a config flow for Gym Weights."""

    VERSION = 1

    async def async_step_user(self, user_input: dict[str, Any] | None = None):
        if user_input is not None:
            name = _clean_name(user_input)
            await self.async_set_unique_id(name.lower())
            self._abort_if_unique_id_configured()
            return self.async_create_entry(title=name, data={CONF_NAME: name})

        return self.async_show_form(step_id="user", data_schema=_name_schema(DEFAULT_NAME))

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: config_entries.ConfigEntry):
        return GymWeightsOptionsFlow()


class GymWeightsOptionsFlow(config_entries.OptionsFlow):
    """Rename a Gym Weights entry."""

    async def async_step_init(self, user_input: dict[str, Any] | None = None):
        if user_input is not None:
            return self.async_create_entry(title="", data={CONF_NAME: _clean_name(user_input)})

        current_name = self.config_entry.options.get(
            CONF_NAME,
            self.config_entry.data.get(CONF_NAME, DEFAULT_NAME),
        )
        return self.async_show_form(step_id="init", data_schema=_name_schema(str(current_name)))
