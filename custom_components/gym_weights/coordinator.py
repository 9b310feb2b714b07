"""Coordinator for Gym Weights."""

from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator

from .const import DOMAIN
from .models import Collection
from .storage import GymWeightsStore

_LOGGER = logging.getLogger(__name__)


class GymWeightsCoordinator(DataUpdateCoordinator[Collection]):
    """Pushes store snapshots to entities; nothing is polled."""

    def __init__(self, hass: HomeAssistant, entry: ConfigEntry, store: GymWeightsStore | None = None) -> None:
        self.entry = entry
        self.store = store or GymWeightsStore.for_entry(hass, entry.entry_id)

        super().__init__(
            hass,
            logger=_LOGGER,
            config_entry=entry,
            name=f"{DOMAIN}_{entry.entry_id}",
            update_interval=None,
        )
        self._unsub_store = self.store.async_add_listener(self._handle_store_update)

    async def _async_update_data(self) -> Collection:
        # Single source of truth is the store; services/entities mutate it.
        return await self.store.async_load()

    @callback
    def _handle_store_update(self, groups: Collection) -> None:
        self.async_set_updated_data(groups)

    async def async_shutdown(self) -> None:
        self._unsub_store()
        await self.store.async_flush()
        await super().async_shutdown()
