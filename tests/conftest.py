from __future__ import annotations

from collections.abc import AsyncIterator
from typing import Any

import pytest

from homeassistant.config_entries import ConfigEntryState
from homeassistant.core import HomeAssistant
from pytest_homeassistant_custom_component.common import MockConfigEntry

from custom_components.gym_weights.const import CONF_NAME, DOMAIN
from custom_components.gym_weights.storage import GymWeightsStore


class FakeBackend:
    """In-memory stand-in for homeassistant.helpers.storage.Store."""

    def __init__(self, data: Any = None, *, fail_load: bool = False, fail_save: bool = False) -> None:
        self.data = data
        self.fail_load = fail_load
        self.fail_save = fail_save
        self.saves: list[Any] = []
        self.removed = False

    async def async_load(self) -> Any:
        if self.fail_load:
            raise OSError("storage unavailable")
        return self.data

    async def async_save(self, data: Any) -> None:
        if self.fail_save:
            raise OSError("read-only filesystem")
        self.saves.append(data)
        self.data = data

    async def async_remove(self) -> None:
        self.removed = True
        self.data = None


@pytest.fixture()
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture()
async def store(backend: FakeBackend) -> AsyncIterator[GymWeightsStore]:
    s = GymWeightsStore(backend)
    await s.async_load()
    await s.async_flush()
    yield s
    await s.async_flush()


@pytest.fixture()
async def setup_entry(hass: HomeAssistant, enable_custom_integrations: None) -> AsyncIterator[MockConfigEntry]:
    """A loaded config entry; unloading it flushes pending writes."""
    entry = MockConfigEntry(domain=DOMAIN, title="Gym", data={CONF_NAME: "Gym"}, unique_id="gym")
    entry.add_to_hass(hass)
    assert await hass.config_entries.async_setup(entry.entry_id)
    await hass.async_block_till_done()
    yield entry
    if entry.state is ConfigEntryState.LOADED:
        assert await hass.config_entries.async_unload(entry.entry_id)
        await hass.async_block_till_done()
