"""Helpers for Comelit VEDO tests."""

from datetime import timedelta

from pytest_homeassistant_custom_component.common import (
    MockConfigEntry,
    async_fire_time_changed,
)

from homeassistant.core import HomeAssistant
from homeassistant.helpers import entity_registry as er
from homeassistant.util import dt as dt_util

from custom_components.comelit_vedo.const import DOMAIN


async def init_integration(
    hass: HomeAssistant, config_entry: MockConfigEntry
) -> MockConfigEntry:
    """Set up Comelit VEDO integration from given config entry."""
    config_entry.add_to_hass(hass)
    await hass.config_entries.async_setup(config_entry.entry_id)
    await hass.async_block_till_done()

    return config_entry


async def advance_time(hass: HomeAssistant, seconds: float) -> None:
    """Fire timers due within given number of seconds and wait for them."""
    async_fire_time_changed(hass, dt_util.utcnow() + timedelta(seconds=seconds))
    await hass.async_block_till_done()


def get_entity_id(hass: HomeAssistant, platform: str, unique_id: str) -> str | None:
    """Return entity id registered for given unique id."""
    return er.async_get(hass).async_get_entity_id(platform, DOMAIN, unique_id)
