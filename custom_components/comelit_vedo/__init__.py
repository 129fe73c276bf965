"""Comelit VEDO integration."""

from __future__ import annotations

import logging

from aiocomelit.exceptions import CannotAuthenticate, CannotConnect, CannotRetrieveData
from aiohttp import ClientError
from homeassistant.core import HomeAssistant, callback
from homeassistant.exceptions import ConfigEntryAuthFailed, ConfigEntryNotReady
from homeassistant.helpers.start import async_at_started

from .const import PLATFORMS
from .platform import VedoPlatform
from .types import ComelitVedoConfigEntry, ComelitVedoData

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(hass: HomeAssistant, entry: ComelitVedoConfigEntry) -> bool:
    """Set up Comelit VEDO from config entry."""

    _LOGGER.debug("Preparing Comelit VEDO platform")
    platform = VedoPlatform(hass, entry)

    try:
        # Discover alarm and zones only once for all platforms
        await platform.async_discover()
    except CannotAuthenticate as ex:
        raise ConfigEntryAuthFailed(ex) from ex
    except (CannotConnect, CannotRetrieveData, ClientError, TimeoutError) as ex:
        raise ConfigEntryNotReady(f"Unable to discover VEDO zones: {ex}") from ex

    # Prepare runtime data
    entry.runtime_data = ComelitVedoData(platform)
    entry.async_on_unload(platform.async_shutdown)

    # Listen for configuration changes
    entry.async_on_unload(entry.add_update_listener(update_listener))

    # Setup all supported platforms
    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    @callback
    def _async_start_polling(_hass: HomeAssistant) -> None:
        """Start polling once Home Assistant is started."""

        platform.start_polling()

    entry.async_on_unload(async_at_started(hass, _async_start_polling))

    return True


async def async_unload_entry(hass: HomeAssistant, entry: ComelitVedoConfigEntry) -> bool:
    """Unload Comelit VEDO integration."""

    return await hass.config_entries.async_unload_platforms(entry, PLATFORMS)


async def update_listener(hass: HomeAssistant, entry: ComelitVedoConfigEntry) -> None:
    """Handle configuration changes."""

    await hass.config_entries.async_reload(entry.entry_id)
