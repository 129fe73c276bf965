"""Support for Comelit VEDO zone binary sensors."""

from __future__ import annotations

import logging
from typing import Any

from homeassistant.components.binary_sensor import BinarySensorDeviceClass, BinarySensorEntity
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.entity import DeviceInfo
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .types import ComelitVedoConfigEntry, VedoZoneState
from .utils import get_device_info

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(
    hass: HomeAssistant,  # noqa: F841
    entry: ComelitVedoConfigEntry,
    async_add_entities: AddEntitiesCallback
) -> None:
    """Register binary sensor entity for each discovered VEDO zone."""

    _LOGGER.debug("Adding Comelit VEDO binary sensor entities")
    registry = entry.runtime_data.platform.registry
    async_add_entities(registry.zones)


class VedoSensor(BinarySensorEntity):
    """Representation of Comelit VEDO zone binary sensor entity."""

    # Allow custom entity names
    _attr_has_entity_name = True
    _attr_device_class = BinarySensorDeviceClass.OPENING
    _attr_should_poll = False

    def __init__(
        self: VedoSensor,
        entry_id: str,
        address: str,
        zone_name: str,
        zone: VedoZoneState
    ) -> None:
        """Initialize Comelit VEDO binary sensor."""

        # Define entity attributes
        self._address = address
        self.zone_name = zone_name
        self.zone = zone

        # Define sensor attributes
        self._attr_name = zone_name
        self._attr_unique_id = f"{entry_id}_zone_{zone['id']}"
        self._attr_is_on = zone["open"]

    @property
    def device_info(self) -> DeviceInfo:
        """Return information about device."""

        return get_device_info(self._address)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return zone details."""

        return {
            "zone_id": self.zone["id"],
            "status": self.zone["status"],
            "fault": self.zone["fault"]
        }

    @callback
    def update(self, zone: VedoZoneState) -> None:
        """Apply current state of VEDO zone."""

        if zone == self.zone:
            return

        _LOGGER.debug("Updating zone '%s' to status '%s'", self.zone_name, zone["status"])
        self.zone = zone
        self._attr_is_on = zone["open"]

        # Entity may not be added to Home Assistant yet
        if self.hass is not None:
            self.async_write_ha_state()
