"""Support for Comelit VEDO alarm control panel."""

from __future__ import annotations

import logging
from typing import Any

from homeassistant.components.alarm_control_panel import (
    AlarmControlPanelEntity,
    AlarmControlPanelEntityFeature,
    AlarmControlPanelState
)
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.entity import DeviceInfo
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .types import AreaMapping, ComelitVedoConfigEntry, VedoAreaState
from .utils import get_device_info

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(
    hass: HomeAssistant,  # noqa: F841
    entry: ComelitVedoConfigEntry,
    async_add_entities: AddEntitiesCallback
) -> None:
    """Register alarm panel entity for discovered VEDO alarm."""

    _LOGGER.debug("Adding Comelit VEDO alarm control panel entity")
    alarm = entry.runtime_data.platform.registry.alarm
    async_add_entities([alarm] if alarm is not None else [])


def areas_to_alarm_state(areas: list[VedoAreaState], mapping: AreaMapping) -> AlarmControlPanelState | None:
    """Convert state of VEDO areas to single alarm state."""

    if not areas:
        return None

    if any(area["alarm"] for area in areas):
        return AlarmControlPanelState.TRIGGERED

    armed = {area["description"] for area in areas if area["armed"]}
    if not armed:
        return AlarmControlPanelState.DISARMED

    # Without mapping every armed area means away mode
    if mapping.is_empty:
        return AlarmControlPanelState.ARMED_AWAY

    for mode_areas, state in (
        (mapping.away_areas, AlarmControlPanelState.ARMED_AWAY),
        (mapping.night_areas, AlarmControlPanelState.ARMED_NIGHT),
        (mapping.home_areas, AlarmControlPanelState.ARMED_HOME),
    ):
        if mode_areas and mode_areas <= armed:
            return state

    return AlarmControlPanelState.ARMED_CUSTOM_BYPASS


class VedoAlarm(AlarmControlPanelEntity):
    """Representation of Comelit VEDO alarm panel entity."""

    # Allow custom entity names
    _attr_has_entity_name = True
    _attr_name = None

    # Alarm state is only monitored
    _attr_code_arm_required = False
    _attr_supported_features = AlarmControlPanelEntityFeature(0)
    _attr_should_poll = False

    def __init__(self: VedoAlarm, entry_id: str, address: str, mapping: AreaMapping) -> None:
        """Initialize Comelit VEDO alarm panel."""

        self._address = address
        self._mapping = mapping
        self.areas: list[VedoAreaState] = []

        # Define panel attributes
        self._attr_unique_id = f"{entry_id}_alarm"
        self._attr_alarm_state = None

    @property
    def device_info(self) -> DeviceInfo:
        """Return information about device."""

        return get_device_info(self._address)

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return armed areas and areas in alarm."""

        return {
            "armed_areas": sorted(area["description"] for area in self.areas if area["armed"]),
            "alarm_areas": sorted(area["description"] for area in self.areas if area["alarm"])
        }

    @callback
    def update(self, areas: list[VedoAreaState]) -> None:
        """Apply current state of VEDO areas."""

        if areas == self.areas:
            return

        self.areas = list(areas)
        self._attr_alarm_state = areas_to_alarm_state(self.areas, self._mapping)
        _LOGGER.debug("Alarm state of VEDO alarm @ %s is '%s'", self._address, self._attr_alarm_state)

        # Entity may not be added to Home Assistant yet
        if self.hass is not None:
            self.async_write_ha_state()
