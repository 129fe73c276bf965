"""Comelit VEDO platform controller."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.aiohttp_client import async_get_clientsession
from homeassistant.helpers.entity import Entity

from .alarm_control_panel import VedoAlarm
from .binary_sensor import VedoSensor
from .const import (
    CONF_ALARM_ADDRESS,
    CONF_ALARM_CODE,
    CONF_ALARM_PORT,
    CONF_AWAY_AREAS,
    CONF_HOME_AREAS,
    CONF_MAP_SENSORS,
    CONF_NIGHT_AREAS,
    CONF_TIMEOUT,
    CONF_UPDATE_INTERVAL,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    DEFAULT_UPDATE_INTERVAL
)
from .poller import VedoPoller
from .types import AreaMapping, ComelitVedoConfigEntry
from .utils import mask_code
from .vedo import VedoClient

_LOGGER = logging.getLogger(__name__)


def has_valid_config(data: Mapping[str, Any] | None) -> bool:
    """Whether configuration contains alarm address and access code."""

    return bool(data and data.get(CONF_ALARM_ADDRESS) and data.get(CONF_ALARM_CODE))


def _area_names(value: Iterable[str] | str | None) -> frozenset[str]:
    """Return set of area names from list or comma separated string."""

    if not value:
        return frozenset()
    if isinstance(value, str):
        value = value.split(",")

    return frozenset(name.strip() for name in value if name.strip())


def get_area_mapping(data: Mapping[str, Any]) -> AreaMapping:
    """Return areas mapped to each arming mode."""

    return AreaMapping(
        away_areas=_area_names(data.get(CONF_AWAY_AREAS)),
        night_areas=_area_names(data.get(CONF_NIGHT_AREAS)),
        home_areas=_area_names(data.get(CONF_HOME_AREAS))
    )


@dataclass
class VedoEntities:
    """Entities exposed for a single VEDO alarm."""

    alarm: VedoAlarm | None = None
    zones: list[VedoSensor] = field(default_factory=list)

    @property
    def entities(self) -> list[Entity]:
        """Return alarm entity followed by all zone entities."""

        if self.alarm is None:
            return []

        return [self.alarm, *self.zones]

    def find_zone(self, name: str) -> VedoSensor | None:
        """Return zone entity registered under given name."""

        return next(filter(lambda zone: zone.zone_name == name, self.zones), None)


class VedoPlatform:
    """Discover VEDO alarm entities and keep them updated."""

    def __init__(self, hass: HomeAssistant, entry: ComelitVedoConfigEntry) -> None:
        """Initialize Comelit VEDO platform."""

        self.hass = hass
        self._entry = entry
        self._config: dict[str, Any] = dict(entry.data)
        self.client: VedoClient | None = None
        self.poller: VedoPoller | None = None
        self.registry = VedoEntities()
        self._discovered = False

        _LOGGER.debug("Initializing platform: %s", mask_code(self._config))

    @property
    def map_sensors(self) -> bool:
        """Whether alarm zones are exposed as sensors."""

        return bool(self._config.get(CONF_MAP_SENSORS))

    @property
    def update_interval(self) -> timedelta:
        """Return polling interval."""

        return timedelta(seconds=self._config.get(CONF_UPDATE_INTERVAL) or DEFAULT_UPDATE_INTERVAL)

    async def async_discover(self) -> VedoEntities:
        """Create alarm entity and zone entities for all named zones."""

        if self._discovered:
            raise RuntimeError("Comelit VEDO entities were already discovered")
        self._discovered = True

        if not has_valid_config(self._config):
            _LOGGER.error("Invalid configuration: %s", mask_code(self._config))

            return self.registry

        address = self._config[CONF_ALARM_ADDRESS]
        port = self._config.get(CONF_ALARM_PORT) or DEFAULT_PORT
        _LOGGER.info("Map VEDO alarm @ %s:%s", address, port)
        self.client = VedoClient(
            async_get_clientsession(self.hass),
            address,
            port,
            self._config[CONF_ALARM_CODE]
        )
        alarm = VedoAlarm(self._entry.entry_id, address, get_area_mapping(self._config))

        zones: list[VedoSensor] = []
        if self.map_sensors:
            _LOGGER.debug("Discovering available VEDO zones")
            zone_states = await self.client.fetch_zones()
            if not zone_states:
                _LOGGER.warning("No zones were discovered and therefore no sensors will be generated!")
            for zone in zone_states or []:
                # Zones without description carry no identity
                if zone["description"] == "":
                    continue

                _LOGGER.debug("Adding zone '%s'", zone["description"])
                zones.append(VedoSensor(self._entry.entry_id, address, zone["description"], zone))

        self.registry.alarm = alarm
        self.registry.zones = zones

        return self.registry

    @callback
    def start_polling(self) -> None:
        """Start polling VEDO alarm once Home Assistant is ready."""

        if self.client is None or self.registry.alarm is None:
            _LOGGER.debug("No VEDO alarm was discovered, polling is not started")

            return

        interval = self.update_interval
        _LOGGER.info("Setting up polling every %s secs", interval.total_seconds())
        self.poller = VedoPoller(
            self.hass,
            self.client,
            self.registry,
            map_sensors=self.map_sensors,
            interval=interval,
            timeout=self._config.get(CONF_TIMEOUT) or DEFAULT_TIMEOUT
        )
        self.poller.start()

    async def async_shutdown(self) -> None:
        """Stop polling and close session with VEDO alarm."""

        if self.poller is not None:
            self.poller.stop()
        if self.client is None:
            return

        try:
            await self.client.logout()
        except Exception as ex:  # noqa: BLE001
            _LOGGER.warning("Unable to logout from VEDO alarm: %s", ex)
