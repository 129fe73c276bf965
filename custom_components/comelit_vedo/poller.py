"""Polling loop reconciling VEDO alarm state into entities."""

from __future__ import annotations

import logging
from asyncio import timeout
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from homeassistant.core import HassJob, HomeAssistant, callback
from homeassistant.helpers.event import async_call_later

from .vedo import VedoClient

if TYPE_CHECKING:
    from .platform import VedoEntities

_LOGGER = logging.getLogger(__name__)


class VedoPoller:
    """Periodically fetch VEDO alarm state and apply it to entities.

    A single one-shot timer is armed for every tick and re-armed only once
    the tick has finished, so ticks never overlap even when the alarm
    answers slower than the polling interval.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        client: VedoClient,
        registry: VedoEntities,
        *,
        map_sensors: bool,
        interval: timedelta,
        timeout: float
    ) -> None:
        """Initialize VEDO poller."""

        self.hass = hass
        self.interval = interval
        self._client = client
        self._registry = registry
        self._map_sensors = map_sensors
        self._timeout = timeout
        self._running = False
        self._unsub_timer: Callable[[], None] | None = None
        self._job = HassJob(self._async_handle_timer, "Comelit VEDO poll", cancel_on_shutdown=True)

    @property
    def running(self) -> bool:
        """Whether poller is running."""

        return self._running

    @callback
    def start(self) -> None:
        """Arm timer for the first tick."""

        if self._running:
            raise RuntimeError("VEDO poller is already running")

        self._running = True
        self._schedule()

    @callback
    def stop(self) -> None:
        """Cancel pending tick."""

        self._running = False
        if self._unsub_timer is not None:
            self._unsub_timer()
            self._unsub_timer = None

    @callback
    def _schedule(self) -> None:
        """Arm timer for the next tick."""

        self._unsub_timer = async_call_later(self.hass, self.interval, self._job)

    async def _async_handle_timer(self, _now: datetime) -> None:
        """Run tick and re-arm timer afterwards."""

        self._unsub_timer = None
        try:
            await self.async_poll()
        finally:
            if self._running:
                self._schedule()

    async def async_poll(self) -> None:
        """Fetch alarm state and update all entities.

        Errors never leave this method, otherwise polling would stop.
        """

        try:
            async with timeout(self._timeout):
                await self._async_update()
        except TimeoutError:
            _LOGGER.warning("Timeout while updating VEDO alarm state, data may be out of date!")
        except Exception as ex:  # noqa: BLE001
            _LOGGER.error("Error while updating VEDO alarm state: %s", ex, exc_info=True)

    async def _async_update(self) -> None:
        """Apply fetched areas and zones to registered entities."""

        areas = await self._client.check_alarm()
        if not areas:
            return

        _LOGGER.debug("Found %d areas: %s", len(areas), ", ".join(area["description"] for area in areas))
        if self._registry.alarm is not None:
            self._registry.alarm.update(areas)

        if not self._map_sensors:
            return

        zones = await self._client.fetch_zones()
        if not zones:
            _LOGGER.warning("No zone found")

            return

        named_zones = [zone for zone in zones if zone["description"] != ""]
        _LOGGER.debug("Found %d zones: %s", len(named_zones), ", ".join(zone["description"] for zone in named_zones))
        for zone in named_zones:
            sensor = self._registry.find_zone(zone["description"])
            if sensor is None:
                _LOGGER.warning("No sensor registered for zone '%s', ignoring!", zone["description"])

                continue

            sensor.update(zone)
