"""Client for Comelit VEDO alarm API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from aiocomelit.api import ComelitVedoApi
from aiocomelit.exceptions import CannotAuthenticate
from aiohttp import ClientSession

from .const import ALARM_AREAS, ALARM_ZONES, ZONE_FAULT_STATUSES, ZONE_OPEN_STATUSES
from .types import VedoAreaState, VedoZoneState

_LOGGER = logging.getLogger(__name__)


def _get_section(data: Any, key: str) -> dict[int, Any]:
    """Return areas or zones section of VEDO API data."""

    if isinstance(data, Mapping):
        return data.get(key) or {}

    return getattr(data, key, None) or {}


def _status_text(status: Any) -> str:
    """Return Comelit human readable status as plain string."""

    return str(getattr(status, "value", status)).lower()


class VedoClient:
    """Client for Comelit VEDO alarm API."""

    def __init__(self, session: ClientSession, host: str, port: int, code: str) -> None:
        """Initialize Comelit VEDO client."""

        self.host = host
        self.port = port
        self._api = ComelitVedoApi(host, port, code, session)
        self._snapshot: Any = None

    async def validate(self) -> None:
        """Validate that VEDO alarm is reachable and accepts code."""

        await self._login()

    async def check_alarm(self) -> list[VedoAreaState] | None:
        """Return current state of all alarm areas.

        Fetched data is kept for the following fetch_zones call, so both
        describe the same alarm snapshot.
        """

        self._snapshot = None
        data = await self._fetch()
        self._snapshot = data

        areas = _get_section(data, ALARM_AREAS)
        if not areas:
            return None

        return [
            VedoAreaState(
                id=area.index,
                description=area.name,
                ready=bool(area.ready),
                armed=bool(area.armed),
                alarm=bool(area.alarm),
                sabotage=bool(area.sabotage),
                anomaly=bool(area.anomaly)
            )
            for area in areas.values()
        ]

    async def fetch_zones(self) -> list[VedoZoneState] | None:
        """Return current state of all alarm zones."""

        # Reuse data fetched by check_alarm when available
        data, self._snapshot = self._snapshot, None
        if data is None:
            data = await self._fetch()

        zones = _get_section(data, ALARM_ZONES)
        if not zones:
            return None

        states: list[VedoZoneState] = []
        for zone in zones.values():
            status = _status_text(zone.human_status)
            states.append(
                VedoZoneState(
                    id=zone.index,
                    description=zone.name,
                    status=status,
                    open=status in ZONE_OPEN_STATUSES,
                    fault=status in ZONE_FAULT_STATUSES
                )
            )

        return states

    async def logout(self) -> None:
        """Close session with VEDO alarm."""

        _LOGGER.debug("Logging out from Comelit VEDO alarm @ %s:%s", self.host, self.port)
        await self._api.logout()

    async def _fetch(self) -> Any:
        """Fetch areas and zones data from VEDO alarm."""

        await self._login()

        return await self._api.get_all_areas_and_zones()

    async def _login(self) -> None:
        """Log in to VEDO alarm and raise if code was refused."""

        if not await self._api.login():
            raise CannotAuthenticate(f"VEDO alarm @ {self.host}:{self.port} refused access code")
