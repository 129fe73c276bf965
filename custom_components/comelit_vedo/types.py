from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypedDict

from homeassistant.config_entries import ConfigEntry

if TYPE_CHECKING:
    from .platform import VedoPlatform

VedoAreaState = TypedDict(
    "VedoAreaState",
    {
        "id": int,
        "description": str,
        "ready": bool,
        "armed": bool,
        "alarm": bool,
        "sabotage": bool,
        "anomaly": bool
    }
)

VedoZoneState = TypedDict(
    "VedoZoneState",
    {
        "id": int,
        "description": str,
        "status": str,
        "open": bool,
        "fault": bool
    }
)


@dataclass(frozen=True)
class AreaMapping:
    """Areas which define each of the alarm arming modes."""

    away_areas: frozenset[str] = frozenset()
    night_areas: frozenset[str] = frozenset()
    home_areas: frozenset[str] = frozenset()

    @property
    def is_empty(self) -> bool:
        """Whether no area has been mapped to any mode."""

        return not (self.away_areas or self.night_areas or self.home_areas)


@dataclass
class ComelitVedoData:
    """Integration runtime data."""

    platform: VedoPlatform


type ComelitVedoConfigEntry = ConfigEntry[ComelitVedoData]
