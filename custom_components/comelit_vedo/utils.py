"""Utils for Comelit VEDO integration."""

from collections.abc import Mapping
from typing import Any

from homeassistant.helpers.entity import DeviceInfo

from .const import CONF_ALARM_CODE, DOMAIN, MANUFACTURER


def get_device_info(address: str) -> DeviceInfo:
    """Return information about VEDO alarm device."""

    return DeviceInfo(
        identifiers={(DOMAIN, address)},
        name=f"VEDO alarm {address}",
        manufacturer=MANUFACTURER,
        model="VEDO"
    )


def mask_code(config: Mapping[str, Any]) -> dict[str, Any]:
    """Return copy of configuration with access code hidden."""

    return {**config, CONF_ALARM_CODE: "******"}
