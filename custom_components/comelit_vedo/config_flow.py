"""Config flow for Comelit VEDO integration."""

import logging

import voluptuous as vol
from aiocomelit.exceptions import CannotAuthenticate, CannotConnect, CannotRetrieveData
from aiohttp import ClientError
from homeassistant import config_entries
from homeassistant.config_entries import ConfigFlow, ConfigFlowResult
from homeassistant.helpers.aiohttp_client import async_get_clientsession

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
    DEFAULT_UPDATE_INTERVAL,
    DOMAIN
)
from .platform import has_valid_config
from .vedo import VedoClient

_LOGGER = logging.getLogger(__name__)


def get_schema(config: dict) -> vol.Schema:
    """Return config flow schema."""

    return vol.Schema(
        {
            vol.Required(CONF_ALARM_ADDRESS, default=config.get(CONF_ALARM_ADDRESS, "")): str,
            vol.Optional(CONF_ALARM_PORT, default=config.get(CONF_ALARM_PORT, DEFAULT_PORT)): int,
            vol.Required(CONF_ALARM_CODE, default=config.get(CONF_ALARM_CODE, "")): str,
            vol.Optional(CONF_MAP_SENSORS, default=config.get(CONF_MAP_SENSORS, True)): bool,
            vol.Optional(
                CONF_UPDATE_INTERVAL,
                default=config.get(CONF_UPDATE_INTERVAL, DEFAULT_UPDATE_INTERVAL)
            ): int,
            vol.Optional(CONF_TIMEOUT, default=config.get(CONF_TIMEOUT, DEFAULT_TIMEOUT)): int,
            vol.Optional(CONF_AWAY_AREAS, default=config.get(CONF_AWAY_AREAS, "")): str,
            vol.Optional(CONF_NIGHT_AREAS, default=config.get(CONF_NIGHT_AREAS, "")): str,
            vol.Optional(CONF_HOME_AREAS, default=config.get(CONF_HOME_AREAS, "")): str
        }
    )


async def handle_configuration(
    self: ConfigFlow,
    user_input: dict | None,
    step_id: str,
    config_entry_data: dict
) -> ConfigFlowResult | None:
    """Handle configuration from config flows."""

    # Open configuration dialog
    if user_input is None:
        return self.async_show_form(  # type: ignore
            step_id=step_id,
            data_schema=get_schema(config_entry_data)
        )

    # Validate alarm address and code
    if not has_valid_config(user_input):
        return self.async_show_form(  # type: ignore
            step_id=step_id,
            data_schema=get_schema(user_input),
            errors={"base": "invalid_config"}
        )

    # Validate interval value
    if user_input[CONF_UPDATE_INTERVAL] < 1:
        return self.async_show_form(  # type: ignore
            step_id=step_id,
            data_schema=get_schema(user_input),
            errors={"base": "interval_too_short"}
        )

    # Validate timeout value
    if user_input[CONF_TIMEOUT] < 1:
        return self.async_show_form(  # type: ignore
            step_id=step_id,
            data_schema=get_schema(user_input),
            errors={"base": "timeout_too_low"}
        )

    try:
        # Validate alarm connection and entered code
        _LOGGER.debug("Validating Comelit VEDO connection")
        await validate_connection(self, user_input)
    except CannotAuthenticate:
        return self.async_show_form(  # type: ignore
            step_id=step_id,
            data_schema=get_schema(user_input),
            errors={"base": "invalid_auth"}
        )
    except (CannotConnect, CannotRetrieveData, ClientError, TimeoutError):
        return self.async_show_form(  # type: ignore
            step_id=step_id,
            data_schema=get_schema(user_input),
            errors={"base": "cannot_connect"}
        )


async def validate_connection(self: ConfigFlow, user_input: dict) -> None:
    """Validate that VEDO alarm is reachable with entered code."""

    client = VedoClient(
        async_get_clientsession(self.hass),
        user_input[CONF_ALARM_ADDRESS],
        user_input[CONF_ALARM_PORT],
        user_input[CONF_ALARM_CODE]
    )
    await client.validate()


class ComelitVedoConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle config flow for Comelit VEDO."""

    # Define configuration version
    VERSION = 1
    MINOR_VERSION = 1

    async def async_step_user(self, user_input: dict | None = None) -> ConfigFlowResult:
        """User flow to configure Comelit VEDO integration."""

        # Show configuration dialog and validate user inputs
        flow_result = await handle_configuration(self, user_input, "user", {})

        # Reopen configuration dialog
        if flow_result is not None:
            return flow_result  # type: ignore

        # Configure every alarm only once
        await self.async_set_unique_id(f"{user_input[CONF_ALARM_ADDRESS]}:{user_input[CONF_ALARM_PORT]}")
        self._abort_if_unique_id_configured()

        _LOGGER.info("Comelit VEDO integration successfully configured")
        return self.async_create_entry(  # type: ignore
            title=f"VEDO alarm {user_input[CONF_ALARM_ADDRESS]}",
            data=user_input
        )

    async def async_step_reconfigure(self, user_input: dict | None = None) -> ConfigFlowResult:
        """User flow to reconfigure Comelit VEDO integration."""

        # Get existing configuration
        config_entry = self._get_reconfigure_entry()

        # Show configuration dialog and validate user inputs
        flow_result = await handle_configuration(self, user_input, "reconfigure", config_entry.data)

        # Save configuration or reopen configuration dialog
        if flow_result is None:
            # Follow changed alarm address but never take over another entry
            unique_id = f"{user_input[CONF_ALARM_ADDRESS]}:{user_input[CONF_ALARM_PORT]}"
            if unique_id != config_entry.unique_id:
                await self.async_set_unique_id(unique_id)
                self._abort_if_unique_id_configured()

            _LOGGER.info("Comelit VEDO integration successfully reconfigured")
            return self.async_update_reload_and_abort(  # type: ignore
                config_entry,
                unique_id=unique_id,
                data={**config_entry.data, **user_input}
            )
        else:
            return flow_result  # type: ignore

    async def async_step_reauth(self, entry_data: dict | None = None) -> ConfigFlowResult:  # noqa: F841
        """Handler for VEDO alarm authentication errors."""

        return await self.async_step_reauth_confirm()  # type: ignore

    async def async_step_reauth_confirm(self, user_input: dict | None = None) -> ConfigFlowResult:
        """User flow to update code for Comelit VEDO integration."""

        # Get existing configuration
        config_entry = self._get_reauth_entry()

        # Show configuration dialog and validate user inputs
        flow_result = await handle_configuration(self, user_input, "reauth_confirm", config_entry.data)

        # Save configuration or reopen configuration dialog
        if flow_result is None:
            _LOGGER.info("Comelit VEDO integration successfully reauthenticated")
            return self.async_update_reload_and_abort(  # type: ignore
                config_entry,
                unique_id=config_entry.unique_id,
                data={**config_entry.data, **user_input}
            )
        else:
            return flow_result  # type: ignore
