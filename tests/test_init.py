"""Test setting up the Comelit VEDO integration."""

import logging
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from aiocomelit.exceptions import CannotAuthenticate, CannotConnect
from pytest_homeassistant_custom_component.common import MockConfigEntry

from homeassistant.config_entries import ConfigEntryState
from homeassistant.const import STATE_OFF, STATE_UNKNOWN
from homeassistant.core import HomeAssistant

from custom_components.comelit_vedo.const import (
    CONF_ALARM_CODE,
    CONF_MAP_SENSORS,
    DOMAIN,
)
from custom_components.comelit_vedo.platform import VedoPlatform, has_valid_config

from tests.const import MOCK_ADDRESS, MOCK_CONFIG, make_zone
from tests.helpers import get_entity_id, init_integration


async def test_setup_registers_alarm_and_named_zones(
    hass: HomeAssistant, init_integration_fixture: MockConfigEntry
) -> None:
    """Test alarm and every zone with description become entities."""
    entry = init_integration_fixture
    registry = entry.runtime_data.platform.registry

    assert entry.state is ConfigEntryState.LOADED
    assert [zone.zone_name for zone in registry.zones] == ["Kitchen", "Garage"]
    assert registry.entities == [registry.alarm, *registry.zones]

    alarm_entity_id = get_entity_id(hass, "alarm_control_panel", f"{entry.entry_id}_alarm")
    assert alarm_entity_id is not None
    assert hass.states.get(alarm_entity_id).state == STATE_UNKNOWN

    kitchen_entity_id = get_entity_id(hass, "binary_sensor", f"{entry.entry_id}_zone_0")
    assert kitchen_entity_id is not None
    assert hass.states.get(kitchen_entity_id).state == STATE_OFF

    # Zone without description is never exposed
    assert get_entity_id(hass, "binary_sensor", f"{entry.entry_id}_zone_1") is None


async def test_setup_starts_polling(
    hass: HomeAssistant, init_integration_fixture: MockConfigEntry
) -> None:
    """Test polling is started once Home Assistant is running."""
    platform = init_integration_fixture.runtime_data.platform

    assert platform.poller is not None
    assert platform.poller.running
    assert platform.poller.interval.total_seconds() == 2


async def test_setup_invalid_config(
    hass: HomeAssistant, mock_client: MagicMock, caplog: pytest.LogCaptureFixture
) -> None:
    """Test missing access code results in no entities and no polling."""
    entry = MockConfigEntry(domain=DOMAIN, data={**MOCK_CONFIG, CONF_ALARM_CODE: ""})

    with caplog.at_level(logging.ERROR):
        await init_integration(hass, entry)

    platform = entry.runtime_data.platform
    assert entry.state is ConfigEntryState.LOADED
    assert platform.registry.entities == []
    assert platform.client is None
    assert platform.poller is None
    assert "Invalid configuration" in caplog.text
    assert "******" in caplog.text
    assert hass.states.async_entity_ids("alarm_control_panel") == []
    assert hass.states.async_entity_ids("binary_sensor") == []
    mock_client.fetch_zones.assert_not_awaited()


async def test_setup_without_sensors(
    hass: HomeAssistant, mock_client: MagicMock
) -> None:
    """Test only alarm entity is registered when zones are not mapped."""
    entry = MockConfigEntry(domain=DOMAIN, data={**MOCK_CONFIG, CONF_MAP_SENSORS: False})
    await init_integration(hass, entry)

    registry = entry.runtime_data.platform.registry
    assert registry.entities == [registry.alarm]
    assert hass.states.async_entity_ids("binary_sensor") == []
    mock_client.fetch_zones.assert_not_awaited()


async def test_setup_without_zones(
    hass: HomeAssistant, mock_client: MagicMock, caplog: pytest.LogCaptureFixture
) -> None:
    """Test alarm is still registered when VEDO reports no zones."""
    mock_client.fetch_zones.side_effect = None
    mock_client.fetch_zones.return_value = None
    entry = MockConfigEntry(domain=DOMAIN, data=dict(MOCK_CONFIG))
    await init_integration(hass, entry)

    registry = entry.runtime_data.platform.registry
    assert entry.state is ConfigEntryState.LOADED
    assert registry.alarm is not None
    assert registry.zones == []
    assert "No zones were discovered" in caplog.text


async def test_setup_with_duplicate_zone_names(
    hass: HomeAssistant, mock_client: MagicMock
) -> None:
    """Test zones sharing a description get separate entities."""
    mock_client.fetch_zones.side_effect = None
    mock_client.fetch_zones.return_value = [make_zone(3, "Hall"), make_zone(4, "Hall")]
    entry = MockConfigEntry(domain=DOMAIN, data=dict(MOCK_CONFIG))
    await init_integration(hass, entry)

    registry = entry.runtime_data.platform.registry
    assert len(registry.zones) == 2
    assert registry.find_zone("Hall") is registry.zones[0]


async def test_setup_retry_when_alarm_unreachable(
    hass: HomeAssistant, mock_client: MagicMock
) -> None:
    """Test setup is retried when zones cannot be discovered."""
    mock_client.fetch_zones.side_effect = CannotConnect("unreachable")
    entry = MockConfigEntry(domain=DOMAIN, data=dict(MOCK_CONFIG))
    await init_integration(hass, entry)

    assert entry.state is ConfigEntryState.SETUP_RETRY


async def test_setup_auth_failed(
    hass: HomeAssistant, mock_client: MagicMock
) -> None:
    """Test reauthentication is requested when access code is rejected."""
    mock_client.fetch_zones.side_effect = CannotAuthenticate("bad code")
    entry = MockConfigEntry(domain=DOMAIN, data=dict(MOCK_CONFIG))
    await init_integration(hass, entry)

    assert entry.state is ConfigEntryState.SETUP_ERROR
    flows = hass.config_entries.flow.async_progress()
    assert any(flow["context"]["source"] == "reauth" for flow in flows)


async def test_unload_stops_polling(
    hass: HomeAssistant, init_integration_fixture: MockConfigEntry, mock_client: MagicMock
) -> None:
    """Test unloading stops poller and logs out from the alarm."""
    entry = init_integration_fixture
    poller = entry.runtime_data.platform.poller

    assert await hass.config_entries.async_unload(entry.entry_id)
    await hass.async_block_till_done()

    assert entry.state is ConfigEntryState.NOT_LOADED
    assert not poller.running
    mock_client.logout.assert_awaited_once()


async def test_unload_ignores_logout_error(
    hass: HomeAssistant, init_integration_fixture: MockConfigEntry, mock_client: MagicMock
) -> None:
    """Test failing logout does not break unloading."""
    mock_client.logout.side_effect = CannotConnect("unreachable")

    assert await hass.config_entries.async_unload(init_integration_fixture.entry_id)
    await hass.async_block_till_done()

    assert init_integration_fixture.state is ConfigEntryState.NOT_LOADED


async def test_discover_only_once(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry, mock_client: MagicMock
) -> None:
    """Test entities cannot be discovered twice."""
    mock_config_entry.add_to_hass(hass)
    platform = VedoPlatform(hass, mock_config_entry)
    await platform.async_discover()

    with pytest.raises(RuntimeError):
        await platform.async_discover()

    assert mock_client.fetch_zones.await_count == 1


@pytest.mark.parametrize(
    ("data", "valid"),
    [
        (MOCK_CONFIG, True),
        ({**MOCK_CONFIG, CONF_ALARM_CODE: ""}, False),
        ({**MOCK_CONFIG, "alarm_address": ""}, False),
        ({"alarm_address": MOCK_ADDRESS}, False),
        ({}, False),
        (None, False),
    ],
)
async def test_has_valid_config(data: dict | None, valid: bool) -> None:
    """Test configuration requires alarm address and access code."""
    assert has_valid_config(data) is valid


async def test_setup_refused_code(hass: HomeAssistant) -> None:
    """Test access code refused by alarm starts reauthentication."""
    with patch("custom_components.comelit_vedo.vedo.ComelitVedoApi") as mock_api_cls:
        mock_api_cls.return_value.login = AsyncMock(return_value=False)
        mock_api_cls.return_value.get_all_areas_and_zones = AsyncMock()
        entry = MockConfigEntry(domain=DOMAIN, data=dict(MOCK_CONFIG))
        await init_integration(hass, entry)

    assert entry.state is ConfigEntryState.SETUP_ERROR
    flows = hass.config_entries.flow.async_progress()
    assert any(flow["context"]["source"] == "reauth" for flow in flows)
    mock_api_cls.return_value.get_all_areas_and_zones.assert_not_awaited()
