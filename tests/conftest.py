"""Fixtures for tests."""

from collections.abc import Generator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from pytest_homeassistant_custom_component.common import MockConfigEntry

from homeassistant.core import HomeAssistant

from custom_components.comelit_vedo.const import DOMAIN

from tests.const import MOCK_ADDRESS, MOCK_CONFIG, mock_areas, mock_zones
from tests.helpers import init_integration


@pytest.fixture(autouse=True)
def auto_enable_custom_integrations(
    enable_custom_integrations: None,
) -> Generator[None]:
    """Enable custom integration."""
    _ = enable_custom_integrations  # unused
    yield


@pytest.fixture
def mock_client() -> Generator[MagicMock]:
    """Mock client used by the Comelit VEDO platform."""
    with patch(
        "custom_components.comelit_vedo.platform.VedoClient"
    ) as mock_client_cls:
        client = mock_client_cls.return_value
        client.check_alarm = AsyncMock(side_effect=lambda: mock_areas())
        client.fetch_zones = AsyncMock(side_effect=lambda: mock_zones())
        client.logout = AsyncMock()
        yield client


@pytest.fixture
def mock_config_entry() -> MockConfigEntry:
    """Return default Comelit VEDO config entry."""
    return MockConfigEntry(
        domain=DOMAIN,
        title=f"VEDO alarm {MOCK_ADDRESS}",
        data=dict(MOCK_CONFIG),
        unique_id=f"{MOCK_ADDRESS}:80",
    )


@pytest.fixture
async def init_integration_fixture(
    hass: HomeAssistant, mock_config_entry: MockConfigEntry, mock_client: MagicMock
) -> MockConfigEntry:
    """Set up Comelit VEDO integration with default configuration."""
    return await init_integration(hass, mock_config_entry)
