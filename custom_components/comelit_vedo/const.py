"""Constants for Comelit VEDO integration."""

from homeassistant.const import Platform

# Integration constants
DOMAIN = "comelit_vedo"
MANUFACTURER = "Comelit"
PLATFORMS: list[Platform] = [
    Platform.ALARM_CONTROL_PANEL,
    Platform.BINARY_SENSOR,
]

# Configuration keys
CONF_ALARM_ADDRESS = "alarm_address"
CONF_ALARM_PORT = "alarm_port"
CONF_ALARM_CODE = "alarm_code"
CONF_MAP_SENSORS = "map_sensors"
CONF_UPDATE_INTERVAL = "update_interval"
CONF_TIMEOUT = "timeout"
CONF_AWAY_AREAS = "away_areas"
CONF_NIGHT_AREAS = "night_areas"
CONF_HOME_AREAS = "home_areas"

# Configuration defaults
DEFAULT_PORT = 80
DEFAULT_UPDATE_INTERVAL = 5
DEFAULT_TIMEOUT = 10

# Keys of the data returned by the VEDO API
ALARM_AREAS = "alarm_areas"
ALARM_ZONES = "alarm_zones"

# Comelit zone statuses
ZONE_OPEN_STATUSES = {"open", "alarm"}
ZONE_FAULT_STATUSES = {"sabotated", "faulty"}
