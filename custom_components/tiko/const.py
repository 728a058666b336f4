"""Constants for the Tiko integration."""

from datetime import timedelta
import logging

from homeassistant.const import Platform

LOGGER = logging.getLogger(__package__)

DOMAIN = "tiko"
PLATFORMS: list[str] = [Platform.CLIMATE]
CONF_EMAIL = "tiko_email"
CONF_PASSWORD = "tiko_password"
CONF_PROPERTY = "tiko_property"

TIKO_MANUFACTURER = "Tiko"
TIKO_MODEL = "Tiko"

TIKO_ROOM_MANAGER = "room_manager"

API_URL = "https://particuliers-tiko.fr/api/v3/graphql/"
API_TIMEOUT_SECONDS = 15

SCAN_INTERVAL = timedelta(seconds=60)

# Remote room modes. Order is the priority used when scanning the flags.
MODE_DISABLE_HEATING = "disableHeating"
MODE_FROST = "frost"
MODE_ABSENCE = "absence"
MODE_SLEEP = "sleep"
MODE_BOOST = "boost"
MODE_COMFORT = "comfort"

TIKO_MODES = [
    MODE_DISABLE_HEATING,
    MODE_FROST,
    MODE_ABSENCE,
    MODE_SLEEP,
    MODE_BOOST,
    MODE_COMFORT,
]

# Modes under which the room is reported as not heating.
TIKO_OFF_MODES = frozenset(
    [MODE_DISABLE_HEATING, MODE_FROST, MODE_ABSENCE, MODE_SLEEP]
)

ROOM_TEMP_MIN = 10
ROOM_TEMP_MAX = 30
ROOM_TEMP_STEP = 1

# Plain temperatures accepted by the remote service.
ROOM_SETPOINT_MIN = 14
ROOM_SETPOINT_MAX = 29

ATTR_TIKO_MODE = "tiko_mode"
