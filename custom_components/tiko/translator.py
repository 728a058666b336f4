"""Translation between the Home Assistant thermostat and Tiko room modes.

Home Assistant sees a thermostat with a target temperature and an on/off
heating state. Tiko sees a temperature plus a set of exclusive modes. Some
target temperatures are reserved to select a mode instead of a setpoint:

    10 -> disableHeating    11 -> frost    12 -> sleep
    13 -> clear mode        30 -> comfort
    14..29 -> clear mode, then set that temperature
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
import logging
from typing import Protocol

from .api.api_wrapper import ApiErrorKind, ApiResponse
from .api.exceptions import TikoCommunicationError
from .api.tiko_room import TikoRoom
from .const import (
    MODE_COMFORT,
    MODE_DISABLE_HEATING,
    MODE_FROST,
    MODE_SLEEP,
    ROOM_SETPOINT_MAX,
    ROOM_SETPOINT_MIN,
    ROOM_TEMP_MIN,
    TIKO_OFF_MODES,
)

_LOGGER = logging.getLogger(__name__)


class HeatingState(Enum):
    """On/off heating state as shown to Home Assistant."""

    OFF = "off"
    HEAT = "heat"


@dataclass(frozen=True)
class TemperatureAction:
    """Remote calls needed for a requested target temperature."""

    mode: str | None
    set_temperature: bool


@dataclass(frozen=True)
class RoomState:
    """Thermostat view of one room snapshot."""

    target_temperature: float
    current_temperature: float | None
    current_humidity: float | None
    heating_state: HeatingState
    mode: str | None


# Exact reserved values. Adding a mode only needs a new row here.
TEMPERATURE_ACTIONS: dict[int, TemperatureAction] = {
    10: TemperatureAction(MODE_DISABLE_HEATING, set_temperature=False),
    11: TemperatureAction(MODE_FROST, set_temperature=False),
    12: TemperatureAction(MODE_SLEEP, set_temperature=False),
    13: TemperatureAction(None, set_temperature=False),
    30: TemperatureAction(MODE_COMFORT, set_temperature=False),
}

SETPOINT_ACTION = TemperatureAction(None, set_temperature=True)

COMMUNICATION_ERROR_KINDS = frozenset(
    [ApiErrorKind.CANNOT_CONNECT, ApiErrorKind.INVALID_AUTH, ApiErrorKind.API_ERROR]
)


class RoomClient(Protocol):
    """Remote side used by the translator."""

    async def async_get_room(self, room_id: int) -> ApiResponse:
        """Fetch a room snapshot."""

    async def async_set_room_mode(self, room_id: int, mode: str | None) -> ApiResponse:
        """Set or clear a room mode."""

    async def async_set_target_temperature(
        self, room_id: int, degrees: int
    ) -> ApiResponse:
        """Set a room temperature."""


def encode_target_temperature(value: float) -> TemperatureAction | None:
    """Map a requested target temperature to remote calls, None if invalid."""

    if isinstance(value, bool) or not float(value).is_integer():
        return None

    temperature = int(value)

    if temperature in TEMPERATURE_ACTIONS:
        return TEMPERATURE_ACTIONS[temperature]

    if ROOM_SETPOINT_MIN <= temperature <= ROOM_SETPOINT_MAX:
        return SETPOINT_ACTION

    return None


def decode_target_temperature(room: TikoRoom) -> float:
    """Return the room target temperature, never below the 10 degrees floor."""

    if room.target_temperature is None or room.target_temperature < ROOM_TEMP_MIN:
        return ROOM_TEMP_MIN

    return room.target_temperature


def heating_state_for_mode(mode: str | None) -> HeatingState:
    """Classify a room mode as on or off."""

    if mode in TIKO_OFF_MODES:
        return HeatingState.OFF

    return HeatingState.HEAT


def decode_heating_state(room: TikoRoom) -> HeatingState:
    """Classify the active room mode as on or off."""
    return heating_state_for_mode(room.current_mode())


def decode_room_state(room: TikoRoom) -> RoomState:
    """Derive everything the thermostat shows from one snapshot."""
    mode = room.current_mode()

    return RoomState(
        target_temperature=decode_target_temperature(room),
        current_temperature=room.current_temperature,
        current_humidity=room.humidity,
        heating_state=heating_state_for_mode(mode),
        mode=mode,
    )


def encode_heating_state(state) -> str | None:
    """Return the room mode for a requested heating state."""

    if state == HeatingState.OFF:
        return MODE_DISABLE_HEATING

    return None


def classify_response(response: ApiResponse, action: str) -> None:
    """Raise TikoCommunicationError when the response reports a failure."""

    if response.success:
        return

    if response.error_kind in COMMUNICATION_ERROR_KINDS:
        _LOGGER.error(
            "An error occurred while trying to %s: %s",
            action,
            response.error_message,
        )
        raise TikoCommunicationError(f"Unable to {action}")

    raise ValueError(f"Failed response without error kind: {response!r}")


class ModeTranslator:
    """Reads and writes one Tiko room in Home Assistant thermostat terms."""

    def __init__(
        self,
        client: RoomClient,
        room_id: int,
        name: str,
        push_target_temperature: Callable[[float], Awaitable[None]] | None = None,
    ) -> None:
        """Initialize the translator for a room."""
        self.client = client
        self.room_id = room_id
        self.name = name
        self.push_target_temperature = push_target_temperature

    async def async_get_room(self, action: str) -> TikoRoom:
        """Fetch a fresh room snapshot."""
        response = await self.client.async_get_room(self.room_id)
        classify_response(response, action)

        return response.data

    async def async_get_state(self, action: str) -> RoomState:
        """Fetch a fresh snapshot and derive the thermostat state from it."""
        state = decode_room_state(await self.async_get_room(action))

        _LOGGER.debug("GET state for room %s: %s", self.name, state)

        return state

    async def async_get_target_temperature(self) -> float:
        """Read the target temperature."""
        state = await self.async_get_state("get target temperature")
        return state.target_temperature

    async def async_get_current_temperature(self) -> float | None:
        """Read the measured temperature, as reported."""
        state = await self.async_get_state("get current temperature")
        return state.current_temperature

    async def async_get_heating_state(self) -> HeatingState:
        """Read the heating state, used for both target and current state."""
        state = await self.async_get_state(f"get mode for room {self.name}")
        return state.heating_state

    async def async_set_target_temperature(self, value: float) -> None:
        """Apply a requested target temperature.

        Invalid values are logged and dropped without error.
        """
        action = encode_target_temperature(value)

        if action is None:
            _LOGGER.warning(
                "Invalid target temperature %s for room %s. Must be 10-13 or 14-30",
                value,
                self.name,
            )
            return

        _LOGGER.debug(
            "SET target temperature for room %s to %s (mode: %s, set temperature: %s)",
            self.name,
            value,
            action.mode,
            action.set_temperature,
        )

        # The mode goes first, it may change the temperature on the remote side.
        response = await self.client.async_set_room_mode(self.room_id, action.mode)
        classify_response(response, "set target temperature")

        if action.set_temperature:
            response = await self.client.async_set_target_temperature(
                self.room_id, int(value)
            )
            classify_response(response, "set target temperature")

    async def async_set_heating_state(self, state) -> None:
        """Apply a requested heating state and push back the target temperature."""
        mode = encode_heating_state(state)

        _LOGGER.debug("SET mode for room %s to %s as %s", self.name, state, mode)

        response = await self.client.async_set_room_mode(self.room_id, mode)
        classify_response(response, f"set mode {mode} for room {self.name}")

        target_temperature = await self.async_get_target_temperature()

        if self.push_target_temperature is not None:
            await self.push_target_temperature(target_temperature)
