"""Shared fixtures for the Tiko tests."""

from __future__ import annotations

import pytest

from custom_components.tiko.api.api_wrapper import ApiErrorKind, ApiResponse
from custom_components.tiko.api.tiko_room import TikoRoom

TEST_ROOM_ID = 42
TEST_ROOM_NAME = "Living room"


def make_room(target=19.0, current=20.5, **modes) -> TikoRoom:
    """Build a room snapshot with the given mode flags set."""
    return TikoRoom(
        {
            "id": TEST_ROOM_ID,
            "name": TEST_ROOM_NAME,
            "currentTemperatureDegrees": current,
            "targetTemperatureDegrees": target,
            "humidity": 45.0,
            "mode": {
                "boost": False,
                "absence": False,
                "frost": False,
                "disableHeating": False,
                "sleep": False,
                "comfort": False,
                **modes,
            },
        }
    )


class FakeRoomClient:
    """In-memory room client that records the calls it receives."""

    def __init__(self, room: TikoRoom | None = None) -> None:
        self.room = room or make_room()
        self.calls: list[tuple] = []
        self.failures: dict[str, ApiResponse] = {}

    def fail(self, method: str, kind=ApiErrorKind.CANNOT_CONNECT, message="boom"):
        """Make the named method return a failed response."""
        self.failures[method] = ApiResponse.failure(kind, message)

    async def async_get_room(self, room_id):
        self.calls.append(("get_room", room_id))
        if "get_room" in self.failures:
            return self.failures["get_room"]
        return ApiResponse(True, self.room)

    async def async_set_room_mode(self, room_id, mode):
        self.calls.append(("set_room_mode", room_id, mode))
        if "set_room_mode" in self.failures:
            return self.failures["set_room_mode"]

        # Mimic the service: disabling heating drops the setpoint.
        modes = {key: False for key in self.room.modes}
        if mode is not None:
            modes[mode] = True
        self.room.modes = modes
        if mode == "disableHeating":
            self.room.target_temperature = 7.0
        return ApiResponse(True)

    async def async_set_target_temperature(self, room_id, degrees):
        self.calls.append(("set_target_temperature", room_id, degrees))
        if "set_target_temperature" in self.failures:
            return self.failures["set_target_temperature"]
        self.room.target_temperature = float(degrees)
        return ApiResponse(True)


@pytest.fixture
def room_client() -> FakeRoomClient:
    """Return a fake room client with a room in normal mode."""
    return FakeRoomClient()
