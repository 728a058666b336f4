"""Tiko app data model."""

from __future__ import annotations

import logging

from ..const import TIKO_MODES

_LOGGER = logging.getLogger(__name__)


class TikoRoom:
    """Represent a Tiko room (heating zone) from the API."""

    id: int
    name: str

    current_temperature: float | None
    target_temperature: float | None
    humidity: float | None

    # Mutually exclusive override flags, keyed by remote mode name.
    modes: dict[str, bool]

    def __init__(self, room_info: dict) -> None:
        """Initialize the room from Tiko's json blob."""
        self.id = int(room_info["id"])

        self.update_data(room_info)

    def update_data(self, room_info: dict) -> None:
        """Update the room data from a Json object."""

        self.name = room_info["name"]
        self.current_temperature = _to_float(room_info.get("currentTemperatureDegrees"))
        self.target_temperature = _to_float(room_info.get("targetTemperatureDegrees"))
        self.humidity = _to_float(room_info.get("humidity"))

        mode_data = room_info.get("mode") or {}
        self.modes = {mode: bool(mode_data.get(mode)) for mode in TIKO_MODES}

    def current_mode(self) -> str | None:
        """Return the active override mode, or None when there is none.

        Flags are scanned in TIKO_MODES order and the first one set wins.
        """
        active = [mode for mode in TIKO_MODES if self.modes.get(mode)]

        if not active:
            return None

        if len(active) > 1:
            _LOGGER.warning(
                "Room %s reports several active modes %s, using %s",
                self.name,
                active,
                active[0],
            )

        return active[0]


def _to_float(value) -> float | None:
    if value is None:
        return None

    return float(value)
