"""Tiko HA base entity."""
from __future__ import annotations

from homeassistant.helpers.device_registry import DeviceInfo
from homeassistant.helpers.entity import Entity

from .api.tiko_room import TikoRoom
from .const import DOMAIN, TIKO_MANUFACTURER, TIKO_MODEL


class TikoRoomEntity(Entity):
    """Base class for Tiko room entities."""

    def __init__(
        self,
        room: TikoRoom,
        name: str,
        unique_id: str,
    ) -> None:
        """Initialize the entity."""
        self._room_id = room.id
        self._room_name = room.name
        self._unique_id = f"tiko-{unique_id}"
        self._name = name

    @property
    def unique_id(self):
        """Return the unique id."""
        return self._unique_id

    @property
    def name(self):
        """Return the name."""
        return self._name

    @property
    def device_info(self) -> DeviceInfo:
        """Return a device description for device registry."""
        return DeviceInfo(
            identifiers={(DOMAIN, f"{self._room_id}")},
            manufacturer=TIKO_MANUFACTURER,
            model=TIKO_MODEL,
            name=self._room_name,
            serial_number=str(self._room_id),
        )
