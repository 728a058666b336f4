"""Async access to the rooms of one Tiko property."""

from __future__ import annotations

import logging

from homeassistant.core import HomeAssistant

from .api.api_wrapper import ApiResponse, TikoAPI
from .api.exceptions import TikoCommunicationError
from .api.tiko_room import TikoRoom

_LOGGER = logging.getLogger(__name__)


class TikoRoomManager:
    """Room Manager.

    Runs the blocking Tiko client in the executor. Every call goes to the
    remote service; no room state is kept here.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        tiko_api: TikoAPI,
        property_id: int,
    ) -> None:
        """Initialize the room manager."""
        self.hass = hass
        self.tiko_api = tiko_api
        self.property_id = property_id

    async def async_discover_rooms(self) -> list[TikoRoom]:
        """Retrieve the rooms of the property.

        Raises TikoCommunicationError when Tiko cannot be reached.
        """

        _LOGGER.debug("Discovering rooms of property %s", self.property_id)

        response: ApiResponse = await self.hass.async_add_executor_job(
            self.tiko_api.get_rooms, self.property_id
        )

        if not response.success:
            _LOGGER.error(
                "Unable to get Tiko rooms. Error: %s", response.error_message
            )
            raise TikoCommunicationError("Unable to discover Tiko rooms")

        for room in response.data:
            _LOGGER.debug("Found room %s [%s]", room.name, room.id)

        return response.data

    async def async_get_room(self, room_id: int) -> ApiResponse:
        """Fetch a fresh snapshot of a room."""
        return await self.hass.async_add_executor_job(
            self.tiko_api.get_room, self.property_id, room_id
        )

    async def async_set_room_mode(self, room_id: int, mode: str | None) -> ApiResponse:
        """Set or clear the mode of a room."""
        return await self.hass.async_add_executor_job(
            self.tiko_api.set_room_mode, self.property_id, room_id, mode
        )

    async def async_set_target_temperature(
        self, room_id: int, degrees: int
    ) -> ApiResponse:
        """Set the target temperature of a room."""
        return await self.hass.async_add_executor_job(
            self.tiko_api.set_target_temperature, self.property_id, room_id, degrees
        )
