"""Handles communications with Tiko's API."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Any

import requests

from ..const import API_TIMEOUT_SECONDS, API_URL
from .tiko_room import TikoRoom

_LOGGER = logging.getLogger(__name__)

ROOM_FIELDS = """
    id
    name
    currentTemperatureDegrees
    targetTemperatureDegrees
    humidity
    mode {
        boost
        absence
        frost
        disableHeating
        sleep
        comfort
    }
"""

LOGIN_MUTATION = """
mutation LogIn($email: String!, $password: String!) {
    logIn(input: {email: $email, password: $password, langCode: "en", retainSession: true}) {
        token
        user {
            id
            properties {
                id
                name
            }
        }
    }
}
"""

ROOMS_QUERY = (
    """
query GetRooms($propertyId: Int!) {
    property(id: $propertyId) {
        rooms {"""
    + ROOM_FIELDS
    + """}
    }
}
"""
)

ROOM_QUERY = (
    """
query GetRoom($propertyId: Int!, $roomId: Int!) {
    property(id: $propertyId) {
        room(id: $roomId) {"""
    + ROOM_FIELDS
    + """}
    }
}
"""
)

SET_ROOM_MODE_MUTATION = """
mutation SetRoomMode($propertyId: Int!, $roomId: Int!, $mode: String) {
    setRoomMode(input: {propertyId: $propertyId, roomId: $roomId, mode: $mode}) {
        id
    }
}
"""

SET_ROOM_TEMPERATURE_MUTATION = """
mutation SetRoomTemperature($propertyId: Int!, $roomId: Int!, $temperature: Float!) {
    setRoomAdjustTemperatureDegrees(input: {propertyId: $propertyId, roomId: $roomId, temperature: $temperature}) {
        id
    }
}
"""


class ApiErrorKind(Enum):
    """Kind of failure reported by the Tiko API."""

    CANNOT_CONNECT = "cannot_connect"
    INVALID_AUTH = "invalid_auth"
    API_ERROR = "api_error"


@dataclass
class ApiResponse:
    """Outcome of a Tiko API call."""

    success: bool
    data: Any = None
    error_kind: ApiErrorKind | None = None
    error_message: str | None = None

    @classmethod
    def failure(cls, error_kind: ApiErrorKind, error_message: str) -> ApiResponse:
        """Build a failed response."""
        return cls(False, error_kind=error_kind, error_message=error_message)


class TikoAPI:
    """Blocking client for the Tiko GraphQL API."""

    def __init__(self, email: str, password: str) -> None:
        """Initialize the client, without logging in."""
        self.email = email
        self.password = password

        self.auth_token: str | None = None
        self.user_id: int | None = None
        self.properties: dict[int, str] = {}

        self._session = requests.Session()

    def is_logged_in(self) -> bool:
        """Return True when a session token is held."""
        return self.auth_token is not None

    def initialize_authentication(self) -> ApiResponse:
        """Log the user in and remember the session token."""

        response = self._send_request(
            LOGIN_MUTATION,
            {"email": self.email, "password": self.password},
            authenticated=False,
        )

        if not response.success:
            return response

        login_data = response.data.get("logIn") or {}

        if "token" not in login_data or not login_data["token"]:
            return ApiResponse.failure(
                ApiErrorKind.INVALID_AUTH, "Login did not return a session token"
            )

        user = login_data.get("user") or {}

        self.auth_token = login_data["token"]
        self.user_id = user.get("id")
        self.properties = {
            int(prop["id"]): prop.get("name") or str(prop["id"])
            for prop in user.get("properties") or []
        }

        _LOGGER.debug(
            "Logged in to Tiko as user %s with %s properties",
            self.user_id,
            len(self.properties),
        )

        return ApiResponse(True, self.auth_token)

    def get_properties(self) -> ApiResponse:
        """Retrieve the properties of the account as {id: name}."""

        auth_response = self._ensure_valid_auth()

        if not auth_response.success:
            return auth_response

        if not self.properties:
            return ApiResponse.failure(
                ApiErrorKind.API_ERROR, "No Tiko properties found"
            )

        return ApiResponse(True, dict(self.properties))

    def get_rooms(self, property_id: int) -> ApiResponse:
        """Retrieve all the rooms of a property."""

        response = self._send_request(ROOMS_QUERY, {"propertyId": property_id})

        if not response.success:
            return response

        property_data = response.data.get("property")

        if not property_data:
            return ApiResponse.failure(
                ApiErrorKind.API_ERROR, f"Property {property_id} not found"
            )

        return ApiResponse(
            True, [TikoRoom(room) for room in property_data.get("rooms") or []]
        )

    def get_room(self, property_id: int, room_id: int) -> ApiResponse:
        """Retrieve a snapshot of one room."""

        response = self._send_request(
            ROOM_QUERY, {"propertyId": property_id, "roomId": room_id}
        )

        if not response.success:
            return response

        room_data = (response.data.get("property") or {}).get("room")

        if not room_data:
            return ApiResponse.failure(
                ApiErrorKind.API_ERROR,
                f"Room {room_id} not found in property {property_id}",
            )

        return ApiResponse(True, TikoRoom(room_data))

    def set_room_mode(
        self, property_id: int, room_id: int, mode: str | None
    ) -> ApiResponse:
        """Set the room mode. A mode of None clears any override."""

        return self._send_request(
            SET_ROOM_MODE_MUTATION,
            {"propertyId": property_id, "roomId": room_id, "mode": mode},
        )

    def set_target_temperature(
        self, property_id: int, room_id: int, degrees: int
    ) -> ApiResponse:
        """Set the room target temperature."""

        return self._send_request(
            SET_ROOM_TEMPERATURE_MUTATION,
            {"propertyId": property_id, "roomId": room_id, "temperature": degrees},
        )

    def _ensure_valid_auth(self) -> ApiResponse:
        """Ensure there is a session token present."""

        if self.is_logged_in():
            return ApiResponse(True, self.auth_token)

        return self.initialize_authentication()

    def _send_request(
        self,
        query: str,
        variables: dict[str, Any],
        authenticated: bool = True,
    ) -> ApiResponse:
        """Send a GraphQL request and classify the outcome."""

        headers = {"Content-Type": "application/json"}

        if authenticated:
            auth_response = self._ensure_valid_auth()

            if not auth_response.success:
                return auth_response

            headers["Authorization"] = f"token {self.auth_token}"

        _LOGGER.debug("Sending Tiko request with variables: %s", variables)

        try:
            response = self._session.post(
                API_URL,
                json={"query": query, "variables": variables},
                headers=headers,
                timeout=API_TIMEOUT_SECONDS,
            )
        except requests.RequestException as ex:
            _LOGGER.error("No response from %s: %s", API_URL, ex)
            return ApiResponse.failure(ApiErrorKind.CANNOT_CONNECT, str(ex))

        if response.status_code in (401, 403):
            _LOGGER.error("Tiko rejected the credentials (%s)", response.status_code)
            self.auth_token = None
            return ApiResponse.failure(
                ApiErrorKind.INVALID_AUTH,
                f"Authentication failed with status {response.status_code}",
            )

        if response.status_code != 200:
            _LOGGER.error("Tiko request returned %s", response.status_code)
            return ApiResponse.failure(
                ApiErrorKind.API_ERROR,
                f"Unexpected status {response.status_code}",
            )

        try:
            payload = response.json()
        except ValueError:
            return ApiResponse.failure(
                ApiErrorKind.API_ERROR, "Invalid JSON in Tiko response"
            )

        if payload.get("errors"):
            message = payload["errors"][0].get("message", "Unknown error")
            _LOGGER.error("Tiko request failed: %s", message)
            return ApiResponse.failure(ApiErrorKind.API_ERROR, message)

        return ApiResponse(True, payload.get("data") or {})
