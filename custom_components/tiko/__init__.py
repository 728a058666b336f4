"""The Tiko integration."""
from __future__ import annotations

import logging

from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import ConfigEntryNotReady

from .api.api_wrapper import ApiResponse, TikoAPI
from .const import (
    CONF_EMAIL,
    CONF_PASSWORD,
    CONF_PROPERTY,
    DOMAIN,
    PLATFORMS,
    TIKO_ROOM_MANAGER,
)
from .room_manager import TikoRoomManager

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up Tiko from a config entry."""

    api = TikoAPI(entry.data[CONF_EMAIL], entry.data[CONF_PASSWORD])

    _LOGGER.debug("Room manager: Initializing auth")

    login_result: ApiResponse = await hass.async_add_executor_job(
        api.initialize_authentication
    )

    if not login_result.success:
        _LOGGER.error("Unable to authenticate to Tiko API: %s", login_result.error_message)
        raise ConfigEntryNotReady("Unable to connect to Tiko API.")

    hass.data.setdefault(DOMAIN, {})[entry.entry_id] = {
        TIKO_ROOM_MANAGER: TikoRoomManager(
            hass=hass,
            tiko_api=api,
            property_id=int(entry.data[CONF_PROPERTY]),
        ),
    }

    _LOGGER.debug("Room manager: Setup platforms")
    await hass.config_entries.async_forward_entry_setups(entry, PLATFORMS)

    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry."""
    unload_ok = await hass.config_entries.async_unload_platforms(entry, PLATFORMS)

    if unload_ok:
        hass.data[DOMAIN].pop(entry.entry_id)

        if not hass.data[DOMAIN]:
            hass.data.pop(DOMAIN)

    return unload_ok
