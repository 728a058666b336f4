"""Support for Tiko Climate."""

from __future__ import annotations

from typing import Any

from homeassistant.components.climate import (
    ClimateEntity,
    ClimateEntityFeature,
    HVACAction,
    HVACMode,
)
from homeassistant.config_entries import ConfigEntry
from homeassistant.const import ATTR_TEMPERATURE, UnitOfTemperature
from homeassistant.core import HomeAssistant
from homeassistant.exceptions import PlatformNotReady
from homeassistant.helpers.entity_platform import AddEntitiesCallback

from .api.exceptions import TikoCommunicationError
from .api.tiko_room import TikoRoom
from .const import (
    ATTR_TIKO_MODE,
    DOMAIN,
    LOGGER,
    ROOM_TEMP_MAX,
    ROOM_TEMP_MIN,
    ROOM_TEMP_STEP,
    SCAN_INTERVAL,
    TIKO_ROOM_MANAGER,
)
from .room_manager import TikoRoomManager
from .tiko_entity import TikoRoomEntity
from .translator import HeatingState, ModeTranslator

PARALLEL_UPDATES = 1

HVAC_MODE_TO_HEATING_STATE = {
    HVACMode.OFF: HeatingState.OFF,
    HVACMode.HEAT: HeatingState.HEAT,
}


async def async_setup_entry(
    hass: HomeAssistant, entry: ConfigEntry, async_add_entities: AddEntitiesCallback
) -> None:
    """Set up the room climate entities from the config entry."""
    room_manager: TikoRoomManager = hass.data[DOMAIN][entry.entry_id][
        TIKO_ROOM_MANAGER
    ]

    try:
        rooms = await room_manager.async_discover_rooms()
    except TikoCommunicationError as err:
        raise PlatformNotReady("Unable to discover Tiko rooms") from err

    async_add_entities(
        [TikoHaClimate(room, room_manager) for room in rooms],
        update_before_add=True,
    )


class TikoHaClimate(TikoRoomEntity, ClimateEntity):
    """Climate entity for a Tiko room."""

    _enable_turn_on_off_backwards_compatibility = False

    def __init__(self, room: TikoRoom, room_manager: TikoRoomManager) -> None:
        """Init the Climate entity."""

        super().__init__(room, name=room.name, unique_id=str(room.id))

        self.translator = ModeTranslator(
            room_manager,
            room.id,
            room.name,
            push_target_temperature=self._async_push_target_temperature,
        )

        self._target_temperature: float | None = None
        self._current_temperature: float | None = None
        self._current_humidity: float | None = None
        self._heating_state: HeatingState | None = None
        self._tiko_mode: str | None = None
        self._available = True

    @property
    def icon(self) -> str | None:
        """Icon of the entity."""
        return "mdi:radiator"

    @property
    def available(self) -> bool:
        """Return False when the last poll failed."""
        return self._available

    @property
    def temperature_unit(self) -> str:
        """Temperature unit."""
        return UnitOfTemperature.CELSIUS

    @property
    def target_temperature(self) -> float | None:
        """Return the target temperature."""
        return self._target_temperature

    @property
    def current_temperature(self) -> float | None:
        """Return the measured temperature."""
        return self._current_temperature

    @property
    def current_humidity(self) -> float | None:
        """Return the measured humidity."""
        return self._current_humidity

    @property
    def min_temp(self) -> float:
        """Minimum selectable temperature."""
        return ROOM_TEMP_MIN

    @property
    def max_temp(self) -> float:
        """Max selectable temperature."""
        return ROOM_TEMP_MAX

    @property
    def target_temperature_step(self) -> float | None:
        """Temperature step."""
        return ROOM_TEMP_STEP

    @property
    def supported_features(self) -> ClimateEntityFeature:
        """Flag supported features."""
        return (
            ClimateEntityFeature.TARGET_TEMPERATURE
            | ClimateEntityFeature.TURN_ON
            | ClimateEntityFeature.TURN_OFF
        )

    @property
    def hvac_modes(self) -> list[HVACMode]:
        """Return hvac modes available."""
        return [HVACMode.OFF, HVACMode.HEAT]

    @property
    def hvac_mode(self) -> HVACMode | None:
        """Return the current HVAC mode."""
        if self._heating_state is None:
            return None

        if self._heating_state == HeatingState.OFF:
            return HVACMode.OFF

        return HVACMode.HEAT

    @property
    def hvac_action(self) -> HVACAction | None:
        """Return the current HVAC action."""
        if self._heating_state is None:
            return None

        if self._heating_state == HeatingState.OFF:
            return HVACAction.OFF

        return HVACAction.HEATING

    @property
    def extra_state_attributes(self) -> dict[str, Any]:
        """Return the raw Tiko mode."""
        return {ATTR_TIKO_MODE: self._tiko_mode}

    async def async_update(self) -> None:
        """Fetch the room from Tiko."""
        try:
            state = await self.translator.async_get_state(
                f"update room {self._room_name}"
            )
        except TikoCommunicationError:
            self._available = False
            return

        self._available = True
        self._target_temperature = state.target_temperature
        self._current_temperature = state.current_temperature
        self._current_humidity = state.current_humidity
        self._heating_state = state.heating_state
        self._tiko_mode = state.mode

    async def async_set_temperature(self, **kwargs: Any) -> None:
        """Set new target temperature."""
        if (temperature := kwargs.get(ATTR_TEMPERATURE)) is None:
            return

        await self.translator.async_set_target_temperature(temperature)

        self.async_schedule_update_ha_state(force_refresh=True)

    async def async_set_hvac_mode(self, hvac_mode: HVACMode) -> None:
        """Set new target hvac mode."""

        LOGGER.debug("Setting HVAC mode to %s", hvac_mode)

        state = HVAC_MODE_TO_HEATING_STATE.get(hvac_mode)
        await self.translator.async_set_heating_state(state)

        self._heating_state = state or HeatingState.HEAT
        self.async_write_ha_state()

    async def async_turn_on(self) -> None:
        """Turn heating on."""
        await self.async_set_hvac_mode(HVACMode.HEAT)

    async def async_turn_off(self) -> None:
        """Turn heating off."""
        await self.async_set_hvac_mode(HVACMode.OFF)

    async def _async_push_target_temperature(self, target_temperature: float) -> None:
        """Store a target temperature derived after a mode change.

        The state is written by async_set_hvac_mode once the mode is known.
        """
        self._target_temperature = target_temperature
