"""Config flow for Tiko integration."""
from __future__ import annotations

import logging
from typing import Any

import voluptuous as vol

from homeassistant import config_entries
from homeassistant.data_entry_flow import FlowResult

from .api.api_wrapper import ApiErrorKind, ApiResponse, TikoAPI
from .api.exceptions import APIError, CannotConnect, InvalidAuth
from .const import CONF_EMAIL, CONF_PASSWORD, CONF_PROPERTY, DOMAIN

_LOGGER = logging.getLogger(__name__)


STEP_USER_DATA_SCHEMA = vol.Schema(
    {
        vol.Required(
            CONF_EMAIL,
        ): str,
        vol.Required(
            CONF_PASSWORD,
        ): str,
    }
)

ERROR_KIND_EXCEPTIONS = {
    ApiErrorKind.CANNOT_CONNECT: CannotConnect,
    ApiErrorKind.INVALID_AUTH: InvalidAuth,
    ApiErrorKind.API_ERROR: APIError,
}


def validate_credentials(email: str, password: str) -> dict[int, str]:
    """Log in and return the properties of the account.

    Runs in the executor.
    """
    tiko_api = TikoAPI(email, password)

    login_response: ApiResponse = tiko_api.initialize_authentication()

    if not login_response.success:
        raise ERROR_KIND_EXCEPTIONS[login_response.error_kind](
            login_response.error_message
        )

    properties_response: ApiResponse = tiko_api.get_properties()

    if not properties_response.success:
        raise ERROR_KIND_EXCEPTIONS[properties_response.error_kind](
            properties_response.error_message
        )

    return properties_response.data


class ConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Handle the config flow for Tiko."""

    VERSION = 1

    def __init__(self) -> None:
        """Config flow init."""
        super().__init__()
        self.step_user_data: dict[str, Any] | None = None
        self.step_user_properties: dict[int, str] | None = None

    async def async_step_user(
        self, user_input: dict[str, Any] | None = None
    ) -> FlowResult:
        """Step: User credentials validation."""

        errors = {}

        if user_input is not None:
            try:
                properties = await self.hass.async_add_executor_job(
                    validate_credentials,
                    user_input[CONF_EMAIL],
                    user_input[CONF_PASSWORD],
                )
            except CannotConnect:
                errors["base"] = "cannot_connect"
            except InvalidAuth:
                errors["base"] = "invalid_auth"
            except APIError:
                errors["base"] = "unknown"
            else:
                self.step_user_data = user_input
                self.step_user_properties = properties

                return await self.async_step_property(None)

        return self.async_show_form(
            step_id="user", data_schema=STEP_USER_DATA_SCHEMA, errors=errors
        )

    async def async_step_property(self, user_input=None) -> FlowResult:
        """Select the property."""

        errors: dict[str, str] = {}

        if user_input and CONF_PROPERTY in user_input:
            assert self.step_user_data is not None
            assert self.step_user_properties is not None

            property_id = int(user_input[CONF_PROPERTY])

            await self.async_set_unique_id(str(property_id))
            self._abort_if_unique_id_configured()

            user_data = {
                CONF_PROPERTY: property_id,
                CONF_EMAIL: self.step_user_data[CONF_EMAIL],
                CONF_PASSWORD: self.step_user_data[CONF_PASSWORD],
            }

            return self.async_create_entry(
                title=self.step_user_properties[property_id],
                data=user_data,
            )

        step_schema = vol.Schema(
            {vol.Required(CONF_PROPERTY): vol.In(self.step_user_properties)}
        )

        return self.async_show_form(
            step_id="property", data_schema=step_schema, errors=errors
        )
