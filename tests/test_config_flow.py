"""Tests for the Tiko config flow."""
from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

from homeassistant.data_entry_flow import AbortFlow
import pytest

from custom_components.tiko.api.api_wrapper import ApiErrorKind, ApiResponse
from custom_components.tiko.api.exceptions import APIError, CannotConnect, InvalidAuth
from custom_components.tiko.config_flow import ConfigFlow, validate_credentials
from custom_components.tiko.const import CONF_EMAIL, CONF_PASSWORD, CONF_PROPERTY


def test_validate_credentials_returns_properties():
    """Test valid credentials."""
    with patch("custom_components.tiko.config_flow.TikoAPI") as api_cls:
        api = api_cls.return_value
        api.initialize_authentication.return_value = ApiResponse(True, "token")
        api.get_properties.return_value = ApiResponse(True, {100: "Home"})

        assert validate_credentials("user@example.com", "secret") == {100: "Home"}

    api_cls.assert_called_once_with("user@example.com", "secret")


@pytest.mark.parametrize(
    ("kind", "exception"),
    [
        (ApiErrorKind.CANNOT_CONNECT, CannotConnect),
        (ApiErrorKind.INVALID_AUTH, InvalidAuth),
        (ApiErrorKind.API_ERROR, APIError),
    ],
)
def test_validate_credentials_login_errors(kind, exception):
    """Test login failures map to flow errors."""
    with patch("custom_components.tiko.config_flow.TikoAPI") as api_cls:
        api_cls.return_value.initialize_authentication.return_value = (
            ApiResponse.failure(kind, "nope")
        )

        with pytest.raises(exception):
            validate_credentials("user@example.com", "secret")


def test_validate_credentials_without_properties():
    """Test an account without properties."""
    with patch("custom_components.tiko.config_flow.TikoAPI") as api_cls:
        api = api_cls.return_value
        api.initialize_authentication.return_value = ApiResponse(True, "token")
        api.get_properties.return_value = ApiResponse.failure(
            ApiErrorKind.API_ERROR, "No Tiko properties found"
        )

        with pytest.raises(APIError):
            validate_credentials("user@example.com", "secret")


# =============================================================================
# Flow steps
# =============================================================================


USER_INPUT = {CONF_EMAIL: "user@example.com", CONF_PASSWORD: "secret"}


@pytest.fixture
def flow() -> ConfigFlow:
    """Return a config flow with the Home Assistant plumbing stubbed."""
    config_flow = ConfigFlow()
    config_flow.hass = MagicMock()
    config_flow.hass.async_add_executor_job = AsyncMock(
        side_effect=lambda func, *args: func(*args)
    )
    config_flow.async_show_form = MagicMock(
        side_effect=lambda **kwargs: {"type": "form", **kwargs}
    )
    config_flow.async_create_entry = MagicMock(
        side_effect=lambda **kwargs: {"type": "create_entry", **kwargs}
    )
    config_flow.async_set_unique_id = AsyncMock()
    config_flow._abort_if_unique_id_configured = MagicMock()
    return config_flow


@pytest.mark.asyncio
async def test_user_step_shows_form(flow: ConfigFlow):
    """Test the credentials form is shown first."""
    result = await flow.async_step_user(None)

    assert result["type"] == "form"
    assert result["step_id"] == "user"
    assert result["errors"] == {}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("exception", "error"),
    [
        (CannotConnect, "cannot_connect"),
        (InvalidAuth, "invalid_auth"),
        (APIError, "unknown"),
    ],
)
async def test_user_step_errors(flow: ConfigFlow, exception, error):
    """Test login failures are shown on the credentials form."""
    with patch(
        "custom_components.tiko.config_flow.validate_credentials",
        side_effect=exception("nope"),
    ):
        result = await flow.async_step_user(USER_INPUT)

    assert result["step_id"] == "user"
    assert result["errors"] == {"base": error}


@pytest.mark.asyncio
async def test_user_step_moves_to_property(flow: ConfigFlow):
    """Test valid credentials lead to the property choice."""
    with patch(
        "custom_components.tiko.config_flow.validate_credentials",
        return_value={100: "Home", 101: "Cottage"},
    ):
        result = await flow.async_step_user(USER_INPUT)

    assert result["step_id"] == "property"
    assert flow.step_user_properties == {100: "Home", 101: "Cottage"}


@pytest.mark.asyncio
async def test_property_step_creates_entry(flow: ConfigFlow):
    """Test choosing a property creates the entry."""
    flow.step_user_data = USER_INPUT
    flow.step_user_properties = {100: "Home"}

    result = await flow.async_step_property({CONF_PROPERTY: 100})

    assert result["type"] == "create_entry"
    assert result["title"] == "Home"
    assert result["data"] == {
        CONF_PROPERTY: 100,
        CONF_EMAIL: "user@example.com",
        CONF_PASSWORD: "secret",
    }
    flow.async_set_unique_id.assert_awaited_once_with("100")


@pytest.mark.asyncio
async def test_property_step_aborts_for_configured_property(flow: ConfigFlow):
    """Test a property can only be added once."""
    flow.step_user_data = USER_INPUT
    flow.step_user_properties = {100: "Home"}
    flow._abort_if_unique_id_configured.side_effect = AbortFlow("already_configured")

    with pytest.raises(AbortFlow) as err:
        await flow.async_step_property({CONF_PROPERTY: 100})

    assert err.value.reason == "already_configured"
    flow.async_set_unique_id.assert_awaited_once_with("100")
    flow.async_create_entry.assert_not_called()
