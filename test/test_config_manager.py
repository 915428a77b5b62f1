"""
Unit tests for ConfigManager.
"""

import pytest

from setli.config_manager import CONFIG_GROUPS, CONFIG_SCHEMA, ConfigManager


@pytest.fixture
def config_manager():
    """Create a ConfigManager isolated from the real environment."""
    return ConfigManager(environ={})


def test_get_default(config_manager):
    """Test getting default configuration values."""
    assert config_manager.get("obs_host") == "localhost"
    assert config_manager.get("obs_port") == "4455"
    assert config_manager.get("font_size") == "300"


def test_environment_override():
    config_manager = ConfigManager(environ={"SETLI_OBS_HOST": "studio", "SETLI_WEB_PORT": "9000"})
    assert config_manager.get("obs_host") == "studio"
    assert config_manager.get_int("web_port") == 9000


def test_unknown_environment_keys_ignored():
    config_manager = ConfigManager(environ={"SETLI_SOMETHING_ELSE": "x"})
    assert config_manager.get("something_else") is None


def test_set_and_get(config_manager):
    """Test setting and getting configuration values."""
    config_manager.set("obs_host", "10.0.0.5")
    assert config_manager.get("obs_host") == "10.0.0.5"

    config_manager.set("test_key", "test_value")
    assert config_manager.get("test_key") == "test_value"


def test_empty_value_uses_default(config_manager):
    assert config_manager.get("obs_password") is None
    assert config_manager.get("obs_password", "fallback") == "fallback"


def test_get_int(config_manager):
    """Test getting integer configuration values."""
    config_manager.set("test_int", "42")
    assert config_manager.get_int("test_int") == 42

    # Test with default
    assert config_manager.get_int("nonexistent", default=10) == 10

    # Test with invalid value
    config_manager.set("invalid_int", "not_a_number")
    assert config_manager.get_int("invalid_int", default=0) == 0


def test_get_bool(config_manager):
    """Test getting boolean configuration values."""
    assert config_manager.get_bool("auto_connect") is False

    for value in ("true", "1", "yes", "on", "TRUE"):
        config_manager.set("auto_connect", value)
        assert config_manager.get_bool("auto_connect") is True

    config_manager.set("auto_connect", "off")
    assert config_manager.get_bool("auto_connect") is False


def test_get_all_masks_password(config_manager):
    config_manager.set("obs_password", "hunter2")
    values = config_manager.get_all()
    assert values["obs_password"] == "********"
    assert config_manager.get("obs_password") == "hunter2"


def test_full_config(config_manager):
    full = config_manager.get_full_config()
    assert set(full) == {"values", "schema", "groups"}
    assert set(full["schema"]) == set(CONFIG_SCHEMA)
    for key_def in full["schema"].values():
        assert key_def["group"] in CONFIG_GROUPS
        # Display metadata only; nothing edits config over the API
        assert set(key_def) == {"group", "label", "description"}
