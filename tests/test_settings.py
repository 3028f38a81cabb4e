# MIT License
#
# Copyright (c) 2025 Democratize Technology
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""
Tests for the settings management system.

Tests cover:
- Schema defaults and constraints
- Environment variable loading and type conversion
- Environment profiles
- Settings file loading
- Runtime updates and cross-field validation
- Validator defaults read from settings
"""

import json
import os
from unittest.mock import patch

from pydantic import ValidationError
import pytest

from microgateway_config.constants import ValidatorDefaults
from microgateway_config.settings import (
    DEFAULT_SETTINGS,
    ConfigManager,
    SettingsSchema,
    SettingsValidationError,
    SettingsValidator,
)
from microgateway_config.validator import ConfigValidator

pytestmark = pytest.mark.settings


class TestSettingsSchema:
    """Schema defaults and constraints."""

    def test_default_settings_are_valid(self):
        schema = SettingsSchema()
        validator = SettingsValidator()

        validator.validate_settings(schema)

        assert schema.redis.host == "127.0.0.1"
        assert schema.redis.port == 6379
        assert schema.validator.min_refresh_interval == 3_600_000
        assert schema.validator.no_rule_match_actions == ["allow", "deny", "log"]
        assert schema.validator.proxy_env_vars[0] == "HTTPS_PROXY"

    def test_port_range(self):
        with pytest.raises(ValidationError):
            SettingsSchema(redis={"port": 70000})

    def test_blank_action_rejected(self):
        with pytest.raises(ValidationError):
            SettingsSchema(validator={"no_rule_match_actions": ["allow", "  "]})

    def test_log_level_normalized(self):
        assert SettingsSchema(logging={"level": "debug"}).logging.level == "DEBUG"


class TestEnvironmentVariableLoading:
    """Environment variable loading and type conversion."""

    def test_integer_and_string_conversion(self, fresh_settings):
        with patch.dict(os.environ, {"MGC_REDIS_HOST": "cache.internal", "MGC_REDIS_PORT": "6380"}):
            fresh_settings.reload_configuration()

            assert fresh_settings.config.redis.host == "cache.internal"
            assert fresh_settings.config.redis.port == 6380

    def test_float_conversion(self, fresh_settings):
        with patch.dict(os.environ, {"MGC_REDIS_SOCKET_TIMEOUT_SECONDS": "2.5"}):
            fresh_settings.reload_configuration()

            assert fresh_settings.config.redis.socket_timeout_seconds == 2.5

    def test_list_conversion(self, fresh_settings):
        with patch.dict(os.environ, {"MGC_NO_RULE_MATCH_ACTIONS": "allow, deny,"}):
            fresh_settings.reload_configuration()

            assert fresh_settings.config.validator.no_rule_match_actions == ["allow", "deny"]

    def test_boolean_conversion(self, fresh_settings):
        with patch.dict(os.environ, {"MGC_DEBUG_MODE": "true"}):
            fresh_settings.reload_configuration()
            assert fresh_settings.config.debug_mode is True

        with patch.dict(os.environ, {"MGC_DEBUG_MODE": "false"}):
            fresh_settings.reload_configuration()
            assert fresh_settings.config.debug_mode is False

    def test_unconvertible_value_falls_back_to_default(self, fresh_settings):
        with patch.dict(os.environ, {"MGC_REDIS_PORT": "not_a_port"}):
            fresh_settings.reload_configuration()

            assert fresh_settings.config.redis.port == DEFAULT_SETTINGS.redis.port

    def test_out_of_range_value_rejected(self, fresh_settings):
        with patch.dict(os.environ, {"MGC_REDIS_PORT": "70000"}):
            with pytest.raises(SettingsValidationError):
                fresh_settings.reload_configuration()

    def test_loaded_from_env_flag(self, fresh_settings):
        assert fresh_settings.get_config_summary()["loaded_from_env"] is False

        with patch.dict(os.environ, {"MGC_REDIS_DB": "4"}):
            fresh_settings.reload_configuration()
            assert fresh_settings.get_config_summary()["loaded_from_env"] is True


class TestEnvironmentProfiles:
    def test_development_profile(self, fresh_settings):
        with patch.dict(os.environ, {"MGC_ENVIRONMENT": "development"}):
            fresh_settings.reload_configuration()

            assert fresh_settings.config.environment == "development"
            assert fresh_settings.config.debug_mode is True
            assert fresh_settings.config.logging.level == "DEBUG"

    def test_explicit_env_value_beats_profile(self, fresh_settings):
        with patch.dict(os.environ, {"MGC_ENVIRONMENT": "development", "MGC_LOG_LEVEL": "info"}):
            fresh_settings.reload_configuration()

            assert fresh_settings.config.logging.level == "INFO"

    def test_production_profile(self, fresh_settings):
        with patch.dict(os.environ, {"MGC_ENVIRONMENT": "production"}):
            fresh_settings.reload_configuration()

            assert fresh_settings.config.debug_mode is False
            assert fresh_settings.config.logging.level == "WARNING"


class TestSettingsFileLoading:
    def test_yaml_settings_file(self, fresh_settings, tmp_path):
        settings_file = tmp_path / "settings.yaml"
        settings_file.write_text(
            "redis:\n  host: redis.internal\n  password: s3cret\nvalidator:\n  min_refresh_interval: 60000\n",
        )

        with patch.object(ConfigManager, "_settings_paths", return_value=[settings_file]):
            fresh_settings.reload_configuration()

        assert fresh_settings.config.redis.host == "redis.internal"
        assert fresh_settings.config.redis.port == 6379
        assert fresh_settings.config.validator.min_refresh_interval == 60000
        assert fresh_settings.get_config_summary()["loaded_from_file"] == str(settings_file)

    def test_json_settings_file(self, fresh_settings, tmp_path):
        settings_file = tmp_path / "settings.json"
        settings_file.write_text(json.dumps({"redis": {"db": 5}}))

        with patch.object(ConfigManager, "_settings_paths", return_value=[settings_file]):
            fresh_settings.reload_configuration()

        assert fresh_settings.config.redis.db == 5

    def test_environment_overrides_file(self, fresh_settings, tmp_path):
        settings_file = tmp_path / "settings.json"
        settings_file.write_text(json.dumps({"redis": {"db": 5}}))

        with patch.object(ConfigManager, "_settings_paths", return_value=[settings_file]):
            with patch.dict(os.environ, {"MGC_REDIS_DB": "7"}):
                fresh_settings.reload_configuration()

        assert fresh_settings.config.redis.db == 7

    def test_broken_file_is_skipped(self, fresh_settings, tmp_path):
        broken = tmp_path / "settings.json"
        broken.write_text("{not json")

        with patch.object(ConfigManager, "_settings_paths", return_value=[broken]):
            fresh_settings.reload_configuration()

        assert fresh_settings.config.redis.db == DEFAULT_SETTINGS.redis.db
        assert fresh_settings.get_config_summary()["loaded_from_file"] is None


class TestRuntimeUpdates:
    def test_update_config(self, fresh_settings):
        fresh_settings.update_config(redis__host="cache.internal", validator__min_refresh_interval=1000)

        assert fresh_settings.config.redis.host == "cache.internal"
        assert fresh_settings.validator.min_refresh_interval == 1000

    def test_invalid_update_rejected(self, fresh_settings):
        with pytest.raises(SettingsValidationError):
            fresh_settings.update_config(redis__port=0)

        assert fresh_settings.config.redis.port == 6379

    def test_duplicate_actions_rejected(self, fresh_settings):
        with pytest.raises(SettingsValidationError):
            fresh_settings.update_config(validator__no_rule_match_actions=["allow", "ALLOW"])

    def test_config_property_returns_copy(self, fresh_settings):
        snapshot = fresh_settings.config
        snapshot.redis.host = "changed.internal"

        assert fresh_settings.config.redis.host == "127.0.0.1"


class TestSettingsValidator:
    def test_remote_redis_without_password_is_recommended_against(self):
        validator = SettingsValidator()
        validator.validate_settings(SettingsSchema(redis={"host": "redis.internal"}))

        assert any("no password" in r for r in validator.recommendations)

    def test_debug_mode_in_production_warns(self):
        validator = SettingsValidator()
        validator.validate_settings(SettingsSchema(debug_mode=True))

        assert any("Debug mode" in w for w in validator.warnings)

    def test_small_refresh_interval_warns(self):
        validator = SettingsValidator()
        validator.validate_settings(SettingsSchema(validator={"min_refresh_interval": 5}))

        summary = validator.get_validation_summary()
        assert summary["warning_count"] == 1
        assert summary["status"] == "valid"


class TestExport:
    def test_export_masks_password(self, fresh_settings):
        fresh_settings.update_config(redis__password="s3cret")

        exported = json.loads(fresh_settings.export_config())

        assert exported["redis"]["password"] == "***"
        assert "s3cret" not in fresh_settings.export_config("yaml")

    def test_env_var_help(self, fresh_settings):
        help_text = fresh_settings.get_env_var_help()

        assert help_text["MGC_REDIS_HOST"] == "Type: str, Path: redis.host"
        assert help_text["MGC_NO_RULE_MATCH_ACTIONS"] == "Type: list, Path: validator.no_rule_match_actions"


class TestValidatorDefaults:
    """The validator reads its deployment constants from settings."""

    def test_defaults_follow_settings(self, fresh_settings):
        fresh_settings.update_config(validator__no_rule_match_actions=["ALLOW", "DENY"])

        assert ValidatorDefaults.NO_RULE_MATCH_ACTIONS == ("ALLOW", "DENY")
        ConfigValidator(environ={}).validate({"accesscontrol": {"noRuleMatchAction": "deny"}})

    def test_min_refresh_interval_follows_settings(self, fresh_settings):
        fresh_settings.update_config(validator__min_refresh_interval=1000)

        validator = ConfigValidator(environ={})
        validator.validate({"edge_config": {"refresh_interval": 1000}})
        assert validator.min_refresh_interval == ValidatorDefaults.MIN_REFRESH_INTERVAL == 1000
