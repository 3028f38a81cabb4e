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

"""Gateway configuration validator.

Walks a fully merged gateway configuration in a fixed order and stops at the
first violated rule. Sections checked, in order:

- quota, spikearrest
- edgemicro.port, edge_config refresh/retry intervals
- quotas
- edgemicro logging, plugins, timeouts and Redis connection fields
- edge_config config cache and synchronizer mode
- edgemicro analytics, target error logging, accesscontrol, GET bodies
- edgemicro.proxy

Every failure names the offending field as ``config.<section>.<field>``.
"""

from collections.abc import Mapping
import logging
import os
from typing import Any

from .constants import (
    LOG_TARGET_ERRORS_AS,
    ONE_HOUR_MS,
    QUOTAS_BOOLEAN_KEYS,
    QUOTAS_BUFFER_SIZE_KEYS,
    QUOTAS_KEYS,
    SYNCHRONIZER_MODES,
    TIME_UNITS,
    ValidatorDefaults,
    format_choices,
)
from .exceptions import ConfigValidationError, ErrorKind
from .result import OK, Err, ValidationResult
from .values import ValueKind, classify, is_defined, kind_of

logger = logging.getLogger(__name__)


def _section(parent: Mapping[str, Any], key: str, path: str) -> Mapping[str, Any] | None:
    """Return a nested section, or None when it is absent or null."""
    kind = kind_of(parent, key)
    if not is_defined(kind):
        return None
    if kind is not ValueKind.OBJECT:
        raise ConfigValidationError(f"{path} is not an object", ErrorKind.TYPE, path)
    return parent[key]


def _expect_defined(section: Mapping[str, Any], key: str, path: str) -> None:
    if not is_defined(kind_of(section, key)):
        raise ConfigValidationError(f"{path} is not defined", ErrorKind.MISSING, path)


def _expect_number(section: Mapping[str, Any], key: str, path: str) -> bool:
    """Type-check an optional number; returns True when the field is present."""
    kind = kind_of(section, key)
    if kind is ValueKind.ABSENT:
        return False
    if kind is not ValueKind.NUMBER:
        raise ConfigValidationError(f"{path} is not a number", ErrorKind.TYPE, path)
    return True


def _expect_boolean(section: Mapping[str, Any], key: str, path: str) -> None:
    kind = kind_of(section, key)
    if kind is not ValueKind.ABSENT and kind is not ValueKind.BOOLEAN:
        raise ConfigValidationError(f"{path} should be a boolean", ErrorKind.TYPE, path)


def _expect_string(section: Mapping[str, Any], key: str, path: str) -> bool:
    kind = kind_of(section, key)
    if kind is ValueKind.ABSENT:
        return False
    if kind is not ValueKind.STRING:
        raise ConfigValidationError(f"{path} is not a string", ErrorKind.TYPE, path)
    return True


def _expect_positive(value: Any, path: str, message: str | None = None) -> None:
    # NaN fails the comparison and is rejected too
    if not value > 0:
        raise ConfigValidationError(message or f"{path} is invalid", ErrorKind.RANGE, path)


def _expect_choice(value: Any, choices, path: str) -> None:
    if value not in choices:
        raise ConfigValidationError(
            f"invalid value for {path}: {value}, valid values are {format_choices(choices)}",
            ErrorKind.RANGE,
            path,
        )


def _describe_interval(milliseconds: int) -> str:
    if milliseconds % ONE_HOUR_MS == 0:
        return f"{milliseconds // ONE_HOUR_MS}h"
    return f"{milliseconds}ms"


class ConfigValidator:
    """Fail-fast validator for a merged gateway configuration.

    The constructor binds deployment constants; ``validate`` and ``check``
    keep no state between calls and never modify the configuration.

    Args:
        no_rule_match_actions: Accepted accesscontrol.noRuleMatchAction values,
            compared case-insensitively. Defaults to the settings value.
        min_refresh_interval: Floor for edge_config.refresh_interval and
            edge_config.retry_interval, in the configuration's unit (milliseconds).
        proxy_env_vars: Environment variables searched, in order, for a proxy
            URL when edgemicro.proxy.url is not set.
        environ: Mapping used for the proxy lookup. Defaults to ``os.environ``
            as it is at call time.
    """

    def __init__(
        self,
        no_rule_match_actions: tuple[str, ...] | list[str] | None = None,
        min_refresh_interval: int | None = None,
        proxy_env_vars: tuple[str, ...] | list[str] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        if no_rule_match_actions is None:
            no_rule_match_actions = ValidatorDefaults.NO_RULE_MATCH_ACTIONS
        if min_refresh_interval is None:
            min_refresh_interval = ValidatorDefaults.MIN_REFRESH_INTERVAL
        if proxy_env_vars is None:
            proxy_env_vars = ValidatorDefaults.PROXY_ENV_VARS

        self.no_rule_match_actions = tuple(no_rule_match_actions)
        self.min_refresh_interval = min_refresh_interval
        self.proxy_env_vars = tuple(proxy_env_vars)
        self.environ = environ

        self._checks = (
            self._check_quota,
            self._check_spikearrest,
            self._check_port,
            self._check_refresh_intervals,
            self._check_quotas,
            self._check_logging,
            self._check_plugins,
            self._check_timeouts,
            self._check_redis,
            self._check_config_cache,
            self._check_synchronizer_mode,
            self._check_analytics,
            self._check_log_target_errors_as,
            self._check_access_control,
            self._check_get_request_body,
            self._check_proxy,
        )

    def validate(self, config: Mapping[str, Any]) -> None:
        """Validate a gateway configuration.

        Args:
            config: Fully merged configuration mapping

        Raises:
            ConfigValidationError: On the first violated rule
        """
        if not isinstance(config, Mapping):
            raise ConfigValidationError("config is not an object", ErrorKind.TYPE, "config")

        for check in self._checks:
            check(config)

        logger.debug("Gateway configuration passed %d checks", len(self._checks))

    def check(self, config: Mapping[str, Any]) -> ValidationResult:
        """Validate without raising; returns ``Ok`` or the first ``Err``."""
        try:
            self.validate(config)
        except ConfigValidationError as e:
            logger.debug("Gateway configuration rejected: %s", e)
            return Err.from_exception(e)
        return OK

    def _check_quota(self, config: Mapping[str, Any]) -> None:
        quota = _section(config, "quota", "config.quota")
        if quota is None:
            return

        if "timeUnit" in quota:
            _expect_choice(quota["timeUnit"], TIME_UNITS, "config.quota.timeUnit")
            _expect_defined(quota, "interval", "config.quota.interval")
            _expect_number(quota, "interval", "config.quota.interval")
            _expect_positive(quota["interval"], "config.quota.interval")

        _expect_defined(quota, "allow", "config.quota.allow")
        _expect_number(quota, "allow", "config.quota.allow")
        _expect_positive(quota["allow"], "config.quota.allow")

    def _check_spikearrest(self, config: Mapping[str, Any]) -> None:
        spikearrest = _section(config, "spikearrest", "config.spikearrest")
        if spikearrest is None:
            return

        if "timeUnit" in spikearrest:
            _expect_choice(spikearrest["timeUnit"], TIME_UNITS, "config.spikearrest.timeUnit")
            if _expect_number(spikearrest, "bufferSize", "config.spikearrest.bufferSize"):
                _expect_positive(spikearrest["bufferSize"], "config.spikearrest.bufferSize")

        _expect_defined(spikearrest, "allow", "config.spikearrest.allow")
        _expect_number(spikearrest, "allow", "config.spikearrest.allow")
        _expect_positive(spikearrest["allow"], "config.spikearrest.allow")

    def _check_port(self, config: Mapping[str, Any]) -> None:
        edgemicro = _section(config, "edgemicro", "config.edgemicro") or {}
        kind = kind_of(edgemicro, "port")
        if kind is not ValueKind.ABSENT and kind is not ValueKind.NUMBER:
            raise ConfigValidationError(
                f"invalid value for config.edgemicro.port: {edgemicro['port']} is not a number",
                ErrorKind.TYPE,
                "config.edgemicro.port",
            )

    def _check_refresh_intervals(self, config: Mapping[str, Any]) -> None:
        edge_config = _section(config, "edge_config", "config.edge_config") or {}
        for key in ("refresh_interval", "retry_interval"):
            path = f"config.edge_config.{key}"
            if _expect_number(edge_config, key, path) and not edge_config[key] >= self.min_refresh_interval:
                raise ConfigValidationError(
                    f"{path} is too small (min {_describe_interval(self.min_refresh_interval)})",
                    ErrorKind.RANGE,
                    path,
                )

    def _check_quotas(self, config: Mapping[str, Any]) -> None:
        quotas = _section(config, "quotas", "config.quotas")
        if quotas is None:
            return

        for key in quotas:
            if key not in QUOTAS_KEYS:
                raise ConfigValidationError(
                    f"invalid value in config.quotas: {key}, "
                    f"valid values are {format_choices(QUOTAS_KEYS)}",
                    ErrorKind.RANGE,
                    "config.quotas",
                )

        if "bufferSize" in quotas:
            buffer_size = quotas["bufferSize"]
            if classify(buffer_size) is not ValueKind.OBJECT:
                raise ConfigValidationError(
                    "config.quotas.bufferSize is not an object",
                    ErrorKind.TYPE,
                    "config.quotas.bufferSize",
                )
            for unit in buffer_size:
                if unit not in QUOTAS_BUFFER_SIZE_KEYS:
                    raise ConfigValidationError(
                        f"invalid value in config.quotas.bufferSize: {unit}, "
                        f"valid values are {format_choices(QUOTAS_BUFFER_SIZE_KEYS)}",
                        ErrorKind.RANGE,
                        "config.quotas.bufferSize",
                    )
                path = f"config.quotas.bufferSize.{unit}"
                _expect_number(buffer_size, unit, path)
                if not buffer_size[unit] >= 0:
                    raise ConfigValidationError(
                        f"{path} must be greater than or equal to zero",
                        ErrorKind.RANGE,
                        path,
                    )

        for key in QUOTAS_BOOLEAN_KEYS:
            _expect_boolean(quotas, key, f"config.quotas.{key}")

        _expect_string(quotas, "excludeUrls", "config.quotas.excludeUrls")

    def _check_logging(self, config: Mapping[str, Any]) -> None:
        edgemicro = _section(config, "edgemicro", "config.edgemicro") or {}
        logging_section = _section(edgemicro, "logging", "config.edgemicro.logging") or {}
        _expect_boolean(logging_section, "to_console", "config.edgemicro.logging.to_console")

    def _check_plugins(self, config: Mapping[str, Any]) -> None:
        edgemicro = _section(config, "edgemicro", "config.edgemicro") or {}
        plugins = _section(edgemicro, "plugins", "config.edgemicro.plugins") or {}
        _expect_string(plugins, "excludeUrls", "config.edgemicro.plugins.excludeUrls")
        _expect_boolean(
            plugins,
            "disableExcUrlsCache",
            "config.edgemicro.plugins.disableExcUrlsCache",
        )

    def _check_timeouts(self, config: Mapping[str, Any]) -> None:
        edgemicro = _section(config, "edgemicro", "config.edgemicro") or {}
        for key in ("keep_alive_timeout", "headers_timeout"):
            path = f"config.edgemicro.{key}"
            if _expect_number(edgemicro, key, path):
                _expect_positive(edgemicro[key], path, f"{path} should be greater than 0")

    def _check_redis(self, config: Mapping[str, Any]) -> None:
        edgemicro = _section(config, "edgemicro", "config.edgemicro") or {}
        _expect_string(edgemicro, "redisHost", "config.edgemicro.redisHost")
        _expect_number(edgemicro, "redisPort", "config.edgemicro.redisPort")
        if _expect_number(edgemicro, "redisDb", "config.edgemicro.redisDb") and not edgemicro["redisDb"] >= 0:
            raise ConfigValidationError(
                "config.edgemicro.redisDb must be >= 0",
                ErrorKind.RANGE,
                "config.edgemicro.redisDb",
            )
        _expect_string(edgemicro, "redisPassword", "config.edgemicro.redisPassword")

    def _check_config_cache(self, config: Mapping[str, Any]) -> None:
        edge_config = _section(config, "edge_config", "config.edge_config") or {}
        _expect_boolean(
            edge_config,
            "redisBasedConfigCache",
            "config.edge_config.redisBasedConfigCache",
        )

    def _check_synchronizer_mode(self, config: Mapping[str, Any]) -> None:
        edge_config = _section(config, "edge_config", "config.edge_config") or {}
        path = "config.edge_config.synchronizerMode"
        if _expect_number(edge_config, "synchronizerMode", path) and (
            edge_config["synchronizerMode"] not in SYNCHRONIZER_MODES
        ):
            raise ConfigValidationError(
                f"{path} should be either {' | '.join(str(mode) for mode in SYNCHRONIZER_MODES)}",
                ErrorKind.RANGE,
                path,
            )

    def _check_analytics(self, config: Mapping[str, Any]) -> None:
        edgemicro = _section(config, "edgemicro", "config.edgemicro") or {}
        _expect_boolean(edgemicro, "enableAnalytics", "config.edgemicro.enableAnalytics")
        if edgemicro.get("enableAnalytics") is not True:
            return

        analytics = _section(config, "analytics", "config.analytics") or {}
        path = "config.analytics.bufferSize"
        if kind_of(analytics, "bufferSize") is not ValueKind.NUMBER:
            raise ConfigValidationError(f"{path} is not a number", ErrorKind.TYPE, path)
        _expect_positive(analytics["bufferSize"], path)

    def _check_log_target_errors_as(self, config: Mapping[str, Any]) -> None:
        edgemicro = _section(config, "edgemicro", "config.edgemicro") or {}
        if "logTargetErrorsAs" in edgemicro:
            _expect_choice(
                edgemicro["logTargetErrorsAs"],
                LOG_TARGET_ERRORS_AS,
                "config.edgemicro.logTargetErrorsAs",
            )

    def _check_access_control(self, config: Mapping[str, Any]) -> None:
        accesscontrol = _section(config, "accesscontrol", "config.accesscontrol") or {}
        path = "config.accesscontrol.noRuleMatchAction"
        if not _expect_string(accesscontrol, "noRuleMatchAction", path):
            return

        action = accesscontrol["noRuleMatchAction"]
        if action.lower() not in {allowed.lower() for allowed in self.no_rule_match_actions}:
            raise ConfigValidationError(
                f"invalid value for {path}: {action}, "
                f"valid values are {format_choices(self.no_rule_match_actions)}",
                ErrorKind.RANGE,
                path,
            )

    def _check_get_request_body(self, config: Mapping[str, Any]) -> None:
        edgemicro = _section(config, "edgemicro", "config.edgemicro") or {}
        _expect_boolean(edgemicro, "enable_GET_req_body", "config.edgemicro.enable_GET_req_body")

    def _check_proxy(self, config: Mapping[str, Any]) -> None:
        edgemicro = _section(config, "edgemicro", "config.edgemicro") or {}
        proxy = _section(edgemicro, "proxy", "config.edgemicro.proxy")
        if proxy is None:
            return

        _expect_string(proxy, "url", "config.edgemicro.proxy.url")
        proxy_url = self._resolve_proxy_url(proxy)

        if not is_defined(kind_of(proxy, "enabled")) and not proxy_url:
            raise ConfigValidationError(
                "config.edgemicro.proxy must be defined with enabled or url, "
                f"or through one of {', '.join(self.proxy_env_vars)}",
                ErrorKind.MISSING,
                "config.edgemicro.proxy",
            )
        _expect_boolean(proxy, "enabled", "config.edgemicro.proxy.enabled")

        if is_defined(kind_of(proxy, "tunnel")):
            if proxy.get("enabled") is not True:
                raise ConfigValidationError(
                    "config.edgemicro.proxy.tunnel requires config.edgemicro.proxy.enabled to be true",
                    ErrorKind.CONSISTENCY,
                    "config.edgemicro.proxy.tunnel",
                )
            if not proxy_url:
                raise ConfigValidationError(
                    "config.edgemicro.proxy.url must be defined when "
                    "config.edgemicro.proxy.tunnel is set",
                    ErrorKind.MISSING,
                    "config.edgemicro.proxy.url",
                )
        _expect_boolean(proxy, "tunnel", "config.edgemicro.proxy.tunnel")

    def _resolve_proxy_url(self, proxy: Mapping[str, Any]) -> str | None:
        """Return the proxy URL from the section or the environment, if any."""
        if proxy.get("url"):
            return proxy["url"]

        environ = os.environ if self.environ is None else self.environ
        for name in self.proxy_env_vars:
            value = environ.get(name)
            if value:
                return value
        return None


def validate(config: Mapping[str, Any], **options: Any) -> None:
    """Validate a gateway configuration, raising on the first violated rule.

    Args:
        config: Fully merged configuration mapping
        **options: Keyword arguments for ConfigValidator

    Raises:
        ConfigValidationError: On the first violated rule
    """
    ConfigValidator(**options).validate(config)


def check(config: Mapping[str, Any], **options: Any) -> ValidationResult:
    """Validate a gateway configuration and return ``Ok`` or ``Err``."""
    return ConfigValidator(**options).check(config)
