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

"""Constants for gateway configuration validation.

Fixed enumerations live here as module constants. Deployment-dependent
values (the noRuleMatchAction allow-list, the refresh interval floor and the
proxy environment variables) are read from the settings manager, so they can
be changed with MGC_* environment variables or a settings file:

    MGC_NO_RULE_MATCH_ACTIONS=allow,deny
"""

from .settings import settings

TIME_UNITS = ("hour", "minute", "day", "week", "month")

QUOTAS_KEYS = ("bufferSize", "useRedis", "useDebugMpId", "failOpen", "excludeUrls")
QUOTAS_BOOLEAN_KEYS = ("useRedis", "useDebugMpId", "failOpen")
QUOTAS_BUFFER_SIZE_KEYS = TIME_UNITS + ("default",)

SYNCHRONIZER_MODES = (0, 1, 2)

LOG_TARGET_ERRORS_AS = ("error", "warn", "trace", "info", "debug")

ONE_HOUR_MS = 3_600_000


def format_choices(choices) -> str:
    """Join choices as ``a, b, c & d``."""
    items = [str(choice) for choice in choices]
    if len(items) < 2:
        return "".join(items)
    return f"{', '.join(items[:-1])} & {items[-1]}"


class ValidatorDefaults:
    """Validator deployment constants.

    These properties dynamically read from the ConfigManager, allowing
    runtime configuration via environment variables.
    """

    @property
    def NO_RULE_MATCH_ACTIONS(self) -> tuple[str, ...]:  # noqa: N802
        """Accepted accesscontrol.noRuleMatchAction values."""
        return tuple(settings.validator.no_rule_match_actions)

    @property
    def MIN_REFRESH_INTERVAL(self) -> int:  # noqa: N802
        """Floor for edge_config refresh_interval and retry_interval."""
        return settings.validator.min_refresh_interval

    @property
    def PROXY_ENV_VARS(self) -> tuple[str, ...]:  # noqa: N802
        """Environment variables searched for a proxy URL."""
        return tuple(settings.validator.proxy_env_vars)


ValidatorDefaults = ValidatorDefaults()
