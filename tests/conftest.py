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
Shared pytest configuration and fixtures for microgateway-config tests.

- A realistic merged gateway configuration
- A validator isolated from the process environment
- Settings manager reset between tests that change settings
"""

import copy
import os
from pathlib import Path
import sys

import pytest

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from microgateway_config.settings import ConfigManager  # noqa: E402
from microgateway_config.validator import ConfigValidator  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"

GATEWAY_CONFIG = {
    "edge_config": {
        "bootstrap": "https://edgemicroservices.example.com/edgemicro/bootstrap/organization/acme/environment/test",
        "jwt_public_key": "https://acme-test.example.net/edgemicro-auth/publicKey",
        "managementUri": "https://api.example.com",
        "vaultName": "microgateway",
        "authUri": "https://%s-%s.example.net/edgemicro-auth",
        "baseUri": "https://edgemicroservices.example.com/edgemicro/%s/organization/%s/environment/%s",
        "bootstrapMessage": "Please copy the following property to the edge micro agent config",
        "keySecretMessage": "The following credentials are required to start edge micro",
        "products": "https://acme-test.example.net/edgemicro-auth/products",
    },
    "edgemicro": {
        "port": 8000,
        "max_connections": 1000,
        "config_change_poll_interval": 600,
        "logging": {
            "level": "error",
            "dir": "/var/tmp",
            "stats_log_interval": 60,
            "rotate_interval": 24,
            "to_console": False,
        },
        "plugins": {"sequence": ["oauth"]},
    },
    "headers": {
        "x-forwarded-for": True,
        "x-forwarded-host": True,
        "x-request-id": True,
        "x-response-time": True,
        "via": True,
    },
    "oauth": {
        "allowNoAuthorization": False,
        "allowInvalidAuthorization": False,
        "verify_api_key_url": "https://acme-test.example.net/edgemicro-auth/verifyApiKey",
    },
    "analytics": {
        "uri": "https://edgemicroservices.example.com/edgemicro/axpublisher/organization/acme/environment/test",
        "bufferSize": 10000,
        "batchSize": 500,
        "flushInterval": 5000,
    },
}


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "settings: Tests that change the global settings manager")


@pytest.fixture()
def gateway_config():
    """Provide a fresh copy of a valid merged gateway configuration."""
    return copy.deepcopy(GATEWAY_CONFIG)


@pytest.fixture()
def validator():
    """Provide a validator that ignores proxy variables in the real environment."""
    return ConfigValidator(environ={})


@pytest.fixture()
def fixtures_dir():
    return FIXTURES_DIR


@pytest.fixture()
def fresh_settings(monkeypatch):
    """Reload the settings singleton from a clean MGC_ environment."""
    for name in list(os.environ):
        if name.startswith("MGC_"):
            monkeypatch.delenv(name)

    manager = ConfigManager()
    manager.reload_configuration()
    yield manager
    monkeypatch.undo()
    manager.reload_configuration()
