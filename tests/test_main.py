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

"""Tests for the command line entry point."""

import json

import pytest

from microgateway_config.__main__ import EXIT_INVALID, EXIT_OK, EXIT_UNREADABLE, main


class TestValidateCommand:
    def test_valid_file(self, fixtures_dir, capsys):
        path = str(fixtures_dir / "gateway.yaml")

        assert main(["validate", path]) == EXIT_OK
        assert capsys.readouterr().out.strip() == f"{path}: configuration is valid"

    def test_invalid_file(self, fixtures_dir, capsys):
        path = str(fixtures_dir / "invalid_port.yaml")

        assert main(["validate", path]) == EXIT_INVALID
        assert "config.edgemicro.port: 8000 is not a number" in capsys.readouterr().out

    def test_invalid_file_json_output(self, fixtures_dir, capsys):
        assert main(["validate", str(fixtures_dir / "invalid_port.yaml"), "--json"]) == EXIT_INVALID

        payload = json.loads(capsys.readouterr().out)
        assert payload == {
            "valid": False,
            "error_code": "MGC_1001",
            "kind": "type",
            "field": "config.edgemicro.port",
            "message": "invalid value for config.edgemicro.port: 8000 is not a number",
        }

    def test_unreadable_file(self, tmp_path, capsys):
        assert main(["validate", str(tmp_path / "missing.yaml"), "--json"]) == EXIT_UNREADABLE

        payload = json.loads(capsys.readouterr().out)
        assert payload["valid"] is False
        assert payload["error_code"] == "MGC_2000"

    def test_non_mapping_file(self, fixtures_dir):
        assert main(["validate", str(fixtures_dir / "not_a_mapping.yaml")]) == EXIT_UNREADABLE


class TestSettingsCommand:
    def test_json_export(self, fresh_settings, capsys):
        assert main(["settings"]) == EXIT_OK

        exported = json.loads(capsys.readouterr().out)
        assert exported["redis"]["port"] == 6379
        assert exported["validator"]["no_rule_match_actions"] == ["allow", "deny", "log"]

    def test_yaml_export(self, fresh_settings, capsys):
        assert main(["settings", "--format", "yaml"]) == EXIT_OK

        assert "min_refresh_interval: 3600000" in capsys.readouterr().out

    def test_command_required(self):
        with pytest.raises(SystemExit):
            main([])
