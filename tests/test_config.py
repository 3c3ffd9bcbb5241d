"""Unit tests for configuration validation."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import os
import subprocess
import sys
from pathlib import Path

import pytest

from table_decoder.config import Config
from table_decoder.normalizer import NormalizeOptions
from table_decoder.utils import column_letter, env_float, env_int


ROOT = Path(__file__).parent.parent.resolve()


class TestConfig:

    def test_defaults(self):
        config = Config()
        assert (config.x_field, config.y_field, config.char_field) == (
            "x-coordinate", "y-coordinate", "Character")
        assert config.request_timeout > 0

    def test_timeout_from_environment(self, monkeypatch):
        monkeypatch.setenv("TABLE_DECODER_TIMEOUT", "2.5")
        assert Config().request_timeout == 2.5

    @pytest.mark.parametrize("raw", ["soon", "-1", "0", "nan", "inf"])
    def test_bad_environment_timeout_falls_back(self, monkeypatch, raw):
        monkeypatch.setenv("TABLE_DECODER_TIMEOUT", raw)
        assert Config().request_timeout == 30.0

    def test_port_from_environment(self, monkeypatch):
        monkeypatch.setenv("API_PORT", "8080")
        assert Config().api_port == 8080

    @pytest.mark.parametrize("raw", ["abc", "0", "70000", "80.5"])
    def test_bad_environment_port_falls_back(self, monkeypatch, raw):
        monkeypatch.setenv("API_PORT", raw)
        assert Config().api_port == 5000

    @pytest.mark.parametrize("env", [{"API_PORT": "abc"}, {"TABLE_DECODER_TIMEOUT": "-1"}])
    def test_package_imports_with_bad_environment(self, env):
        result = subprocess.run(
            [sys.executable, "-c", "import table_decoder; print(table_decoder.DEFAULT_CONFIG.api_port)"],
            env={**os.environ, **env},
            cwd=str(ROOT),
            capture_output=True,
            text=True,
        )
        assert result.returncode == 0, result.stderr

    @pytest.mark.parametrize("kwargs", [
        {"request_timeout": 0},
        {"x_field": ""},
        {"x_field": "a", "y_field": "a"},
        {"api_port": 0},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            Config(**kwargs)

    def test_normalize_options(self):
        config = Config(prefer_formatted=True)
        assert config.normalize_options() == NormalizeOptions(prefer_formatted=True)


class TestUtils:

    @pytest.mark.parametrize("index, letter", [(0, "A"), (2, "C"), (25, "Z"), (26, "AA"), (27, "AB")])
    def test_column_letter(self, index, letter):
        assert column_letter(index) == letter

    def test_env_float_missing(self, monkeypatch):
        monkeypatch.delenv("TABLE_DECODER_TEST_VALUE", raising=False)
        assert env_float("TABLE_DECODER_TEST_VALUE", 1.5) == 1.5

    def test_env_int(self, monkeypatch):
        monkeypatch.setenv("TABLE_DECODER_TEST_VALUE", "12")
        assert env_int("TABLE_DECODER_TEST_VALUE", 1) == 12
        assert env_int("TABLE_DECODER_TEST_VALUE", 1, lambda v: v < 10) == 1
        monkeypatch.setenv("TABLE_DECODER_TEST_VALUE", "twelve")
        assert env_int("TABLE_DECODER_TEST_VALUE", 1) == 1
