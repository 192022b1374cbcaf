"""Tests for configuration management."""

from __future__ import annotations

import json

import pytest

from odoo_bridge.config import OdooBridgeConfig, load_config

ENV_VARS = [
    "ODOO_URL",
    "ODOO_DB",
    "ODOO_USERNAME",
    "ODOO_PASSWORD",
    "ODOO_TIMEOUT",
    "ODOO_INSECURE_SKIP_VERIFY",
    "ODOO_CA_CERT",
    "ODOO_MCP_CONFIG",
    "TRANSPORT",
    "HOST",
    "PORT",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


class TestOdooBridgeConfig:

    def test_defaults(self):
        config = OdooBridgeConfig()
        assert config.odoo_url == "http://localhost:8069"
        assert config.odoo_username == "admin"
        assert config.odoo_password == "admin"
        assert config.odoo_db == "odoo"
        assert config.odoo_insecure_skip_verify is True
        assert config.odoo_timeout is None
        assert config.transport == "stdio"
        assert config.log_level == "info"

    def test_env_vars(self, monkeypatch):
        monkeypatch.setenv("ODOO_URL", "https://erp.example.com")
        monkeypatch.setenv("ODOO_USERNAME", "bot")
        monkeypatch.setenv("ODOO_PASSWORD", "s3cret")
        monkeypatch.setenv("ODOO_INSECURE_SKIP_VERIFY", "false")

        config = OdooBridgeConfig()
        assert config.odoo_url == "https://erp.example.com"
        assert config.odoo_username == "bot"
        assert config.odoo_password == "s3cret"
        assert config.odoo_insecure_skip_verify is False

    def test_url_trailing_slash_stripped(self):
        assert OdooBridgeConfig(odoo_url="https://erp.example.com/").odoo_url == (
            "https://erp.example.com"
        )

    def test_invalid_url_scheme(self):
        with pytest.raises(ValueError, match="http:// or https://"):
            OdooBridgeConfig(odoo_url="ftp://bad.com")

    def test_invalid_port(self):
        with pytest.raises(ValueError, match="port must be 1-65535"):
            OdooBridgeConfig(port=0)

    def test_invalid_timeout(self):
        with pytest.raises(ValueError, match="odoo_timeout must be > 0"):
            OdooBridgeConfig(odoo_timeout=0)

    def test_invalid_transport(self):
        with pytest.raises(ValueError):
            OdooBridgeConfig(transport="carrier-pigeon")


class TestLoadConfig:

    def test_cli_overrides(self):
        config = load_config({"odoo_db": "acme", "port": 9000})
        assert config.odoo_db == "acme"
        assert config.port == 9000

    def test_cli_overrides_not_mutated(self):
        overrides = {"odoo_db": "acme"}
        load_config(overrides)
        assert overrides == {"odoo_db": "acme"}

    def test_config_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"odoo_url": "http://odoo:8069", "odoo_db": "prod"}))

        config = load_config({"_config_path": str(path), "odoo_db": "staging"})
        assert config.odoo_url == "http://odoo:8069"
        assert config.odoo_db == "staging"

    def test_config_file_from_env(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"odoo_username": "filebot"}))
        monkeypatch.setenv("ODOO_MCP_CONFIG", str(path))

        assert load_config().odoo_username == "filebot"

    def test_env_beats_config_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"odoo_db": "from-file"}))
        monkeypatch.setenv("ODOO_DB", "from-env")

        assert load_config({"_config_path": str(path)}).odoo_db == "from-env"

    def test_missing_config_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config({"_config_path": str(tmp_path / "nope.json")})
