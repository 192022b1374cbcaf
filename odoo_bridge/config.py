"""Configuration management using Pydantic Settings.

Priority: CLI args > env vars > config file > defaults.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Literal

from pydantic import model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger("odoo_bridge.config")


class OdooBridgeConfig(BaseSettings):
    """Complete server configuration."""

    # === Connection ===
    odoo_url: str = "http://localhost:8069"
    odoo_db: str = "odoo"
    odoo_username: str = "admin"
    odoo_password: str = "admin"
    odoo_timeout: float | None = None

    # Accept certificates that fail validation, so self-signed internal
    # deployments can be reached over https. Set to false to verify.
    odoo_insecure_skip_verify: bool = True
    odoo_ca_cert: str | None = None

    # === Transport ===
    transport: Literal["stdio", "sse"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8080

    # === Logging ===
    log_level: str = "info"

    model_config = {
        "env_prefix": "",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @model_validator(mode="after")
    def validate_startup(self) -> "OdooBridgeConfig":
        errors: list[str] = []

        url = self.odoo_url.strip().rstrip("/")
        self.odoo_url = url
        if not url.startswith(("http://", "https://")):
            errors.append(f"odoo_url must start with http:// or https://, got: {url}")

        if not 1 <= self.port <= 65535:
            errors.append(f"port must be 1-65535, got: {self.port}")

        if self.odoo_timeout is not None and self.odoo_timeout <= 0:
            errors.append(f"odoo_timeout must be > 0 when set, got: {self.odoo_timeout}")

        if errors:
            raise ValueError(
                "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            )

        if self.odoo_ca_cert and self.odoo_insecure_skip_verify:
            logger.warning(
                "odoo_ca_cert is ignored while odoo_insecure_skip_verify is enabled"
            )

        return self


def load_config(
    cli_overrides: dict[str, Any] | None = None,
) -> OdooBridgeConfig:
    """Load configuration with priority: CLI > env > config file > defaults."""
    cli = dict(cli_overrides or {})

    config_path = cli.pop("_config_path", None) or os.environ.get("ODOO_MCP_CONFIG")

    file_values: dict[str, Any] = {}
    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        with open(path) as f:
            file_values = json.load(f)

    # Init kwargs beat env vars in pydantic-settings, so file values that are
    # also set in the environment must give way to the environment here.
    env_keys = {k.lower() for k in os.environ}
    file_values = {k: v for k, v in file_values.items() if k.lower() not in env_keys}

    return OdooBridgeConfig(**{**file_values, **cli})
