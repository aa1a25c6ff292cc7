"""
Configuration Module

Architectural Intent:
- Centralized configuration loading from a JSON file
- Provides typed access to all bluegreen settings
- Falls back to sensible defaults when config file is absent
- Environment variables override file-based config

Design Decisions:
- Config is a frozen dataclass for immutability after load
- Nested config sections map to sub-dataclasses
- Managed slot suffixes are a naming contract, not configuration
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import dataclasses
import json
import logging
import os

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CFConfig:
    """Platform CLI configuration."""
    binary: str = "cf"
    home: str = ""
    remote_host: str = ""  # run cf on this jump host over SSH when set
    remote_user: str = ""
    remote_port: int = 22
    timeout: int = 0  # seconds per command, 0 disables


@dataclass(frozen=True)
class TelemetryConfig:
    """OpenTelemetry tracing configuration."""
    endpoint: str = ""
    service_name: str = "bluegreen"
    insecure: bool = False


@dataclass(frozen=True)
class BlueGreenConfig:
    """Root configuration for the bluegreen application."""
    cf: CFConfig = field(default_factory=CFConfig)
    telemetry: TelemetryConfig = field(default_factory=TelemetryConfig)
    log_level: str = "WARNING"
    log_json: bool = False


_SECTIONS = {"cf": CFConfig, "telemetry": TelemetryConfig}


def _env_override(data: dict, prefix: str = "BLUEGREEN") -> dict:
    """Override config values with environment variables.

    Environment variables follow the pattern BLUEGREEN_SECTION_KEY for
    section fields and BLUEGREEN_KEY for top-level fields.
    For example: BLUEGREEN_CF_REMOTE_HOST=jump.example.com,
    BLUEGREEN_LOG_LEVEL=DEBUG
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        name = key[len(prefix) + 1:].lower()
        parts = name.split("_", 1)
        if len(parts) == 2 and parts[0] in _SECTIONS:
            section, field_name = parts
            if not isinstance(data.get(section), dict):
                data[section] = {}
            data[section][field_name] = value
        else:
            data[name] = value
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict on failure."""
    try:
        with open(path) as f:
            return json.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}


def _to_bool(value) -> bool:
    if isinstance(value, str):
        return value.lower() in ("true", "1", "yes")
    return bool(value)


def _build_sub_config(cls, data: dict):
    """Build a sub-config dataclass from a dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}

    # Convert string numbers to int/bool
    for f in dataclasses.fields(cls):
        if f.name in filtered and isinstance(filtered[f.name], str):
            if f.type == "int":
                filtered[f.name] = int(filtered[f.name])
            elif f.type == "bool":
                filtered[f.name] = _to_bool(filtered[f.name])

    return cls(**filtered)


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "BLUEGREEN",
) -> BlueGreenConfig:
    """Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (BLUEGREEN_SECTION_KEY)
    2. Config file values
    3. Defaults

    Args:
        path: Path to config file (JSON). Defaults to bluegreen.json in CWD.
        env_prefix: Environment variable prefix. Defaults to BLUEGREEN.
    """
    config_path = Path(path) if path else Path("bluegreen.json")
    data = _parse_config_file(config_path)
    data = _env_override(data, env_prefix)

    return BlueGreenConfig(
        cf=_build_sub_config(CFConfig, data.get("cf", {})),
        telemetry=_build_sub_config(TelemetryConfig, data.get("telemetry", {})),
        log_level=str(data.get("log_level", "WARNING")).upper(),
        log_json=_to_bool(data.get("log_json", False)),
    )
