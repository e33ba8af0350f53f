"""Configuration management for transrpc.

Loads connection settings from ~/.config/transrpc/config.cfg, falling back
to a .env file, with TRANSRPC_* environment variables taking precedence.
Provides ClientConfig and builds a ready SessionClient from it.
"""

import configparser
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values

from transrpc.client import DEFAULT_ENDPOINT, DEFAULT_TRIES, SessionClient

# Default location for user configuration.
CONFIG_PATH = Path.home() / ".config" / "transrpc" / "config.cfg"

ENV_PREFIX = "TRANSRPC_"
ENV_KEYS = ("address", "endpoint", "username", "password", "timeout", "tries")


@dataclass
class ClientConfig:
    address: str
    endpoint: str = DEFAULT_ENDPOINT
    username: str = ""
    password: str = ""
    timeout: float = 30.0
    tries: int = DEFAULT_TRIES


def load_raw_config(
    path: Path = CONFIG_PATH, env_path: Optional[Path] = None
) -> Dict[str, str]:
    """
    Load configuration values with lowercase keys.

    The config file wins over the .env file (default: .env in the current
    working directory); environment variables win over both.
    """
    env_path = env_path or Path.cwd() / ".env"
    data: Dict[str, str] = {}

    if path.exists():
        cfg = configparser.ConfigParser()
        cfg.read(path)
        if "DEFAULT" in cfg:
            data.update({k.lower(): v for k, v in cfg["DEFAULT"].items()})
        if "AUTH" in cfg:
            data.update({k.lower(): v for k, v in cfg["AUTH"].items()})
    elif env_path.exists():
        for key, value in dotenv_values(env_path).items():
            key = key.lower()
            if key.startswith(ENV_PREFIX.lower()):
                key = key[len(ENV_PREFIX):]
            if value is not None:
                data[key] = value

    for key in ENV_KEYS:
        value = os.environ.get(ENV_PREFIX + key.upper())
        if value is not None and value.strip() != "":
            data[key] = value

    return data


def get_client_config(raw: Optional[Dict[str, str]] = None) -> ClientConfig:
    """
    Build a ClientConfig from raw configuration values.
    Raises ValueError if the address is missing or a number is malformed.
    """
    raw = raw if raw is not None else load_raw_config()

    address = raw.get("address", "").strip().rstrip("/")
    if not address:
        raise ValueError("Missing daemon address in configuration.")

    endpoint = raw.get("endpoint", "").strip() or DEFAULT_ENDPOINT
    if not endpoint.startswith("/"):
        endpoint = "/" + endpoint

    try:
        timeout = float(raw.get("timeout") or 30.0)
        tries = int(raw.get("tries") or DEFAULT_TRIES)
    except ValueError as e:
        raise ValueError(f"Invalid numeric setting: {e}") from e
    if not math.isfinite(timeout) or timeout <= 0:
        raise ValueError(f"timeout must be a positive number of seconds, got {timeout}")
    if tries < 1:
        raise ValueError(f"tries must be at least 1, got {tries}")

    return ClientConfig(
        address=address,
        endpoint=endpoint,
        username=raw.get("username", "").strip(),
        password=raw.get("password", ""),
        timeout=timeout,
        tries=tries,
    )


def build_client(config: ClientConfig) -> SessionClient:
    """Create a SessionClient for the given configuration."""
    client = SessionClient(
        config.address,
        endpoint=config.endpoint,
        timeout=config.timeout,
        tries=config.tries,
    )
    if config.username:
        client.set_auth(config.username, config.password)
    return client
