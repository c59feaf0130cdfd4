"""Configuration loading for the OANDA client.

Config files are JSON, e.g. ``config/oanda.json``::

    {
        "oanda": {
            "account_id": "101-004-1234567-001",
            "token": "",
            "live": false,
            "strict_decoding": false
        },
        "candles": {
            "instruments": ["EUR_USD", "GBP_USD"],
            "count": "500",
            "granularity": "H1"
        },
        "data_paths": {"data_path": "data/candles", "log_path": "logs"},
        "log_level": "INFO"
    }

``OANDA_TOKEN``, ``OANDA_ACCOUNT_ID`` and ``OANDA_LIVE`` override the
matching ``oanda`` keys so the token never has to live in the file.
"""

import json
import os
from typing import Optional

import requests

from oanda_client.core.exceptions import ConfigurationError
from oanda_client.exchanges.oanda_connection import OandaConnection


def load_config(config_path: str) -> dict:
    """Load configuration from JSON file.

    Args:
        config_path: Path to config JSON file

    Returns:
        Dictionary with configuration parameters

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the file is not valid JSON
    """
    with open(config_path, 'r') as f:
        return json.load(f)


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "y", "on")


def apply_env_overrides(oanda_cfg: dict) -> dict:
    """Return a copy of the ``oanda`` section with environment overrides applied."""
    cfg = dict(oanda_cfg)
    token = os.getenv("OANDA_TOKEN")
    if token:
        cfg["token"] = token
    account_id = os.getenv("OANDA_ACCOUNT_ID")
    if account_id:
        cfg["account_id"] = account_id
    live = os.getenv("OANDA_LIVE")
    if live is not None:
        cfg["live"] = _env_bool(live)
    return cfg


def connection_from_config(
    config: dict,
    session: Optional[requests.Session] = None,
) -> OandaConnection:
    """Build an :class:`OandaConnection` from the ``oanda`` section of *config*.

    Raises:
        ConfigurationError: If the token or account id is missing
    """
    cfg = apply_env_overrides(config.get("oanda", {}))

    token = cfg.get("token", "")
    account_id = cfg.get("account_id", "")
    if not token:
        raise ConfigurationError("OANDA token is not configured (set oanda.token or OANDA_TOKEN)")
    if not account_id:
        raise ConfigurationError("OANDA account id is not configured (set oanda.account_id or OANDA_ACCOUNT_ID)")

    return OandaConnection(
        account_id,
        token,
        live=bool(cfg.get("live", False)),
        host=cfg.get("host") or None,
        strict_decoding=bool(cfg.get("strict_decoding", False)),
        session=session,
    )
