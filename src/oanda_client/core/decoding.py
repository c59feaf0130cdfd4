"""Decoding helpers shared by the response models.

OANDA transmits most numeric financial fields (prices, units, P&L) as JSON
strings. Models keep them as ``str`` where precision matters downstream and
coerce them with :func:`to_float` where the value is used directly (OHLC
values, pricing ladders).

:func:`decode_json` owns the decode-failure policy: a malformed body is
logged and replaced by the model's zero value unless ``strict`` is set.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Type, TypeVar, Union

import pandas as pd

from oanda_client.core.exceptions import DecodeError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def to_float(value: Any) -> float:
    """Coerce a string-encoded (or bare) JSON number to float; missing -> 0.0."""
    if value is None or value == "":
        return 0.0
    if isinstance(value, bool):
        raise TypeError(f"expected a numeric string, got {value!r}")
    return float(value)


def to_int(value: Any) -> int:
    if value is None or value == "":
        return 0
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value!r}")
    return int(value)


def to_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def to_bool(value: Any) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise TypeError(f"expected a boolean, got {value!r}")
    return value


def parse_time(value: Any) -> Optional[pd.Timestamp]:
    """Parse an OANDA timestamp into a UTC-aware ``pd.Timestamp``.

    Accepts RFC 3339 strings with nanosecond precision
    (``2016-06-22T18:41:29.285982286Z``) and the UNIX form
    (``1466620889.285982286``) returned when ``Accept-Datetime-Format: UNIX``
    is in effect.
    """
    if value is None or value == "":
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return pd.to_datetime(value, unit="s", utc=True)
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        ts = pd.Timestamp(value)
        return ts.tz_localize("UTC") if ts.tzinfo is None else ts.tz_convert("UTC")
    return pd.to_datetime(seconds, unit="s", utc=True)


def sub_dict(payload: dict, key: str) -> dict:
    """Return the nested object under *key*, ``{}`` when absent or null."""
    value = payload.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise TypeError(f"expected an object for '{key}', got {type(value).__name__}")
    return value


def sub_list(payload: dict, key: str) -> list:
    value = payload.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"expected an array for '{key}', got {type(value).__name__}")
    return value


def decode_json(body: Union[str, bytes], model: Type[T], *, strict: bool = False) -> T:
    """Decode *body* into *model* via its ``from_dict`` classmethod.

    Parameters
    ----------
    body : str or bytes
        Raw response body.
    model : type
        A response model exposing ``from_dict`` and a zero-argument
        constructor.
    strict : bool
        Raise :class:`DecodeError` instead of returning the zero value.

    Returns
    -------
    model instance
        The decoded record, or ``model()`` when the body cannot be decoded.
    """
    try:
        payload = json.loads(body)
        if not isinstance(payload, dict):
            raise TypeError(f"expected a JSON object, got {type(payload).__name__}")
        return model.from_dict(payload)
    except (ValueError, TypeError, AttributeError, OverflowError, RecursionError) as exc:
        # OverflowError: infinite or out-of-range numbers and timestamps.
        # RecursionError: pathologically nested bodies.
        if strict:
            raise DecodeError(f"Failed to decode {model.__name__} payload: {exc}") from exc
        logger.error(f"Failed to decode {model.__name__} payload: {exc}")
        return model()
