"""Helper utilities for turning candle histories into DataFrames.

This module provides:
- history_to_df: Mid-price candle history as an OHLCV DataFrame.
- bid_ask_history_to_df: Bid/ask candle history as a DataFrame.
- save_df_to_csv / load_df_from_csv: CSV I/O used by the download job.
"""

from __future__ import annotations

import os
from typing import Optional, Union

import pandas as pd

from oanda_client.core.models import InstrumentBidAskHistory, InstrumentHistory

CANDLE_COLUMNS = ["time", "open", "high", "low", "close", "volume", "complete"]

BID_ASK_COLUMNS = [
    "time",
    "bid_open", "bid_high", "bid_low", "bid_close",
    "ask_open", "ask_high", "ask_low", "ask_close",
    "volume", "complete",
]


def history_to_df(history: InstrumentHistory) -> pd.DataFrame:
    """One row per candle, in response order, incomplete candles included.

    Parameters
    - history: Decoded mid-price candle history

    Returns
    - pd.DataFrame with columns time, open, high, low, close, volume, complete
    """
    rows = [
        {
            "time": c.time,
            "open": c.mid.open,
            "high": c.mid.high,
            "low": c.mid.low,
            "close": c.mid.close,
            "volume": c.volume,
            "complete": c.complete,
        }
        for c in history.candles
    ]
    return pd.DataFrame(rows, columns=CANDLE_COLUMNS)


def bid_ask_history_to_df(history: InstrumentBidAskHistory) -> pd.DataFrame:
    rows = []
    for c in history.candles:
        rows.append({
            "time": c.time,
            "bid_open": c.bid.open,
            "bid_high": c.bid.high,
            "bid_low": c.bid.low,
            "bid_close": c.bid.close,
            "ask_open": c.ask.open,
            "ask_high": c.ask.high,
            "ask_low": c.ask.low,
            "ask_close": c.ask.close,
            "volume": c.volume,
            "complete": c.complete,
        })
    return pd.DataFrame(rows, columns=BID_ASK_COLUMNS)


# Method for saving data to CSV from a DataFrame
def save_df_to_csv(
    df: pd.DataFrame,
    file_path: str,
    *,
    index: bool = False,
    create_dirs: bool = True,
    **kwargs,
) -> None:
    """Write *df* to *file_path*, creating parent directories if asked.

    Raises
    - ValueError: If df is not a pandas DataFrame
    - OSError: On I/O errors when writing the file
    """
    if not isinstance(df, pd.DataFrame):
        raise ValueError("df must be a pandas DataFrame")

    parent = os.path.dirname(os.path.abspath(file_path))
    if create_dirs and not os.path.exists(parent):
        os.makedirs(parent, exist_ok=True)

    df.to_csv(file_path, index=index, **kwargs)


# Method for loading data from CSV
def load_df_from_csv(
    file_path: str,
    *,
    parse_dates: Optional[Union[bool, list[str]]] = None,
    **kwargs,
) -> pd.DataFrame:
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"CSV not found at '{file_path}'")

    return pd.read_csv(file_path, parse_dates=parse_dates, **kwargs)
