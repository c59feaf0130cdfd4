"""Candles Data Download Job

This job downloads the latest candles for a list of instruments from OANDA
and saves them to CSV files.

The job:
1. Reads configuration from config/oanda.json (or the path given on the command line)
2. Sets up the logger and builds the OANDA connection
3. For each instrument, fetches the latest ``count`` candles
4. Saves one CSV per instrument and granularity in the data folder

A failure for one instrument is logged and the job moves on to the next.

Usage:
    python -m oanda_client.jobs.candles_data_job [config_path]
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

import requests

from oanda_client.config import connection_from_config, load_config
from oanda_client.core.exceptions import OandaError
from oanda_client.exchanges.oanda import OandaAdapter
from oanda_client.helpers.data_helper import history_to_df, save_df_to_csv
from oanda_client.utils.logger import setup_logger

DEFAULT_CONFIG_PATH = Path("config") / "oanda.json"


def get_data_file_path(instrument: str, granularity: str, data_folder: str) -> str:
    """Generate the file path for an instrument's candle file.

    Args:
        instrument: Instrument symbol, e.g. 'EUR_USD'
        granularity: Candle granularity, e.g. 'H1'
        data_folder: Base data folder path

    Returns:
        Full path to the CSV file
    """
    return os.path.join(data_folder, f"candles_{instrument}_{granularity}.csv")


def download_and_save_instrument_candles(
    adapter: OandaAdapter,
    instrument: str,
    count: str,
    granularity: str,
    data_folder: str,
    logger: Optional[logging.Logger] = None,
) -> bool:
    """Fetch the latest candles for one instrument and write them to CSV.

    Returns:
        True if a non-empty file was written, False otherwise
    """
    logger = logger or logging.getLogger(__name__)
    try:
        history = adapter.get_candles(instrument, count, granularity)
    except (requests.RequestException, OandaError) as e:
        logger.error(f"[{instrument}] Failed to fetch candles: {e}")
        return False

    df = history_to_df(history)
    if df.empty:
        logger.warning(f"[{instrument}] No candles returned")
        return False

    file_path = get_data_file_path(instrument, granularity, data_folder)
    try:
        save_df_to_csv(df, file_path, create_dirs=True)
    except OSError as e:
        logger.error(f"[{instrument}] Failed to save candles: {e}")
        return False
    logger.info(f"[{instrument}] Saved {len(df)} {granularity} candles to {file_path}")
    return True


def run_candles_data_job(config_path: str) -> dict:
    """Run the download for every configured instrument.

    Args:
        config_path: Path to config JSON file

    Returns:
        Mapping of instrument -> success flag
    """
    config = load_config(config_path)

    paths = config.get("data_paths", {})
    log_dir = paths.get("log_path")
    log_path = Path(log_dir) / "candles_data_job.log" if log_dir else None
    log_level = getattr(logging, config.get("log_level", "INFO").upper(), logging.INFO)
    logger = setup_logger("oanda_client", log_path, level=log_level)

    candles_cfg = config.get("candles", {})
    instruments = candles_cfg.get("instruments", [])
    count = str(candles_cfg.get("count", "500"))
    granularity = candles_cfg.get("granularity", "H1")
    data_folder = paths.get("data_path", "data")

    logger.info(f"Candles job starting: {len(instruments)} instruments, count={count}, granularity={granularity}")

    adapter = OandaAdapter(connection_from_config(config), logger=logger)

    results = {}
    for instrument in instruments:
        results[instrument] = download_and_save_instrument_candles(
            adapter, instrument, count, granularity, data_folder, logger
        )

    succeeded = sum(1 for ok in results.values() if ok)
    logger.info(f"Candles job finished: {succeeded}/{len(results)} instruments saved")
    return results


def main() -> int:
    config_path = sys.argv[1] if len(sys.argv) > 1 else str(DEFAULT_CONFIG_PATH)
    results = run_candles_data_job(config_path)
    return 0 if all(results.values()) else 1


if __name__ == "__main__":
    sys.exit(main())
