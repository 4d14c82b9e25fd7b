"""
Row loader for the puzzle log.

Reads the tabular dataset (CSV or XLSX, local path or http(s) URL) into a list of
raw string-keyed rows. Parsing of the fields themselves is left to the normalizer.
"""
import io
import logging
import os
import random
import time
from typing import Dict, List

import pandas as pd
import requests

from config.settings import MAX_RETRIES, REQUEST_TIMEOUT, REQUIRED_COLUMNS

# Set up logging
logger = logging.getLogger(__name__)


class LoadError(Exception):
    """Raised when the dataset cannot be fetched or parsed."""


def _is_url(path: str) -> bool:
    return path.lower().startswith(("http://", "https://"))


def _is_excel(path: str) -> bool:
    return path.lower().split("?", 1)[0].endswith(".xlsx")


def _download(url: str) -> bytes:
    """
    Download a file, retrying with exponential backoff.

    Args:
        url: http(s) URL of the dataset

    Returns:
        Response body

    Raises:
        LoadError: if every attempt failed
    """
    retry_count = 0
    while True:
        try:
            logger.info(f"Downloading dataset from {url}")
            response = requests.get(url, timeout=REQUEST_TIMEOUT)
            response.raise_for_status()
            return response.content
        except requests.exceptions.RequestException as e:
            retry_count += 1
            if retry_count >= MAX_RETRIES:
                logger.error(f"Failed to download {url} after {MAX_RETRIES} attempts: {e}")
                raise LoadError(f"Unable to download {url}: {e}") from e

            if hasattr(e, 'response') and e.response is not None and e.response.status_code == 429:
                # Rate limiting - use longer backoff
                sleep_time = min(5 ** retry_count + (0.5 * random.random()), 60)
                logger.warning(f"Rate limit exceeded. Waiting for {sleep_time:.2f} seconds before retrying.")
            else:
                sleep_time = min(2 ** retry_count + (0.1 * random.random()), 15)
                logger.warning(f"Download attempt {retry_count}/{MAX_RETRIES} failed: {e}. Retrying in {sleep_time:.2f} seconds")
            time.sleep(sleep_time)


def _read_frame(path: str) -> pd.DataFrame:
    if _is_url(path):
        content = _download(path)
        source = io.BytesIO(content)
    else:
        if not os.path.exists(path):
            raise LoadError(f"Dataset not found: {path}")
        source = path

    try:
        if _is_excel(path):
            return pd.read_excel(source, dtype=str)
        return pd.read_csv(source, dtype=str, skipinitialspace=True)
    except Exception as e:
        # Damaged workbooks surface as zipfile/openpyxl errors, not ValueError
        logger.error(f"Error reading dataset {path}: {e}")
        raise LoadError(f"Unable to parse {path}: {e}") from e


def fetch_rows(path: str) -> List[Dict[str, str]]:
    """
    Fetch the dataset and return it as raw rows.

    Args:
        path: Local file path or http(s) URL of a CSV/XLSX file

    Returns:
        List of dicts keyed by column name; missing cells become empty strings

    Raises:
        LoadError: if the file cannot be fetched, parsed, or lacks a required column
    """
    df = _read_frame(path)
    df.columns = [str(c).strip() for c in df.columns]

    missing_columns = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing_columns:
        logger.error(f"Dataset {path} missing required columns: {missing_columns}. Found columns: {', '.join(df.columns)}")
        raise LoadError(f"Dataset {path} missing required columns: {missing_columns}")

    rows = df[REQUIRED_COLUMNS].fillna("").to_dict(orient="records")
    logger.info(f"Loaded {len(rows)} rows from {path}")
    return rows
