"""
Entry model and normalizer.

Turns raw string-keyed rows (``Date``, ``Person``, ``Game``) into immutable
``Entry`` values. Rows that cannot be parsed are dropped; the batch gets a single
warning instead of one per row.
"""
from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

import pandas as pd

from config.settings import DATE_COLUMN, DATE_FORMAT, GAME_COLUMN, PERSON_COLUMN, REQUIRED_COLUMNS
from src.extraction.loader import LoadError, fetch_rows

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Entry:
    """One play of one game by one person on one calendar day."""

    date: datetime.date
    participant: str
    category: str


def normalize(rows: Iterable[Dict[str, str]]) -> List[Entry]:
    """
    Convert raw rows into entries, dropping malformed ones.

    Args:
        rows: Raw records with string fields Date (M/D/YYYY), Person and Game

    Returns:
        Entries in input order
    """
    df = pd.DataFrame.from_records(list(rows), columns=REQUIRED_COLUMNS)
    if df.empty:
        return []

    total = len(df)
    dates = pd.to_datetime(df[DATE_COLUMN].astype("string").str.strip(), format=DATE_FORMAT, errors="coerce")
    people = df[PERSON_COLUMN].astype("string").str.strip()
    games = df[GAME_COLUMN].astype("string").str.strip()

    valid = dates.notna() & people.fillna("").ne("") & games.fillna("").ne("")
    dropped = int((~valid).sum())
    if dropped:
        logger.warning(f"Dropped {dropped} of {total} rows with an unparseable date or missing Person/Game")

    entries = [
        Entry(date=ts.date(), participant=str(person), category=str(game))
        for ts, person, game in zip(dates[valid], people[valid], games[valid])
    ]
    logger.info(f"Normalized {len(entries)} entries")
    return entries


def load_entries(path: str, on_error: Optional[Callable[[LoadError], None]] = None) -> List[Entry]:
    """
    Fetch and normalize the dataset, substituting an empty set on load failure.

    Args:
        path: Local file path or http(s) URL
        on_error: Called with the LoadError when the dataset could not be loaded

    Returns:
        Entries, or an empty list if the dataset could not be loaded
    """
    try:
        rows = fetch_rows(path)
    except LoadError as e:
        logger.error(f"Failed to load dataset, continuing with no data: {e}")
        if on_error is not None:
            on_error(e)
        return []
    return normalize(rows)
