"""
Generate a synthetic puzzle log for trying out the dashboards.

Usage (from project root):
    python -m src.scripts.generate_test_data [--output data/puzzles.csv] [--days 30] [--seed 7]
"""
import argparse
import datetime
import logging
import os
import random
from typing import Dict, List, Optional

import pandas as pd

from config.paths import DATA_DIR
from config.settings import DATE_COLUMN, GAME_COLUMN, PERSON_COLUMN, REQUIRED_COLUMNS
from src.utils.logging import setup_logging

logger = logging.getLogger(__name__)

# Constants
DEFAULT_PEOPLE = ["Alex", "Blair", "Casey", "Devon", "Emery"]
DEFAULT_GAMES = ["Wordle", "Connections", "Strands", "Mini Crossword", "Spelling Bee", "Sudoku"]
TIME_SPAN_DAYS = 30
PLAY_PROBABILITY = 0.6  # chance that a person plays a given game on a given day

def format_date(day: datetime.date) -> str:
    """Format a date the way the log does: M/D/YYYY without leading zeros."""
    return f"{day.month}/{day.day}/{day.year}"

def generate_rows(
    start: datetime.date,
    days: int = TIME_SPAN_DAYS,
    people: Optional[List[str]] = None,
    games: Optional[List[str]] = None,
    seed: Optional[int] = None,
) -> List[Dict[str, str]]:
    """
    Generate raw log rows.

    Each person has a favourite subset of games and plays each of them on a
    random share of days, so the charts get uneven, realistic-looking data.

    Args:
        start: First day of the log
        days: Number of days to cover
        people: Participant names
        games: Game names
        seed: Random seed for reproducible output

    Returns:
        Rows keyed by Date, Person and Game, in date order
    """
    rng = random.Random(seed)
    people = people or DEFAULT_PEOPLE
    games = games or DEFAULT_GAMES

    favourites = {person: rng.sample(games, k=rng.randint(1, len(games))) for person in people}

    rows = []
    for offset in range(days):
        day = start + datetime.timedelta(days=offset)
        for person in people:
            for game in favourites[person]:
                if rng.random() < PLAY_PROBABILITY:
                    rows.append({DATE_COLUMN: format_date(day), PERSON_COLUMN: person, GAME_COLUMN: game})
    return rows

def write_rows(rows: List[Dict[str, str]], path: str) -> str:
    output_dir = os.path.dirname(path)
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
    pd.DataFrame(rows, columns=REQUIRED_COLUMNS).to_csv(path, index=False)
    logger.info(f"Saved {len(rows)} rows to {path}")
    return path

def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description='Generate a synthetic puzzle log')
    parser.add_argument('--output', default=os.path.join(DATA_DIR, "puzzles.csv"), help='CSV file to write')
    parser.add_argument('--start', default=None, help='First day (YYYY-MM-DD); defaults to the 1st of this month')
    parser.add_argument('--days', type=int, default=TIME_SPAN_DAYS, help='Number of days to generate')
    parser.add_argument('--seed', type=int, default=None, help='Random seed')
    args = parser.parse_args(argv)

    setup_logging(log_type="generate")

    if args.start:
        start = datetime.date.fromisoformat(args.start)
    else:
        start = datetime.date.today().replace(day=1)

    rows = generate_rows(start, days=args.days, seed=args.seed)
    write_rows(rows, args.output)
    print(f"Data generation complete! {len(rows)} rows written to {args.output}")

if __name__ == "__main__":
    main()
