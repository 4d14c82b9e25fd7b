"""
Path configurations for the Daily Puzzle Stats project.
"""
import os
from dotenv import load_dotenv

load_dotenv()

# Get the project root directory
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

# Data directories
DATA_DIR = os.path.join(PROJECT_ROOT, "data")
LOGS_DIR = os.path.join(PROJECT_ROOT, "logs")

# Define default paths (PUZZLE_STATS_DATA may also be an http(s) URL)
DATA_PATH = os.getenv("PUZZLE_STATS_DATA", os.path.join(DATA_DIR, "puzzles.csv"))
OUTPUT_PATH = os.getenv("PUZZLE_STATS_OUTPUT_DIR", os.path.join(PROJECT_ROOT, "docs"))
