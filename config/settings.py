"""
General settings for the Daily Puzzle Stats project.
"""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Input dataset contract (column names are fixed)
DATE_COLUMN = "Date"
PERSON_COLUMN = "Person"
GAME_COLUMN = "Game"
REQUIRED_COLUMNS = [DATE_COLUMN, PERSON_COLUMN, GAME_COLUMN]
DATE_FORMAT = "%m/%d/%Y"  # M/D/YYYY, leading zeros optional

# Participant filter value meaning "no filter"
ALL_PARTICIPANTS = "All"

# Loader configuration
MAX_RETRIES = 3
REQUEST_TIMEOUT = 30  # seconds

# Donut layout
PIE_INNER_RATIO = 0.5
PIE_OUTER_RATIO = 0.8
PIE_GUIDE_RATIO = 0.9     # leader line elbow circle
PIE_LABEL_RATIO = 0.95    # horizontal label offset
PIE_LABEL_THRESHOLD = 0.01  # share of total below which a slice gets no label

# Calendar heatmap endpoint colours (count 0 -> max count)
CALENDAR_LOW_COLOR = "#ebedf0"
CALENDAR_HIGH_COLOR = "#216e39"

# Daily totals chart
BAND_PADDING = 0.2
CHART_WIDTH = 800.0
CHART_HEIGHT = 400.0
NICE_TICK_COUNT = 10

# Plot configuration
PIE_COLORMAP = "tab10"
BAR_COLOR = "#69b3a2"
LINE_COLOR = "#d1495b"
PLOT_FIGSIZE_DONUT = (8, 8)
PLOT_FIGSIZE_CALENDAR = (8, 6)
PLOT_FIGSIZE_DAILY = (14, 7)
LABEL_MAX_CHARS = 30

# Logging configuration
LOG_LEVEL = os.getenv("PUZZLE_STATS_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
