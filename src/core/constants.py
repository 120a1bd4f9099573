"""
Core constants and limits.

Defines the bucket layouts, document keys and resource limits shared by
the statistics engine, the store and the API.
"""

# Time Buckets
WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
HOURS_PER_DAY = 24
HOUR_KEYS = tuple(str(hour) for hour in range(HOURS_PER_DAY))

# Month labels as written by the backtest producer (Spanish abbreviations)
MONTH_LABELS = (
    "Ene",
    "Feb",
    "Mar",
    "Abr",
    "May",
    "Jun",
    "Jul",
    "Ago",
    "Sep",
    "Oct",
    "Nov",
    "Dic",
)

# Trade outcome sequences analysed by the pattern analyzer
SEQUENCE_SEPARATOR = "-"

# Profit distribution
MAX_HISTOGRAM_BINS = 15
DISTRIBUTION_PERCENTILES = (25, 50, 75)

# Series builder
DEFAULT_EQUITY_JITTER = 10.0  # +/- currency units of cosmetic noise

# Calendar bucket key format
CALENDAR_DATE_FORMAT = "%Y-%m-%d"

# Store Limits
MAX_BACKTEST_ID_LENGTH = 100
DOCUMENT_SUFFIX = ".json"
DEFAULT_CACHE_SIZE = 64  # Parsed documents kept in memory
DOCUMENT_INDENT = 2

# Schema markers
NEW_SCHEMA_MARKER = "backtest_id"
SCHEMA_NEW = "new"
SCHEMA_LEGACY = "legacy"

# Demo backtest
DEMO_BACKTEST_ID = "demo"
DEMO_SEED = 20240101
DEMO_TRADE_COUNT = 61
