"""
Engine constants and configuration values.

This module contains all hardcoded values used throughout the discovery engine.
Values are organized by category for easy maintenance and auditing.
"""

from typing import Final


# =============================================================================
# Cycle Search
# =============================================================================

# Number of distinct currencies in a cycle
CYCLE_LENGTH: Final[int] = 3

# Opportunities must clear this profit (in percent) to be reported
MIN_PROFIT_PCT: Final[float] = 0.01


# =============================================================================
# Quantity Normalization
# =============================================================================

# Default multiplier search bound
DEFAULT_PRECISION: Final[int] = 1000

# Allowed precision range exposed to users
MIN_PRECISION: Final[int] = 1
MAX_PRECISION: Final[int] = 100_000

# Absolute distance from an integer accepted as "integral"
INTEGER_TOLERANCE: Final[float] = 1e-4


# =============================================================================
# Risk Scoring
# =============================================================================

MAX_RISK_SCORE: Final[float] = 10.0

# Each component is capped independently before summing
MAX_PROFIT_RISK: Final[float] = 5.0
MAX_VARIANCE_RISK: Final[float] = 5.0

PROFIT_RISK_DIVISOR: Final[float] = 10.0
VARIANCE_RISK_MULTIPLIER: Final[float] = 100.0

# Upper bounds (inclusive) of the LOW and MEDIUM risk bands
LOW_RISK_MAX: Final[float] = 3.0
MEDIUM_RISK_MAX: Final[float] = 6.0

MAX_CONFIDENCE: Final[float] = 100.0


# =============================================================================
# Rate Configuration
# =============================================================================

# Rates further than this many standard deviations from the mean are outliers
OUTLIER_STDDEV_FACTOR: Final[float] = 2.0


# =============================================================================
# Storage
# =============================================================================

STORAGE_KEY_CURRENCIES: Final[str] = "arbitrage_currencies"
STORAGE_KEY_RATES: Final[str] = "arbitrage_rates"

DEFAULT_STORE_PATH: Final[str] = "triarb_store.json"

CURRENCY_ID_PREFIX: Final[str] = "currency"
CURRENCY_ID_SUFFIX_LENGTH: Final[int] = 9


# =============================================================================
# Logging & Display
# =============================================================================

LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT: Final[str] = "%Y-%m-%d %H:%M:%S"

# Maximum log queue size
MAX_LOG_QUEUE_SIZE: Final[int] = 10_000

# Decimal places when displaying amounts
AMOUNT_DISPLAY_DECIMALS: Final[int] = 4


# =============================================================================
# Icons
# =============================================================================

# Extension assumed when an icon reference has none
DEFAULT_ICON_EXTENSION: Final[str] = ".png"

ICON_EXTENSIONS: Final[frozenset[str]] = frozenset({".png", ".jpg", ".jpeg", ".svg", ".webp"})

# Shown when a currency's own icon cannot be resolved
DEFAULT_ICON_NAME: Final[str] = "CurrencyIdentification"
