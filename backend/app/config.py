"""
Solar Planner configuration and constants.
"""

from enum import Enum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class CompassDirection(str, Enum):
    NORTH = "N"  # panel faces north (sun north of the site)
    SOUTH = "S"


class TiltMethod(str, Enum):
    MONTHLY_OPTIMAL = "monthly_optimal"
    YEARLY_FIXED = "yearly_fixed"
    FLAT = "flat"


MONTH_NAMES: list[str] = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]

# 1 kWh = 3.6 MJ
MJ_PER_KWH = 3.6

# Non-leap year
DAYS_IN_MONTHS: list[int] = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]
# Approximate day of year at the middle of each month
MID_MONTH_DAY_OF_YEAR: list[int] = [15, 46, 74, 105, 135, 166, 196, 227, 258, 288, 319, 349]

# Input limits
MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0
MAX_LOCATION_LENGTH = 500
MAX_TILT_DEGREES = 90.0

# Output precision
WEATHER_DECIMALS = 1
PSH_DECIMALS = 2
COORDINATE_DECIMALS = 4
ENERGY_DECIMALS = 2     # daily, monthly and annual kWh
HOURLY_DECIMALS = 3     # hourly kWh

CACHE_KEY_PREFIX = "location:"

DEFAULT_YEARS_OF_DATA = 2
DEFAULT_CACHE_TTL = 2592000  # 30 days, seconds
DEFAULT_TOKEN_EXPIRY_HOURS = 24

DEFAULT_ALLOWED_ORIGINS = [
    "https://solar-planner.pages.dev",
    "http://localhost:3000",
    "http://localhost:8080",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:8080",
]


class Settings(BaseSettings):
    """Runtime settings read from the environment (or a local .env file)."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    visual_crossing_api_key: str = ""
    site_password: str = ""
    years_of_data: int = DEFAULT_YEARS_OF_DATA
    cache_ttl: int = DEFAULT_CACHE_TTL
    token_expiry_hours: int = DEFAULT_TOKEN_EXPIRY_HOURS
    allowed_origins: list[str] = DEFAULT_ALLOWED_ORIGINS
    log_level: str = "INFO"
    http_timeout: float = 30.0
    host: str = "127.0.0.1"
    port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load and cache settings for the process."""
    return Settings()
