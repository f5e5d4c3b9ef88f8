"""
Centralized configuration for the ticker CLI.
Table layout constants, API endpoints and environment settings in one place.
"""

import math
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()


# --- TABLE LAYOUT ---
@dataclass(frozen=True)
class TableSettings:
    """Column widths and display policy for the console tables."""
    name_len: int = 8
    value_len: int = 7
    value_max_decimals: int = 5
    change_len: int = 7
    change_zero_threshold: float = 0.001
    change_max_tier: int = 3    # |change| >= 10^3 % is a sentinel
    rank_len: int = 3           # top list is capped at 250
    eval_digits: int = 5
    magnitude_suffixes: Tuple[str, ...] = ("", "K", "M", "B", "T")
    pumped: str = "PUMPED!"
    dumped: str = "DUMPED!"
    truncation_marker: str = "-"

    # --- ROW INDENTS ---
    eval_indent: str = "   "
    tokens_indent: str = "     "
    top_indent: str = "   "


TABLE = TableSettings()


# --- API ---
@dataclass(frozen=True)
class ApiSettings:
    """CoinGecko endpoint configuration."""
    base_url: str = "https://api.coingecko.com/api/v3"
    user_agent: str = "ticker-cli"
    api_key_header: str = "x-cg-demo-api-key"
    top_limit_max: int = 250    # single page of /coins/markets
    default_timeout: float = 10.0


API = ApiSettings()


API_HINT = (
    "Verify that all arguments are spelled correctly, "
    "or wait a few minutes if sending frequent requests"
)


class ConfigError(ValueError):
    pass


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """Runtime configuration with environment variables."""

    DEFAULT_CURRENCY: str = os.getenv("TICKER_CURRENCY", "usd")
    API_URL: str = os.getenv("COINGECKO_API_URL", API.base_url).rstrip("/")
    API_KEY: Optional[str] = os.getenv("COINGECKO_API_KEY") or None
    TIMEOUT_RAW: Optional[str] = os.getenv("TICKER_TIMEOUT")

    # --- LOGGING ---
    LOG_LEVEL: str = os.getenv("TICKER_LOG_LEVEL", "WARNING").upper()
    JSON_LOGS: bool = _env_flag("TICKER_JSON_LOGS")

    @classmethod
    def request_timeout(cls) -> float:
        """Seconds per API call; TICKER_TIMEOUT must be a positive number."""
        if cls.TIMEOUT_RAW is None or not cls.TIMEOUT_RAW.strip():
            return API.default_timeout
        message = f"Invalid TICKER_TIMEOUT value \"{cls.TIMEOUT_RAW}\""
        try:
            timeout = float(cls.TIMEOUT_RAW)
        except ValueError as e:
            raise ConfigError(message) from e
        if not math.isfinite(timeout) or timeout <= 0:
            raise ConfigError(message)
        return timeout
