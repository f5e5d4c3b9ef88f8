"""
Data models passed from the CoinGecko client to the table composer.
Pure dataclasses; validation lives in ticker.validators.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TokenRecord:
    """One asset quote as delivered by the API."""
    name: str
    price: float
    percent_change_24h: float
    market_cap_rank: Optional[int] = None
    display_name: bool = False   # True for cased names from /coins/markets


@dataclass(frozen=True)
class ConversionRequest:
    """A `TOKEN:N` (fiat -> token) or `N:TOKEN` (token -> fiat) argument."""
    token: str
    amount: float
    fiat_to_token: bool

    def convert(self, price: float) -> float:
        if self.fiat_to_token:
            return self.amount / price
        return self.amount * price
