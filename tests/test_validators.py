"""
Tests for ticker.validators.
"""

import math

import pytest

from ticker.models import TokenRecord
from ticker.validators import (
    InvalidArgumentError,
    InvalidSymbolError,
    InvalidTokenDataError,
    TokenIdNormalizer,
    parse_conversion,
    validate_currency,
    validate_record,
    validate_top_limit,
)


class TestTokenIdNormalizer:
    """Tests for CoinGecko id normalization."""

    def test_lowercases_and_strips(self):
        assert TokenIdNormalizer.normalize(" Bitcoin ") == "bitcoin"

    def test_hyphenated_id(self):
        assert TokenIdNormalizer.normalize("usd-coin") == "usd-coin"

    @pytest.mark.parametrize("token", ["", "   ", "bit coin", "btc,eth", "-bitcoin"])
    def test_rejects_invalid(self, token):
        with pytest.raises(InvalidSymbolError):
            TokenIdNormalizer.normalize(token)


class TestParseConversion:
    """Tests for TOKEN:N / N:TOKEN arguments."""

    def test_fiat_to_token(self):
        request = parse_conversion("bitcoin:100")
        assert request.token == "bitcoin"
        assert request.amount == 100.0
        assert request.fiat_to_token is True

    def test_token_to_fiat(self):
        request = parse_conversion("2.5:Ethereum")
        assert request.token == "ethereum"
        assert request.amount == 2.5
        assert request.fiat_to_token is False

    @pytest.mark.parametrize("arg", ["1:2", "bitcoin:ethereum", "bitcoin", "bitcoin:inf", ":5"])
    def test_rejects_invalid(self, arg):
        with pytest.raises(InvalidArgumentError):
            parse_conversion(arg)

    def test_error_message(self):
        with pytest.raises(InvalidArgumentError, match="Invalid conversion syntax: 1:2"):
            parse_conversion("1:2")

    def test_convert(self):
        assert parse_conversion("bitcoin:100").convert(50.0) == 2.0
        assert parse_conversion("3:bitcoin").convert(50.0) == 150.0


class TestTopLimit:
    """Tests for -t validation."""

    def test_limits(self):
        assert validate_top_limit(0) == 0
        assert validate_top_limit(250) == 250

    def test_above_page_size(self):
        with pytest.raises(InvalidArgumentError, match="cannot be greater than 250"):
            validate_top_limit(251)

    def test_negative(self):
        with pytest.raises(InvalidArgumentError):
            validate_top_limit(-1)


class TestCurrency:
    def test_lowercases(self):
        assert validate_currency("EUR") == "eur"

    def test_rejects_symbols(self):
        with pytest.raises(InvalidArgumentError):
            validate_currency("u$d")


class TestValidateRecord:
    """Tests for record validation ahead of formatting."""

    def test_valid_record_passes(self):
        record = TokenRecord("bitcoin", 67000.0, -1.5, market_cap_rank=1)
        assert validate_record(record) is record

    @pytest.mark.parametrize("record", [
        TokenRecord("bad", -1.0, 0.0),
        TokenRecord("bad", math.nan, 0.0),
        TokenRecord("bad", math.inf, 0.0),
        TokenRecord("bad", 1.0, math.nan),
        TokenRecord("bad", 1.0, 0.0, market_cap_rank=0),
        TokenRecord("bad", 1.0, 0.0, market_cap_rank=251),
    ])
    def test_rejects_malformed(self, record):
        with pytest.raises(InvalidTokenDataError):
            validate_record(record)
