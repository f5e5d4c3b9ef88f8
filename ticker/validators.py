import math
import re
from typing import Optional

from ticker.config import API
from ticker.models import ConversionRequest, TokenRecord


class InvalidSymbolError(ValueError):
    pass


class InvalidArgumentError(ValueError):
    pass


class InvalidTokenDataError(ValueError):
    pass


class TokenIdNormalizer:
    """
    Normalizer for CoinGecko coin ids.
    Handles: bitcoin, Bitcoin, " USD-Coin "
    Output: the lowercase id used both in the request and in the response keys.
    """
    ID_PATTERN = re.compile(r"^[a-z0-9][a-z0-9._-]*$")
    MAX_LEN = 100

    @staticmethod
    def normalize(token: str) -> str:
        if not token or not token.strip():
            raise InvalidSymbolError("Empty token name")

        token_id = token.strip().lower()
        if len(token_id) > TokenIdNormalizer.MAX_LEN or not TokenIdNormalizer.ID_PATTERN.match(token_id):
            raise InvalidSymbolError(f"Invalid token name: {token}")
        return token_id


def _parse_amount(text: str) -> Optional[float]:
    try:
        return float(text)
    except ValueError:
        return None


def parse_conversion(arg: str) -> ConversionRequest:
    """
    Parse `TOKEN:N` (convert N of fiat to TOKEN) or `N:TOKEN`
    (convert N of TOKEN to fiat). Exactly one side must be a number.
    """
    left, sep, right = arg.partition(":")
    if not sep:
        raise InvalidArgumentError(f"Invalid conversion syntax: {arg}")

    left_amount, right_amount = _parse_amount(left), _parse_amount(right)
    if (left_amount is None) == (right_amount is None):
        raise InvalidArgumentError(f"Invalid conversion syntax: {arg}")

    if left_amount is None:
        token, amount, fiat_to_token = left, right_amount, True
    else:
        token, amount, fiat_to_token = right, left_amount, False

    if not math.isfinite(amount) or amount < 0:
        raise InvalidArgumentError(f"Invalid conversion amount: {arg}")

    try:
        token_id = TokenIdNormalizer.normalize(token)
    except InvalidSymbolError as e:
        raise InvalidArgumentError(f"Invalid conversion syntax: {arg}") from e
    return ConversionRequest(token=token_id, amount=amount, fiat_to_token=fiat_to_token)


def validate_top_limit(limit: int) -> int:
    if limit < 0:
        raise InvalidArgumentError(f"Invalid -t value \"{limit}\"")
    if limit > API.top_limit_max:
        raise InvalidArgumentError(
            f"-t cannot be greater than {API.top_limit_max} due to API call limitations"
        )
    return limit


def validate_currency(currency: str) -> str:
    code = currency.strip().lower()
    if not code.isalnum():
        raise InvalidArgumentError(f"Invalid currency: {currency}")
    return code


def validate_record(record: TokenRecord) -> TokenRecord:
    """Reject values the formatters are not defined for."""
    if not math.isfinite(record.price) or record.price < 0:
        raise InvalidTokenDataError(f"Invalid price for {record.name}: {record.price}")
    if not math.isfinite(record.percent_change_24h):
        raise InvalidTokenDataError(
            f"Invalid 24h change for {record.name}: {record.percent_change_24h}"
        )
    rank = record.market_cap_rank
    if rank is not None and not 1 <= rank <= API.top_limit_max:
        raise InvalidTokenDataError(f"Market cap rank out of range for {record.name}: {rank}")
    return record
