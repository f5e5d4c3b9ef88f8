"""
CoinGecko client: fetches quotes and hands validated TokenRecords to the tables.
"""

import asyncio
import json
from typing import Any, Dict, List, Optional, Sequence

import aiohttp

from ticker.config import API, Config
from ticker.logger import logger
from ticker.models import TokenRecord
from ticker.validators import InvalidTokenDataError, validate_record


class ApiRequestError(Exception):
    pass


class ApiResponseError(Exception):
    def __init__(self, message: str, endpoint: str):
        super().__init__(message)
        self.endpoint = endpoint


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def parse_simple_prices(
    data: Any, ids: Sequence[str], currency: str, endpoint: str
) -> Dict[str, TokenRecord]:
    """
    Decode a /simple/price response. Every requested id is checked before
    anything is returned.
    """
    if not isinstance(data, dict) or not data:
        raise ApiResponseError("Empty response from API", endpoint)

    change_key = f"{currency}_24h_change"
    records: Dict[str, TokenRecord] = {}
    for token_id in ids:
        token = data.get(token_id)
        if token is None:
            if "error" in data:
                raise ApiResponseError(f"Request failed: {data['error']}", endpoint)
            raise ApiResponseError("At least one token is missing from the API response", endpoint)
        if not isinstance(token, dict):
            raise ApiResponseError("Missing JSON fields in token data", endpoint)

        price, change = _number(token.get(currency)), _number(token.get(change_key))
        if price is None or change is None:
            raise ApiResponseError("Missing JSON fields in token data", endpoint)
        try:
            records[token_id] = validate_record(
                TokenRecord(name=token_id, price=price, percent_change_24h=change)
            )
        except InvalidTokenDataError as e:
            raise ApiResponseError(str(e), endpoint) from e
    return records


def parse_top_tokens(data: Any, endpoint: str) -> List[TokenRecord]:
    """Decode a /coins/markets page, keeping the API's market-cap order."""
    if not isinstance(data, list):
        if isinstance(data, dict) and "error" in data:
            raise ApiResponseError(f"Request failed: {data['error']}", endpoint)
        raise ApiResponseError(
            "Parsing JSON failed, usually caused by an error in the API call", endpoint
        )

    records = []
    for item in data:
        if not isinstance(item, dict) or not isinstance(item.get("name"), str):
            raise ApiResponseError(
                "Parsing JSON failed, usually caused by an error in the API call", endpoint
            )
        price = _number(item.get("current_price"))
        change = _number(item.get("price_change_percentage_24h"))
        rank = item.get("market_cap_rank")
        rank_ok = rank is None or (isinstance(rank, int) and not isinstance(rank, bool))
        if price is None or change is None or not rank_ok:
            raise ApiResponseError("Missing JSON fields in token data", endpoint)
        try:
            records.append(validate_record(TokenRecord(
                name=item["name"],
                price=price,
                percent_change_24h=change,
                market_cap_rank=rank,
                display_name=True,
            )))
        except InvalidTokenDataError as e:
            raise ApiResponseError(str(e), endpoint) from e
    return records


class CoinGeckoClient:
    SIMPLE_PRICE_PATH = "/simple/price"
    MARKETS_PATH = "/coins/markets"

    def __init__(
        self,
        session: aiohttp.ClientSession,
        base_url: str = Config.API_URL,
        timeout: float = API.default_timeout,
    ) -> None:
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    @staticmethod
    def headers(api_key: Optional[str] = Config.API_KEY) -> Dict[str, str]:
        headers = {"User-Agent": API.user_agent, "Accept": "application/json"}
        if api_key:
            headers[API.api_key_header] = api_key
        return headers

    async def _get_json(self, endpoint: str) -> Any:
        logger.debug("request_sent", endpoint=endpoint)
        try:
            async with self.session.get(endpoint, timeout=self.timeout) as response:
                text = await response.text()
                logger.debug("response_received", endpoint=endpoint, status=response.status)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("api_request_failed", endpoint=endpoint, error=str(e) or type(e).__name__)
            raise ApiRequestError(f"API call failed: {str(e) or type(e).__name__}") from e

        try:
            return json.loads(text)
        except ValueError as e:
            raise ApiResponseError(
                "Error while parsing JSON, most likely a bad API response", endpoint
            ) from e

    async def fetch_simple_prices(self, ids: Sequence[str], currency: str) -> Dict[str, TokenRecord]:
        endpoint = (
            f"{self.base_url}{self.SIMPLE_PRICE_PATH}?ids={','.join(ids)}"
            f"&vs_currencies={currency}&include_24hr_change=true"
        )
        records = parse_simple_prices(await self._get_json(endpoint), ids, currency, endpoint)
        logger.info("records_parsed", endpoint=endpoint, count=len(records))
        return records

    async def fetch_top_tokens(self, limit: int, currency: str) -> List[TokenRecord]:
        endpoint = (
            f"{self.base_url}{self.MARKETS_PATH}?per_page={limit}&page=1"
            f"&price_change_percentage=24h&vs_currency={currency}"
        )
        records = parse_top_tokens(await self._get_json(endpoint), endpoint)
        logger.info("records_parsed", endpoint=endpoint, count=len(records))
        return records
