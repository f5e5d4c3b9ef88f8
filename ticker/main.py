"""
Command-line entry point: parses arguments, fetches quotes and prints the tables.
"""

import argparse
import asyncio
import sys
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import aiohttp

from ticker.coingecko import ApiRequestError, ApiResponseError, CoinGeckoClient
from ticker.config import API, API_HINT, Config
from ticker.logger import configure_logging, logger
from ticker.models import ConversionRequest, TokenRecord
from ticker.table import compose_conversion_rows, compose_token_rows, compose_top_rows, render_report
from ticker.validators import (
    InvalidTokenDataError,
    TokenIdNormalizer,
    parse_conversion,
    validate_currency,
    validate_top_limit,
)

HELP_EPILOG = """
arguments:
  TOKEN                 current value of TOKEN in fiat
  TOKEN:N               convert N of fiat to TOKEN
  N:TOKEN               convert N of TOKEN to fiat
"""


@dataclass(frozen=True)
class ReportRequest:
    currency: str
    conversions: List[ConversionRequest] = field(default_factory=list)
    tokens: List[str] = field(default_factory=list)
    top: int = 0

    @property
    def price_ids(self) -> List[str]:
        """Ids for the single /simple/price call, in first-seen order."""
        ids = [c.token for c in self.conversions] + self.tokens
        return list(dict.fromkeys(ids))

    @property
    def is_empty(self) -> bool:
        return not self.conversions and not self.tokens and self.top == 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ticker",
        description="Crypto prices and 24h changes from CoinGecko, as aligned console tables.",
        epilog=HELP_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("tokens", nargs="*", metavar="TOKEN", help="TOKEN, TOKEN:N or N:TOKEN")
    parser.add_argument(
        "-c", "--currency", default=Config.DEFAULT_CURRENCY,
        help=f'use fiat currency C (default is "{Config.DEFAULT_CURRENCY}")', metavar="C",
    )
    parser.add_argument(
        "-t", "--top", type=int, default=0, metavar="N",
        help=f"top N tokens by market cap (at most {API.top_limit_max})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log API calls to stderr")
    return parser


def build_request(options: argparse.Namespace) -> ReportRequest:
    """Split positional arguments into conversions and plain tokens."""
    conversions, tokens = [], []
    for arg in options.tokens:
        if ":" in arg:
            conversions.append(parse_conversion(arg))
        else:
            tokens.append(TokenIdNormalizer.normalize(arg))
    return ReportRequest(
        currency=validate_currency(options.currency),
        conversions=conversions,
        tokens=tokens,
        top=validate_top_limit(options.top),
    )


def build_report(
    request: ReportRequest,
    quotes: Dict[str, TokenRecord],
    top_records: Sequence[TokenRecord] = (),
) -> List[str]:
    """Compose every requested block in print order: conversions, tokens, top."""
    blocks = []
    if request.conversions:
        pairs: List[Tuple[ConversionRequest, TokenRecord]] = []
        for conversion in request.conversions:
            record = quotes[conversion.token]
            if conversion.fiat_to_token and record.price == 0:
                raise InvalidTokenDataError(f"Cannot convert to {conversion.token}: price is zero")
            pairs.append((conversion, record))
        blocks.append(compose_conversion_rows(pairs, request.currency))
    if request.tokens:
        # A lone token as the final block is shown without its name
        with_names = len(request.tokens) > 1 or request.top > 0
        blocks.append(compose_token_rows([quotes[t] for t in request.tokens], with_names))
    if request.top:
        blocks.append(compose_top_rows(top_records))
    return render_report(blocks)


async def fetch_report(request: ReportRequest, timeout: float = API.default_timeout) -> List[str]:
    async with aiohttp.ClientSession(headers=CoinGeckoClient.headers()) as session:
        client = CoinGeckoClient(session, timeout=timeout)
        quotes_task = client.fetch_simple_prices(request.price_ids, request.currency) if request.price_ids else None
        top_task = client.fetch_top_tokens(request.top, request.currency) if request.top else None

        tasks = [task for task in (quotes_task, top_task) if task is not None]
        results = list(await asyncio.gather(*tasks, return_exceptions=True))

    for result in results:
        if isinstance(result, Exception):
            raise result

    quotes = results.pop(0) if quotes_task is not None else {}
    top_records = results.pop(0) if top_task is not None else []
    return build_report(request, quotes, top_records)


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    if not argv:
        parser.print_help()
        return 1

    options = parser.parse_args(argv)
    configure_logging(
        json_logs=Config.JSON_LOGS,
        level="DEBUG" if options.verbose else Config.LOG_LEVEL,
    )

    try:
        request = build_request(options)
        timeout = Config.request_timeout()
    except ValueError as e:
        print(e, file=sys.stderr)
        return 1
    if request.is_empty:
        print("No tokens specified, see -h", file=sys.stderr)
        return 1

    try:
        lines = asyncio.run(fetch_report(request, timeout))
    except ApiRequestError as e:
        print(e, file=sys.stderr)
        return 1
    except ApiResponseError as e:
        logger.info("api_response_rejected", endpoint=e.endpoint, reason=str(e))
        print(e, file=sys.stderr)
        print(f"Endpoint: {e.endpoint}", file=sys.stderr)
        print(API_HINT, file=sys.stderr)
        return 1
    except InvalidTokenDataError as e:
        print(e, file=sys.stderr)
        return 1

    print("\n".join(lines))
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
