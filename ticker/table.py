"""
Row composition for the console tables.

With the default settings the top table looks like this:

       1   Bitcoin  100.00K +1.000%
       10  Toncoin  10.00K  +10.00%
       100 Jupiter  1.00K   +100.0%
           Stellar  0.12345  0.000%

The token table omits the rank column; the conversion block prints one
`amount FROM -> converted TO` line per request.
"""

from typing import Iterable, List, Sequence, Tuple

from ticker.config import TABLE, TableSettings
from ticker.formatting import (
    format_amount,
    format_change,
    format_conversion,
    format_name,
    format_rank,
    format_value,
    pad,
)
from ticker.models import ConversionRequest, TokenRecord


def compose_top_rows(records: Iterable[TokenRecord], settings: TableSettings = TABLE) -> List[str]:
    rows = []
    for record in records:
        if record.market_cap_rank is None:
            rank = pad("", settings.rank_len)
        else:
            rank = format_rank(record.market_cap_rank, settings)
        rows.append(
            f"{settings.top_indent}{rank} "
            f"{format_name(record.name, settings.name_len, record.display_name, settings)} "
            f"{format_value(record.price, settings)} "
            f"{format_change(record.percent_change_24h, settings)}"
        )
    return rows


def compose_token_rows(
    records: Iterable[TokenRecord],
    with_names: bool = True,
    settings: TableSettings = TABLE,
) -> List[str]:
    rows = []
    for record in records:
        cells = [
            format_value(record.price, settings),
            format_change(record.percent_change_24h, settings),
        ]
        if with_names:
            cells.insert(0, format_name(record.name, settings.name_len, record.display_name, settings))
        rows.append(settings.tokens_indent + " ".join(cells))
    return rows


def compose_conversion_rows(
    pairs: Iterable[Tuple[ConversionRequest, TokenRecord]],
    currency: str,
    settings: TableSettings = TABLE,
) -> List[str]:
    """One line per conversion; the caller guarantees non-zero prices for fiat -> token."""
    fiat = currency.upper()
    rows = []
    for request, record in pairs:
        token = format_name(record.name, cased=record.display_name, settings=settings)
        source, target = (fiat, token) if request.fiat_to_token else (token, fiat)
        converted = format_conversion(request.convert(record.price), settings)
        rows.append(
            f"{settings.eval_indent}{format_amount(request.amount)} {source} -> {converted} {target}"
        )
    return rows


def frame_block(rows: Sequence[str], last: bool) -> List[str]:
    """A blank line above every block, and below the last one only."""
    lines = [""] + list(rows)
    if last:
        lines.append("")
    return lines


def render_report(blocks: Sequence[Sequence[str]]) -> List[str]:
    lines: List[str] = []
    for index, rows in enumerate(blocks):
        lines.extend(frame_block(rows, last=index == len(blocks) - 1))
    return lines
