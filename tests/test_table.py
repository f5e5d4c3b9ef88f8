"""
Tests for ticker.table row composition.
"""

from ticker.models import ConversionRequest, TokenRecord
from ticker.table import (
    compose_conversion_rows,
    compose_token_rows,
    compose_top_rows,
    frame_block,
    render_report,
)


class TestTopRows:
    """Tests for the ranked table."""

    def test_row_layout(self):
        record = TokenRecord("Bitcoin", 67120.5, 1.2, market_cap_rank=1, display_name=True)
        assert compose_top_rows([record]) == ["   1   Bitcoin  67.12K  +1.200%"]

    def test_columns_align_across_ranks(self):
        records = [
            TokenRecord("Bitcoin", 67120.5, 1.2, market_cap_rank=1, display_name=True),
            TokenRecord("Toncoin", 5.4321, -10.5, market_cap_rank=12, display_name=True),
            TokenRecord("Jupiter", 0.91, 100.0, market_cap_rank=100, display_name=True),
        ]
        rows = compose_top_rows(records)
        assert rows[1] == "   12  Toncoin  5.43    -10.50%"
        assert rows[2] == "   100 Jupiter  0.91000 +100.0%"
        assert len({len(row) for row in rows}) == 1

    def test_missing_rank_is_blank(self):
        record = TokenRecord("Stellar", 0.12345, 0.0, display_name=True)
        assert compose_top_rows([record]) == ["       Stellar  0.12345  0.000%"]

    def test_display_names_keep_casing(self):
        record = TokenRecord("dogwifhat", 2.0, 3.0, market_cap_rank=50, display_name=True)
        row = compose_top_rows([record])[0]
        assert "Dogwifh-" not in row
        assert "dogwifh- " in row


class TestTokenRows:
    """Tests for the per-token table."""

    def test_named_row(self):
        record = TokenRecord("bitcoin", 0.5, -2.5)
        assert compose_token_rows([record]) == ["     Bitcoin  0.50000 -2.500%"]

    def test_unnamed_row(self):
        record = TokenRecord("bitcoin", 0.5, -2.5)
        assert compose_token_rows([record], with_names=False) == ["     0.50000 -2.500%"]

    def test_sentinels_keep_alignment(self):
        rows = compose_token_rows([
            TokenRecord("moon", 1e16, 5000.0),
            TokenRecord("rug", 0.001, -2000.0),
        ])
        assert rows == [
            "     Moon     PUMPED! PUMPED!",
            "     Rug      0.00100 DUMPED!",
        ]


class TestConversionRows:
    """Tests for the conversion block."""

    def test_fiat_to_token(self):
        pairs = [(ConversionRequest("bitcoin", 100.0, True), TokenRecord("bitcoin", 50000.0, 1.0))]
        assert compose_conversion_rows(pairs, "usd") == ["   100 USD -> 0.0020000 Bitcoin"]

    def test_token_to_fiat(self):
        pairs = [(ConversionRequest("ethereum", 2.0, False), TokenRecord("ethereum", 3450.0, 1.0))]
        assert compose_conversion_rows(pairs, "eur") == ["   2 Ethereum -> 6900.0 EUR"]


class TestFraming:
    """Tests for blank-line framing of blocks."""

    def test_frame_inner_block(self):
        assert frame_block(["a"], last=False) == ["", "a"]

    def test_frame_last_block(self):
        assert frame_block(["a"], last=True) == ["", "a", ""]

    def test_report(self):
        assert render_report([["a"], ["b", "c"]]) == ["", "a", "", "b", "c", ""]

    def test_empty_report(self):
        assert render_report([]) == []
