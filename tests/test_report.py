"""
Unit tests for the text review.
"""

from conftest import make_trade
from tradeanalyzer.core.models import Currency, Settings
from tradeanalyzer.review.report import export_review, format_review, format_trade_line
from tradeanalyzer.review.stats import build_view


class TestFormatReview:
    """Test plain-text rendering."""

    def test_empty_journal(self):
        review = format_review(build_view([], Settings()))
        assert "Balance: $1,000.00" in review
        assert "No trades logged yet." in review

    def test_sections(self):
        trades = [
            make_trade("2", "2024-01-06", 50, "loss", "stopped out"),
            make_trade("1", "2024-01-05", 200, "profit"),
        ]
        review = format_review(build_view(trades, Settings(1000.0, Currency.EUR)))

        assert "Balance: €1,150.00" in review
        assert "Win rate:      50.0%" in review
        assert "Profit factor: 4.00" in review
        assert "2024-S1" in review
        assert "2024-01" in review
        assert "stopped out" in review

    def test_history_limit(self):
        trades = [make_trade(str(i), f"2024-01-{i:02d}", 1) for i in range(1, 6)]
        review = format_review(build_view(trades, Settings()), history_limit=2)
        assert "Recent trades (2 of 5)" in review

    def test_trade_line(self):
        line = format_trade_line(make_trade("1", "2024-01-05", 50, "loss"), Currency.MGA)
        assert line.startswith("05/01/2024")
        assert "-Ar50.00" in line

    def test_export(self, tmp_path):
        view = build_view([make_trade("1", "2024-01-05", 200)], Settings())
        path = export_review(view, str(tmp_path / "reviews"))
        assert path.endswith(".txt")
        with open(path, encoding="utf-8") as f:
            assert "Balance: $1,200.00" in f.read()
