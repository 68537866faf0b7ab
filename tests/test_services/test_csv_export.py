"""Tests for CSV export of projection rows."""

import csv
import io
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from adprojection.services.export import CSV_COLUMNS, export_filename, projection_csv


def make_row(month_index: int) -> SimpleNamespace:
    return SimpleNamespace(
        month_index=month_index,
        period_start=date(2025, month_index, 1),
        period_end=date(2025, month_index, 28),
        creators=1000 + month_index,
        episodes=800,
        total_impressions=640_000,
        gross_revenue_total=Decimal("8128.00"),
        creator_payout=Decimal("4876.80"),
        platform_net_revenue=Decimal("2438.40"),
    )


class TestProjectionCsv:
    """Test CSV rendering."""

    def test_header_only_when_empty(self) -> None:
        assert projection_csv([]) == ",".join(h for h, _ in CSV_COLUMNS) + "\n"

    def test_rows(self) -> None:
        content = projection_csv([make_row(1), make_row(2)])

        records = list(csv.DictReader(io.StringIO(content)))
        assert len(records) == 2
        assert records[0]["Month"] == "1"
        assert records[0]["Period Start"] == "2025-01-01"
        assert records[1]["Period End"] == "2025-02-28"
        assert records[1]["Creators"] == "1002"
        assert records[0]["Gross Revenue"] == "8128.00"
        assert records[0]["Creator Payout"] == "4876.80"
        assert records[0]["Platform Revenue"] == "2438.40"

    def test_filename(self) -> None:
        assert export_filename("abc", "2025-01-31") == "ad-financial-projection-abc-2025-01-31.csv"
