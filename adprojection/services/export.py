"""CSV export of stored projection rows."""

import csv
import io
from collections.abc import Sequence

from adprojection.models import AdFinancialProjection

CSV_COLUMNS: list[tuple[str, str]] = [
    ("Month", "month_index"),
    ("Period Start", "period_start"),
    ("Period End", "period_end"),
    ("Creators", "creators"),
    ("Episodes", "episodes"),
    ("Impressions", "total_impressions"),
    ("Gross Revenue", "gross_revenue_total"),
    ("Creator Payout", "creator_payout"),
    ("Platform Revenue", "platform_net_revenue"),
]


def projection_csv(rows: Sequence[AdFinancialProjection]) -> str:
    """Render rows as CSV with a header line, dates in ISO format."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow([header for header, _ in CSV_COLUMNS])
    for row in rows:
        writer.writerow(
            [
                value.isoformat() if hasattr(value, "isoformat") else value
                for value in (getattr(row, attr) for _, attr in CSV_COLUMNS)
            ]
        )
    return buffer.getvalue()


def export_filename(scenario_id: str, generated_on: str) -> str:
    return f"ad-financial-projection-{scenario_id}-{generated_on}.csv"
