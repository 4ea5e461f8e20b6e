"""CSV export of order rows."""

import csv
from datetime import datetime, timezone
from io import StringIO

CSV_MEDIA_TYPE = "text/csv;charset=utf-8"
CSV_HEADER = ["ID", "Service", "Vendor", "Booking Date", "Time", "Amount", "Status", "Created At"]


def _text(value) -> str:
    if value is None:
        return ""
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def orders_csv(rows) -> str:
    """Render rows as CSV; fields with a comma, quote or newline get quoted."""

    output = StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for row in rows:
        writer.writerow(
            [
                _text(row.id),
                _text(row.service_name),
                _text(row.vendor_name),
                _text(row.booking_date),
                _text(row.booking_time),
                _text(row.amount),
                _text(row.status),
                _text(row.created_at),
            ]
        )
    return output.getvalue()


def export_filename(now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    return f"orders_{now.date().isoformat()}.csv"
