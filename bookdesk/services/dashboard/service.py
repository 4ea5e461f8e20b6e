"""Order-listing view.

Holds one bounded window of recent bookings in memory and answers every
search/filter/sort/page query from it without touching the database. Only
`refresh` goes back to the store, and it replaces the window wholesale.
"""

import threading
from datetime import date, datetime, time, timezone
from decimal import Decimal
from math import ceil

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload

from bookdesk.common.logging import logger
from bookdesk.common.metrics import store_fetch_total, view_rows_loaded
from bookdesk.services.dashboard.export import orders_csv
from bookdesk.services.dashboard.models import Booking
from bookdesk.services.dashboard.schemas import OrderPage, OrderQuery, OrderRecord, RefreshResult

KNOWN_STATUSES = ("pending", "confirmed", "completed", "cancelled")


def display_status(status: str | None) -> str:
    """Lower-cased status for display, `unknown` for anything unrecognized."""

    value = (status or "").lower()
    return value if value in KNOWN_STATUSES else "unknown"


def store_error_message(exc: SQLAlchemyError) -> str:
    """Remote error text as reported by the driver, without SQLAlchemy framing."""

    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


def _instant(value: date | datetime | None) -> float:
    # Missing dates sort as epoch zero; naive values are taken as UTC.
    if value is None:
        return 0.0
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.timestamp()
    return datetime.combine(value, time.min, tzinfo=timezone.utc).timestamp()


SORT_KEYS = {
    "created_at": lambda r: _instant(r.created_at),
    "booking_date": lambda r: _instant(r.booking_date),
    "amount": lambda r: r.amount if r.amount is not None else Decimal(0),
    "status": lambda r: r.status or "",
}


def filter_orders(rows: list[OrderRecord], search: str, status: str) -> list[OrderRecord]:
    """Apply the status filter, then the free-text search."""

    result = rows
    if status != "all":
        result = [r for r in result if (r.status or "").lower() == status]
    if search.strip():
        term = search.lower()
        result = [
            r
            for r in result
            if term in r.id.lower()
            or term in (r.service_name or "").lower()
            or term in (r.vendor_name or "").lower()
        ]
    return result


def sort_orders(rows: list[OrderRecord], sort_by: str, sort_dir: str) -> list[OrderRecord]:
    """Stable sort; ties keep their incoming order in both directions."""

    return sorted(rows, key=SORT_KEYS[sort_by], reverse=sort_dir == "desc")


def paginate(rows: list[OrderRecord], page: int, page_size: int) -> OrderPage:
    """Slice one page, clamping `page` into the valid range."""

    total = len(rows)
    total_pages = max(1, ceil(total / page_size))
    current = min(max(page, 1), total_pages)
    start = (current - 1) * page_size
    items = rows[start : start + page_size]
    return OrderPage(
        items=items,
        total=total,
        page=current,
        page_size=page_size,
        total_pages=total_pages,
        showing_from=start + min(1, len(items)),
        showing_to=start + len(items),
    )


def to_record(booking: Booking) -> OrderRecord:
    return OrderRecord(
        id=booking.id,
        booking_date=booking.booking_date,
        booking_time=booking.booking_time,
        status=booking.status,
        amount=booking.amount,
        created_at=booking.created_at,
        service_name=booking.service.name if booking.service else None,
        vendor_name=booking.vendor.business_name if booking.vendor else None,
    )


class OrderListView:
    """In-memory order window with fetch sequencing.

    Every fetch takes a sequence number. A result is applied only if no newer
    fetch has been applied already, so an overlapping slow refresh cannot
    overwrite fresher rows.
    """

    table = "bookings"

    def __init__(self, session_factory, limit: int = 200, service_name: str = "dashboard") -> None:
        self.session_factory = session_factory
        self.limit = limit
        self.service_name = service_name
        self.error: str | None = None
        self.loaded = False
        self._rows: list[OrderRecord] = []
        self._lock = threading.Lock()
        self._issued = 0
        self._applied = 0

    @property
    def rows(self) -> list[OrderRecord]:
        return self._rows

    @property
    def loading(self) -> bool:
        return self._issued > self._applied

    def fetch(self) -> list[OrderRecord]:
        """Newest `limit` bookings with their service and vendor names."""

        with self.session_factory() as db:
            bookings = (
                db.execute(
                    select(Booking)
                    .options(joinedload(Booking.service), joinedload(Booking.vendor))
                    .order_by(Booking.created_at.desc())
                    .limit(self.limit)
                )
                .scalars()
                .all()
            )
            return [to_record(b) for b in bookings]

    def begin_fetch(self) -> int:
        with self._lock:
            self._issued += 1
            return self._issued

    def apply_fetch(self, seq: int, rows: list[OrderRecord] | None, error: str | None) -> bool:
        """Install a fetch result unless a newer one is already in place."""

        with self._lock:
            if seq <= self._applied:
                logger.info("stale fetch discarded table=%s seq=%s applied=%s", self.table, seq, self._applied)
                return False
            self._applied = seq
            self.loaded = True
            if error is not None:
                self.error = error
                return True
            self._rows = rows or []
            self.error = None
        view_rows_loaded.labels(service=self.service_name, table=self.table).set(len(self._rows))
        return True

    def refresh(self) -> RefreshResult:
        """Re-issue the bounded fetch and replace the in-memory window."""

        seq = self.begin_fetch()
        try:
            rows = self.fetch()
        except SQLAlchemyError as exc:
            message = store_error_message(exc)
            logger.error("store fetch failed table=%s error=%s", self.table, message)
            store_fetch_total.labels(service=self.service_name, table=self.table, outcome="error").inc()
            applied = self.apply_fetch(seq, None, message)
            return RefreshResult(count=len(self._rows), applied=applied, error=message)
        store_fetch_total.labels(service=self.service_name, table=self.table, outcome="ok").inc()
        applied = self.apply_fetch(seq, rows, None)
        logger.info("orders loaded count=%s applied=%s", len(rows), applied)
        return RefreshResult(count=len(self._rows), applied=applied, error=self.error)

    def filtered(self, query: OrderQuery) -> list[OrderRecord]:
        """Filtered and sorted rows, unpaginated."""

        rows = filter_orders(self._rows, query.search, query.status)
        return sort_orders(rows, query.sort_by, query.sort_dir)

    def page(self, query: OrderQuery) -> OrderPage:
        if self.error is not None:
            empty = paginate([], 1, query.page_size)
            return empty.model_copy(update={"error": self.error, "loading": self.loading})
        result = paginate(self.filtered(query), query.page, query.page_size)
        return result.model_copy(update={"loading": self.loading})

    def export(self, query: OrderQuery) -> str:
        return orders_csv(self.filtered(query))
