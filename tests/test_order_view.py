"""Unit tests for order filtering, sorting, paging and view state."""

from datetime import date, datetime, timezone
from decimal import Decimal

from bookdesk.services.dashboard.schemas import OrderQuery, OrderRecord
from bookdesk.services.dashboard.service import (
    OrderListView,
    display_status,
    filter_orders,
    paginate,
    sort_orders,
)


def make_orders() -> list[OrderRecord]:
    return [
        OrderRecord(
            id="bk-001",
            booking_date=date(2026, 5, 3),
            status="Pending",
            amount=Decimal("1500.00"),
            created_at=datetime(2026, 4, 1, 10, tzinfo=timezone.utc),
            service_name="DJ Night",
            vendor_name="Acme, LLC",
        ),
        OrderRecord(
            id="bk-002",
            booking_date=date(2026, 5, 1),
            status="confirmed",
            amount=Decimal("250.50"),
            created_at=datetime(2026, 4, 3, 9, tzinfo=timezone.utc),
            service_name="Catering",
            vendor_name="Spice Route",
        ),
        OrderRecord(
            id="bk-003",
            booking_date=None,
            status="cancelled",
            amount=None,
            created_at=datetime(2026, 4, 2, 8, tzinfo=timezone.utc),
            service_name=None,
            vendor_name="Acme Events",
        ),
        OrderRecord(
            id="BK-004",
            booking_date=date(2026, 6, 1),
            status="completed",
            amount=Decimal("9000"),
            created_at=None,
            service_name="Photo booth",
            vendor_name=None,
        ),
    ]


def test_status_filter_matches_lowercased_status():
    rows = make_orders()

    pending = filter_orders(rows, "", "pending")

    assert [r.id for r in pending] == ["bk-001"]
    assert all((r.status or "").lower() == "pending" for r in pending)


def test_status_all_keeps_full_set():
    rows = make_orders()

    assert filter_orders(rows, "", "all") == rows


def test_search_matches_id_service_or_vendor_case_insensitively():
    rows = make_orders()

    assert [r.id for r in filter_orders(rows, "ACME", "all")] == ["bk-001", "bk-003"]
    assert [r.id for r in filter_orders(rows, "catering", "all")] == ["bk-002"]
    assert [r.id for r in filter_orders(rows, "bk-004", "all")] == ["BK-004"]
    assert filter_orders(rows, "   ", "all") == rows


def test_search_and_status_combine():
    rows = make_orders()

    assert [r.id for r in filter_orders(rows, "acme", "cancelled")] == ["bk-003"]


def test_amount_sort_directions_are_reversed():
    rows = [r for r in make_orders() if r.amount is not None]

    ascending = sort_orders(rows, "amount", "asc")
    descending = sort_orders(rows, "amount", "desc")

    assert [r.id for r in ascending] == ["bk-002", "bk-001", "BK-004"]
    assert descending == list(reversed(ascending))


def test_missing_values_sort_as_zero():
    rows = make_orders()

    by_amount = sort_orders(rows, "amount", "asc")
    by_booking = sort_orders(rows, "booking_date", "asc")
    by_created = sort_orders(rows, "created_at", "desc")

    assert by_amount[0].id == "bk-003"
    assert by_booking[0].id == "bk-003"
    assert by_created[-1].id == "BK-004"


def test_status_sort_uses_raw_string():
    rows = make_orders()

    ordered = sort_orders(rows, "status", "asc")

    # Upper-case "Pending" sorts ahead of every lower-case status.
    assert [r.status for r in ordered] == ["Pending", "cancelled", "completed", "confirmed"]


def test_naive_and_aware_timestamps_compare():
    naive = OrderRecord(id="a", created_at=datetime(2026, 1, 1, 12))
    aware = OrderRecord(id="b", created_at=datetime(2026, 1, 1, 11, tzinfo=timezone.utc))

    assert [r.id for r in sort_orders([naive, aware], "created_at", "asc")] == ["b", "a"]


def test_pages_concatenate_to_filtered_set():
    rows = [OrderRecord(id=f"bk-{i:03d}", amount=Decimal(i)) for i in range(47)]
    ordered = sort_orders(rows, "amount", "desc")

    collected = []
    first = paginate(ordered, 1, 10)
    for page in range(1, first.total_pages + 1):
        collected.extend(paginate(ordered, page, 10).items)

    assert first.total_pages == 5
    assert collected == ordered


def test_page_is_clamped_into_range():
    rows = [OrderRecord(id=str(i)) for i in range(25)]

    past_end = paginate(rows, 9, 10)
    empty = paginate([], 3, 20)

    assert past_end.page == 3
    assert [r.id for r in past_end.items] == ["20", "21", "22", "23", "24"]
    assert (past_end.showing_from, past_end.showing_to) == (21, 25)
    assert empty.page == 1
    assert empty.total_pages == 1
    assert (empty.showing_from, empty.showing_to) == (0, 0)


def test_query_changes_reset_page():
    query = OrderQuery(page=4)

    assert query.with_search("acme").page == 1
    assert query.with_status("pending").page == 1
    assert query.with_page_size(50).page == 1
    assert query.with_sort("amount", "asc").page == 4


def test_toggle_sort():
    query = OrderQuery(sort_by="created_at", sort_dir="desc")

    by_amount = query.toggle_sort("amount")
    flipped = by_amount.toggle_sort("amount")

    assert (by_amount.sort_by, by_amount.sort_dir) == ("amount", "asc")
    assert (flipped.sort_by, flipped.sort_dir) == ("amount", "desc")


def test_display_status():
    assert display_status("Confirmed") == "confirmed"
    assert display_status("refunded") == "unknown"
    assert display_status(None) == "unknown"


def test_stale_fetch_result_is_discarded():
    view = OrderListView(session_factory=None)
    older = view.begin_fetch()
    newer = view.begin_fetch()
    fresh = [OrderRecord(id="fresh")]
    stale = [OrderRecord(id="stale")]

    assert view.loading
    assert view.apply_fetch(newer, fresh, None) is True
    assert view.apply_fetch(older, stale, None) is False
    assert [r.id for r in view.rows] == ["fresh"]
    assert not view.loading


def test_error_page_is_empty_and_carries_message():
    view = OrderListView(session_factory=None)
    view.apply_fetch(view.begin_fetch(), [OrderRecord(id="x")], None)
    view.apply_fetch(view.begin_fetch(), None, "permission denied for table bookings")

    page = view.page(OrderQuery())

    assert page.items == []
    assert page.error == "permission denied for table bookings"
