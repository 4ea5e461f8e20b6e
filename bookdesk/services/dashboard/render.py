"""Server-rendered HTML for the orders screen."""

import html
from decimal import Decimal
from urllib.parse import urlencode

from bookdesk.services.dashboard.schemas import PAGE_SIZES, OrderPage, OrderQuery
from bookdesk.services.dashboard.service import display_status

STATUS_OPTIONS = [
    ("all", "All statuses"),
    ("pending", "Pending"),
    ("confirmed", "Confirmed"),
    ("completed", "Completed"),
    ("cancelled", "Cancelled"),
]
SORT_OPTIONS = [
    ("created_at", "desc", "Newest first"),
    ("created_at", "asc", "Oldest first"),
    ("booking_date", "asc", "Booking date ↑"),
    ("booking_date", "desc", "Booking date ↓"),
    ("amount", "asc", "Amount ↑"),
    ("amount", "desc", "Amount ↓"),
    ("status", "asc", "Status A-Z"),
    ("status", "desc", "Status Z-A"),
]
PILL_STYLES = {
    "pending": "background:#fefce8;color:#a16207",
    "confirmed": "background:#eff6ff;color:#1d4ed8",
    "completed": "background:#f0fdf4;color:#15803d",
    "cancelled": "background:#fef2f2;color:#b91c1c",
}
UNKNOWN_PILL_STYLE = "background:#f3f4f6;color:#374151"
COLUMNS = 7


def query_href(query: OrderQuery, base: str = "/orders/view") -> str:
    return f"{base}?{urlencode(query.model_dump())}"


def link(query: OrderQuery, label: str, active: bool = False) -> str:
    weight = "font-weight:600;" if active else ""
    return f"<a style='{weight}margin-right:8px' href='{html.escape(query_href(query))}'>{html.escape(label)}</a>"


def format_amount(amount: Decimal | None) -> str:
    return f"₹{Decimal(amount or 0):.2f}"


def status_pill(status: str | None) -> str:
    shown = display_status(status)
    style = PILL_STYLES.get(shown, UNKNOWN_PILL_STYLE)
    return f"<span style='padding:2px 8px;border-radius:4px;font-size:12px;{style}'>{html.escape(shown)}</span>"


def sort_header(query: OrderQuery, key: str, label: str) -> str:
    arrow = ""
    if query.sort_by == key:
        arrow = " ↑" if query.sort_dir == "asc" else " ↓"
    return f"<th style='padding:12px'>{link(query.toggle_sort(key), label + arrow)}</th>"


def single_row(message: str, style: str = "") -> str:
    return f"<tr><td style='padding:12px;{style}' colspan='{COLUMNS}'>{html.escape(message)}</td></tr>"


def table_body(page: OrderPage) -> str:
    if page.loading:
        return single_row("Loading...")
    if page.error is not None:
        return single_row(page.error, "color:#dc2626")
    if not page.items:
        return single_row("No orders")
    rows = []
    for order in page.items:
        rows.append(
            "<tr style='border-top:1px solid #e5e7eb'>"
            f"<td style='padding:12px;font-family:monospace;font-size:12px'>{html.escape(order.id)}</td>"
            f"<td style='padding:12px'>{html.escape(order.service_name or '-')}</td>"
            f"<td style='padding:12px'>{html.escape(order.vendor_name or '-')}</td>"
            f"<td style='padding:12px'>{html.escape(order.booking_date.isoformat() if order.booking_date else '')}</td>"
            f"<td style='padding:12px'>{html.escape(order.booking_time.isoformat() if order.booking_time else '-')}</td>"
            f"<td style='padding:12px'>{format_amount(order.amount)}</td>"
            f"<td style='padding:12px'>{status_pill(order.status)}</td>"
            "</tr>"
        )
    return "".join(rows)


def controls(query: OrderQuery) -> str:
    search_form = (
        "<form method='get' action='/orders/view' style='margin-bottom:8px'>"
        f"<input name='search' placeholder='Search by ID, service, vendor' value='{html.escape(query.search)}'>"
        f"<input type='hidden' name='status' value='{html.escape(query.status)}'>"
        f"<input type='hidden' name='sort_by' value='{html.escape(query.sort_by)}'>"
        f"<input type='hidden' name='sort_dir' value='{html.escape(query.sort_dir)}'>"
        f"<input type='hidden' name='page_size' value='{query.page_size}'>"
        "<button type='submit'>Search</button></form>"
    )
    statuses = "".join(link(query.with_status(value), label, value == query.status) for value, label in STATUS_OPTIONS)
    sorts = "".join(
        link(query.with_sort(key, direction), label, (key, direction) == (query.sort_by, query.sort_dir))
        for key, direction, label in SORT_OPTIONS
    )
    return f"{search_form}<div>{statuses}</div><div>{sorts}</div>"


def pagination(query: OrderQuery, page: OrderPage) -> str:
    current = query.with_page(page.page)
    sizes = "".join(link(current.with_page_size(size), str(size), size == page.page_size) for size in PAGE_SIZES)
    prev_link = link(current.with_page(page.page - 1), "Prev") if page.page > 1 else "<span>Prev</span> "
    next_link = link(current.with_page(page.page + 1), "Next") if page.page < page.total_pages else "<span>Next</span>"
    return (
        "<div style='display:flex;justify-content:space-between;margin-top:16px'>"
        f"<div>Showing {page.showing_from}-{page.showing_to} of {page.total}</div>"
        f"<div>{sizes} {prev_link}<span>Page {page.page} / {page.total_pages}</span> {next_link}</div>"
        "</div>"
    )


def render_orders_page(query: OrderQuery, page: OrderPage) -> str:
    """Full orders screen: controls, table and pagination footer."""

    export_href = html.escape(query_href(query.with_page(1), base="/orders/export"))
    refresh_href = html.escape(query_href(query, base="/orders/view/refresh"))
    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Orders</title>
</head>
<body style="margin:0;font-family:ui-sans-serif,Segoe UI,Roboto,Arial;">
  <main style="padding:24px">
    <div style="display:flex;justify-content:space-between;margin-bottom:16px">
      <h1 style="font-size:20px;margin:0">Orders</h1>
      <div>
        <form method="post" action="{refresh_href}" style="display:inline;margin-right:8px"><button type="submit">Refresh</button></form>
        <a href="{export_href}">Export CSV</a>
      </div>
    </div>
    <div style="border:1px solid #e5e7eb;border-radius:12px;padding:16px;margin-bottom:16px">{controls(query)}</div>
    <table style="min-width:100%;font-size:14px;border-collapse:collapse">
      <thead style="background:#f9fafb;text-align:left">
        <tr>
          <th style='padding:12px'>ID</th>
          <th style='padding:12px'>Service</th>
          <th style='padding:12px'>Vendor</th>
          {sort_header(query, 'booking_date', 'Date')}
          <th style='padding:12px'>Time</th>
          {sort_header(query, 'amount', 'Amount')}
          {sort_header(query, 'status', 'Status')}
        </tr>
      </thead>
      <tbody>{table_body(page)}</tbody>
    </table>
    {pagination(query, page)}
  </main>
</body>
</html>
"""
