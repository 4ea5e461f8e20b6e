"""Admin dashboard API.

Serves the orders, services, vendors and users screens straight from the
booking database. Orders and services are answered from in-memory windows that
are loaded at startup and replaced on refresh.
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Header, HTTPException, Query
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from sqlalchemy.exc import SQLAlchemyError

from bookdesk.common.config import settings
from bookdesk.common.db import SessionLocal
from bookdesk.common.http import install_request_metrics
from bookdesk.common.logging import configure_logging, logger
from bookdesk.common.metrics import metrics_response
from bookdesk.common.startup import log_startup_config
from bookdesk.common.tracing import instrument_app, setup_tracing
from bookdesk.services.dashboard.catalog import ServiceNotFound, ServicesView, list_users, list_vendors
from bookdesk.services.dashboard.export import CSV_MEDIA_TYPE, export_filename
from bookdesk.services.dashboard.render import query_href, render_orders_page
from bookdesk.services.dashboard.schemas import (
    DEFAULT_PAGE_SIZE,
    PAGE_SIZES,
    FeaturedUpdate,
    OrderPage,
    OrderQuery,
    OrderSortKey,
    RefreshResult,
    ServiceRecord,
    ServiceSortKey,
    ServicesResponse,
    SortDir,
    StatusFilter,
    UserRecord,
    VendorRecord,
)
from bookdesk.services.dashboard.service import OrderListView

configure_logging()
setup_tracing(settings.service_name)
log_startup_config(settings, ["service_name", "postgres_dsn", "api_key", "orders_fetch_limit", "catalog_fetch_limit"])
orders_view = OrderListView(SessionLocal, limit=settings.orders_fetch_limit, service_name=settings.service_name)
services_view = ServicesView(SessionLocal, limit=settings.catalog_fetch_limit, service_name=settings.service_name)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Load the orders and services windows when the dashboard starts."""

    orders_view.refresh()
    services_view.refresh()
    yield


app = FastAPI(title="Bookdesk Dashboard", lifespan=lifespan)
install_request_metrics(app)
instrument_app(app)


def enforce_api_key(x_api_key: str | None = Header(default=None)) -> None:
    """Reject requests that do not provide the configured API key."""

    if x_api_key != settings.api_key:
        raise HTTPException(status_code=401, detail="invalid API key")


def order_query(
    search: str = "",
    status: StatusFilter = "all",
    sort_by: OrderSortKey = "created_at",
    sort_dir: SortDir = "desc",
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=DEFAULT_PAGE_SIZE),
) -> OrderQuery:
    if page_size not in PAGE_SIZES:
        raise HTTPException(status_code=422, detail=f"page_size must be one of {', '.join(map(str, PAGE_SIZES))}")
    return OrderQuery(
        search=search,
        status=status,
        sort_by=sort_by,
        sort_dir=sort_dir,
        page=page,
        page_size=page_size,
    )


admin = [Depends(enforce_api_key)]


@app.get("/orders", response_model=OrderPage, dependencies=admin)
def list_orders(query: OrderQuery = Depends(order_query)):
    """One page of orders from the in-memory window."""

    return orders_view.page(query)


@app.get("/orders/view", response_class=HTMLResponse, dependencies=admin)
def view_orders(query: OrderQuery = Depends(order_query)):
    """Orders screen rendered as an HTML table."""

    return HTMLResponse(render_orders_page(query, orders_view.page(query)))


@app.post("/orders/view/refresh", dependencies=admin)
def refresh_orders_view(query: OrderQuery = Depends(order_query)):
    """Refresh button on the orders screen: re-fetch, then back to the same view."""

    orders_view.refresh()
    return RedirectResponse(query_href(query), status_code=303)


@app.get("/orders/export", dependencies=admin)
def export_orders(query: OrderQuery = Depends(order_query)):
    """Download the filtered (not paginated) order set as CSV."""

    return Response(
        content=orders_view.export(query),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={export_filename()}"},
    )


@app.post("/orders/refresh", response_model=RefreshResult, dependencies=admin)
def refresh_orders():
    """Re-fetch the orders window."""

    return orders_view.refresh()


@app.get("/services", response_model=ServicesResponse, dependencies=admin)
def list_services(
    search: str = "",
    sort_by: ServiceSortKey = "vendor",
    sort_dir: SortDir = "asc",
    group_by_vendor: bool = True,
):
    """Services as a flat list or grouped by vendor."""

    return services_view.listing(search, sort_by, sort_dir, group_by_vendor)


@app.post("/services/refresh", response_model=ServicesResponse, dependencies=admin)
def refresh_services():
    services_view.refresh()
    return ServicesResponse(items=services_view.rows, error=services_view.error)


@app.patch("/services/{service_id}/featured", response_model=ServiceRecord, dependencies=admin)
def set_service_featured(service_id: str, body: FeaturedUpdate):
    """Mark a service as featured (or not) for the booking app."""

    try:
        return services_view.set_featured(service_id, body.is_featured)
    except ServiceNotFound as exc:
        raise HTTPException(status_code=404, detail="service not found") from exc
    except SQLAlchemyError as exc:
        raise HTTPException(status_code=502, detail=services_view.error) from exc


@app.get("/vendors", response_model=list[VendorRecord], dependencies=admin)
def vendors():
    try:
        return list_vendors(SessionLocal, limit=settings.catalog_fetch_limit)
    except SQLAlchemyError as exc:
        logger.error("vendor listing failed: %s", exc)
        return []


@app.get("/users", response_model=list[UserRecord], dependencies=admin)
def users():
    try:
        return list_users(SessionLocal, limit=settings.catalog_fetch_limit)
    except SQLAlchemyError as exc:
        logger.error("user listing failed: %s", exc)
        return []


@app.get("/metrics")
def metrics():
    """Prometheus scrape endpoint."""

    return metrics_response()


@app.get("/health")
def health():
    """Container health probe endpoint."""

    return {"ok": True}
