"""Request/response schemas for dashboard endpoints."""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

StatusFilter = Literal["all", "pending", "confirmed", "completed", "cancelled"]
OrderSortKey = Literal["created_at", "booking_date", "amount", "status"]
ServiceSortKey = Literal["vendor", "service", "price"]
SortDir = Literal["asc", "desc"]

PAGE_SIZES = (10, 20, 50)
DEFAULT_PAGE_SIZE = 20


class OrderRecord(BaseModel):
    """Read-only projection of one booking joined with service/vendor names."""

    model_config = ConfigDict(frozen=True)

    id: str
    booking_date: date | None = None
    booking_time: time | None = None
    status: str | None = None
    amount: Decimal | None = None
    created_at: datetime | None = None
    service_name: str | None = None
    vendor_name: str | None = None


class OrderQuery(BaseModel):
    """User-controlled view inputs: search, filter, sort and page.

    Changing search, status or page size starts over at page 1; sort changes
    keep the current page.
    """

    model_config = ConfigDict(frozen=True)

    search: str = ""
    status: StatusFilter = "all"
    sort_by: OrderSortKey = "created_at"
    sort_dir: SortDir = "desc"
    page: int = Field(default=1, ge=1)
    page_size: int = DEFAULT_PAGE_SIZE

    def with_search(self, search: str) -> "OrderQuery":
        return self.model_copy(update={"search": search, "page": 1})

    def with_status(self, status: StatusFilter) -> "OrderQuery":
        return self.model_copy(update={"status": status, "page": 1})

    def with_page_size(self, page_size: int) -> "OrderQuery":
        return self.model_copy(update={"page_size": page_size, "page": 1})

    def with_sort(self, sort_by: OrderSortKey, sort_dir: SortDir) -> "OrderQuery":
        return self.model_copy(update={"sort_by": sort_by, "sort_dir": sort_dir})

    def with_page(self, page: int) -> "OrderQuery":
        return self.model_copy(update={"page": max(1, page)})

    def toggle_sort(self, key: OrderSortKey) -> "OrderQuery":
        """Flip direction on the active key, otherwise sort ascending by `key`."""

        if key == self.sort_by:
            return self.with_sort(key, "desc" if self.sort_dir == "asc" else "asc")
        return self.with_sort(key, "asc")


class OrderPage(BaseModel):
    """One page of the filtered, sorted order set."""

    items: list[OrderRecord]
    total: int
    page: int
    page_size: int
    total_pages: int
    showing_from: int
    showing_to: int
    loading: bool = False
    error: str | None = None


class RefreshResult(BaseModel):
    """Outcome of a view re-fetch."""

    count: int
    applied: bool
    error: str | None = None


class ServiceRecord(BaseModel):
    """Catalog service row joined with its vendor name."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    price: Decimal | None = None
    is_active: bool = True
    is_visible_to_users: bool | None = None
    category: str | None = None
    media_urls: list[str] | None = None
    vendor_id: str | None = None
    is_featured: bool | None = None
    vendor_name: str | None = None


class ServiceGroup(BaseModel):
    vendor: str
    services: list[ServiceRecord]


class ServicesResponse(BaseModel):
    """Flat (`items`) or grouped (`groups`) services listing."""

    items: list[ServiceRecord] | None = None
    groups: list[ServiceGroup] | None = None
    error: str | None = None


class FeaturedUpdate(BaseModel):
    is_featured: bool


class VendorRecord(BaseModel):
    id: str
    business_name: str
    address: str | None = None
    category: str | None = None
    phone_number: str | None = None


class UserRecord(BaseModel):
    id: str
    display_name: str
    phone: str | None = None
    created_at: datetime | None = None
