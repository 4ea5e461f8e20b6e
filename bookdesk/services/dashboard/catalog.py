"""Services, vendors and users screens."""

import threading
from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload

from bookdesk.common.logging import logger
from bookdesk.common.metrics import store_fetch_total, view_rows_loaded
from bookdesk.services.dashboard.models import Service, UserProfile, VendorProfile
from bookdesk.services.dashboard.schemas import (
    ServiceGroup,
    ServiceRecord,
    ServicesResponse,
    UserRecord,
    VendorRecord,
)
from bookdesk.services.dashboard.service import store_error_message

UNKNOWN_VENDOR = "Unknown Vendor"


class ServiceNotFound(LookupError):
    """Raised when a featured toggle targets a missing service id."""


def to_service_record(service: Service) -> ServiceRecord:
    return ServiceRecord(
        id=service.id,
        name=service.name,
        price=service.price,
        is_active=service.is_active,
        is_visible_to_users=service.is_visible_to_users,
        category=service.category,
        media_urls=service.media_urls,
        vendor_id=service.vendor_id,
        is_featured=service.is_featured,
        vendor_name=service.vendor.business_name if service.vendor else None,
    )


def _price(row: ServiceRecord) -> Decimal:
    return row.price if row.price is not None else Decimal(0)


def search_services(rows: list[ServiceRecord], search: str) -> list[ServiceRecord]:
    term = search.strip().lower()
    if not term:
        return rows
    return [r for r in rows if term in (r.vendor_name or "").lower() or term in (r.name or "").lower()]


def sort_services(rows: list[ServiceRecord], sort_by: str, sort_dir: str) -> list[ServiceRecord]:
    reverse = sort_dir == "desc"
    if sort_by == "vendor":
        return sorted(rows, key=lambda r: r.vendor_name or "", reverse=reverse)
    if sort_by == "service":
        return sorted(rows, key=lambda r: r.name, reverse=reverse)
    return sorted(rows, key=_price, reverse=reverse)


def group_by_vendor(rows: list[ServiceRecord], sort_by: str, sort_dir: str) -> list[ServiceGroup]:
    """Bucket rows per vendor.

    Groups are ordered by vendor name, descending only for a vendor/desc sort.
    Inside a group rows follow the service or price sort; a vendor sort leaves
    them in fetch order.
    """

    buckets: dict[str, list[ServiceRecord]] = {}
    for row in rows:
        key = row.vendor_name or row.vendor_id or UNKNOWN_VENDOR
        buckets.setdefault(key, []).append(row)
    reverse_groups = sort_by == "vendor" and sort_dir == "desc"
    groups = []
    for vendor in sorted(buckets, reverse=reverse_groups):
        services = buckets[vendor]
        if sort_by != "vendor":
            services = sort_services(services, sort_by, sort_dir)
        groups.append(ServiceGroup(vendor=vendor, services=services))
    return groups


class ServicesView:
    """In-memory services window with the featured-flag toggle.

    Fetches are sequenced like the orders window. A featured write also
    supersedes every fetch issued before it, so a refresh that read the old
    flag cannot undo the in-memory patch.
    """

    table = "services"

    def __init__(self, session_factory, limit: int = 500, service_name: str = "dashboard") -> None:
        self.session_factory = session_factory
        self.limit = limit
        self.service_name = service_name
        self.error: str | None = None
        self._rows: list[ServiceRecord] = []
        self._lock = threading.Lock()
        self._issued = 0
        self._applied = 0

    @property
    def rows(self) -> list[ServiceRecord]:
        return self._rows

    def fetch(self) -> list[ServiceRecord]:
        with self.session_factory() as db:
            services = (
                db.execute(
                    select(Service)
                    .options(joinedload(Service.vendor))
                    .order_by(Service.created_at.desc())
                    .limit(self.limit)
                )
                .scalars()
                .all()
            )
            return [to_service_record(s) for s in services]

    def begin_fetch(self) -> int:
        with self._lock:
            self._issued += 1
            return self._issued

    def apply_fetch(self, seq: int, rows: list[ServiceRecord] | None, error: str | None) -> bool:
        """Install a fetch result unless a newer fetch or write already landed."""

        with self._lock:
            if seq <= self._applied:
                logger.info("stale fetch discarded table=%s seq=%s applied=%s", self.table, seq, self._applied)
                return False
            self._applied = seq
            if error is not None:
                self.error = error
                return True
            self._rows = rows or []
            self.error = None
        view_rows_loaded.labels(service=self.service_name, table=self.table).set(len(self._rows))
        return True

    def refresh(self) -> bool:
        """Re-fetch newest services; on failure keep rows and record the error."""

        seq = self.begin_fetch()
        try:
            rows = self.fetch()
        except SQLAlchemyError as exc:
            message = store_error_message(exc)
            logger.error("store fetch failed table=%s error=%s", self.table, message)
            store_fetch_total.labels(service=self.service_name, table=self.table, outcome="error").inc()
            return self.apply_fetch(seq, None, message)
        store_fetch_total.labels(service=self.service_name, table=self.table, outcome="ok").inc()
        return self.apply_fetch(seq, rows, None)

    def listing(self, search: str, sort_by: str, sort_dir: str, grouped: bool) -> ServicesResponse:
        rows = search_services(self._rows, search)
        if grouped:
            return ServicesResponse(groups=group_by_vendor(rows, sort_by, sort_dir), error=self.error)
        return ServicesResponse(items=sort_services(rows, sort_by, sort_dir), error=self.error)

    def set_featured(self, service_id: str, is_featured: bool) -> ServiceRecord:
        """Persist the flag, then patch the in-memory row."""

        try:
            with self.session_factory() as db:
                result = db.execute(update(Service).where(Service.id == service_id).values(is_featured=is_featured))
                matched = result.rowcount
                db.commit()
        except SQLAlchemyError as exc:
            self.error = store_error_message(exc)
            logger.error("featured update failed service_id=%s error=%s", service_id, self.error)
            raise
        if matched == 0:
            raise ServiceNotFound(service_id)
        logger.info("service featured flag set service_id=%s is_featured=%s", service_id, is_featured)
        patched = None
        with self._lock:
            rows = []
            for row in self._rows:
                if row.id == service_id:
                    row = row.model_copy(update={"is_featured": is_featured})
                    patched = row
                rows.append(row)
            self._rows = rows
            self._applied = self._issued
        if patched is None:
            with self.session_factory() as db:
                patched = to_service_record(db.get(Service, service_id, options=[joinedload(Service.vendor)]))
        return patched


def list_vendors(session_factory, limit: int = 500) -> list[VendorRecord]:
    with session_factory() as db:
        vendors = (
            db.execute(select(VendorProfile).order_by(VendorProfile.business_name).limit(limit)).scalars().all()
        )
        return [
            VendorRecord(
                id=v.id,
                business_name=v.business_name,
                address=v.address,
                category=v.category,
                phone_number=v.phone_number,
            )
            for v in vendors
        ]


def display_name(first_name: str | None, last_name: str | None) -> str:
    name = f"{first_name or ''} {last_name or ''}".strip()
    return name or "-"


def list_users(session_factory, limit: int = 500) -> list[UserRecord]:
    with session_factory() as db:
        profiles = (
            db.execute(select(UserProfile).order_by(UserProfile.created_at.desc()).limit(limit)).scalars().all()
        )
        return [
            UserRecord(
                id=p.id,
                display_name=display_name(p.first_name, p.last_name),
                phone=p.phone,
                created_at=p.created_at,
            )
            for p in profiles
        ]
