"""Services screen: search, sort, vendor grouping and featured toggle."""

from datetime import datetime, timezone
from decimal import Decimal

from fastapi.testclient import TestClient

from bookdesk.services.dashboard import main
from bookdesk.services.dashboard.catalog import (
    ServicesView,
    display_name,
    group_by_vendor,
    search_services,
    sort_services,
)
from bookdesk.services.dashboard.models import Service, VendorProfile
from bookdesk.services.dashboard.schemas import ServiceRecord


def make_services() -> list[ServiceRecord]:
    return [
        ServiceRecord(id="1", name="Tent", price=Decimal("300"), vendor_id="v-b", vendor_name="Bright Events"),
        ServiceRecord(id="2", name="Catering", price=Decimal("800"), vendor_id="v-a", vendor_name="Acme"),
        ServiceRecord(id="3", name="Balloons", price=None, vendor_id="v-a", vendor_name="Acme"),
        ServiceRecord(id="4", name="Lights", price=Decimal("50"), vendor_id="v-orphan"),
        ServiceRecord(id="5", name="Chairs", price=Decimal("10")),
    ]


def test_search_matches_vendor_or_service_name():
    rows = make_services()

    assert [r.id for r in search_services(rows, "  acme ")] == ["2", "3"]
    assert [r.id for r in search_services(rows, "TENT")] == ["1"]
    assert search_services(rows, "") == rows


def test_flat_sort_by_price_treats_missing_as_zero():
    ordered = sort_services(make_services(), "price", "asc")

    assert [r.id for r in ordered] == ["3", "5", "4", "1", "2"]


def test_grouping_keys_and_order():
    groups = group_by_vendor(make_services(), "service", "asc")

    assert [g.vendor for g in groups] == ["Acme", "Bright Events", "Unknown Vendor", "v-orphan"]
    assert [s.name for s in groups[0].services] == ["Balloons", "Catering"]


def test_vendor_sort_descending_reverses_groups_only():
    groups = group_by_vendor(make_services(), "vendor", "desc")

    assert [g.vendor for g in groups] == ["v-orphan", "Unknown Vendor", "Bright Events", "Acme"]
    # Fetch order is kept inside a group.
    assert [s.id for s in groups[-1].services] == ["2", "3"]


def test_price_sort_descending_keeps_groups_ascending():
    groups = group_by_vendor(make_services(), "price", "desc")

    assert groups[0].vendor == "Acme"
    assert [s.id for s in groups[0].services] == ["2", "3"]


def test_display_name():
    assert display_name("Asha", None) == "Asha"
    assert display_name(None, None) == "-"


def seed_services(session_factory) -> None:
    with session_factory() as db:
        db.add(VendorProfile(id="v-a", business_name="Acme"))
        db.add(
            Service(
                id="s-1",
                name="Catering",
                price=Decimal("800"),
                vendor_id="v-a",
                is_featured=False,
                created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
            )
        )
        db.commit()


def test_featured_toggle_persists_and_patches_window(db, admin_headers):
    seed_services(db)
    with TestClient(main.app) as client:
        resp = client.patch("/services/s-1/featured", headers=admin_headers, json={"is_featured": True})
        listing = client.get("/services", headers=admin_headers, params={"group_by_vendor": False}).json()

    assert resp.status_code == 200
    assert resp.json()["is_featured"] is True
    assert listing["items"][0]["is_featured"] is True
    with db() as session:
        assert session.get(Service, "s-1").is_featured is True


def test_featured_toggle_unknown_service(db, admin_headers):
    seed_services(db)
    with TestClient(main.app) as client:
        resp = client.patch("/services/missing/featured", headers=admin_headers, json={"is_featured": True})

    assert resp.status_code == 404


def test_grouped_listing_endpoint(db, admin_headers):
    seed_services(db)
    with TestClient(main.app) as client:
        body = client.get("/services", headers=admin_headers).json()

    assert body["items"] is None
    assert body["groups"][0]["vendor"] == "Acme"
    assert body["groups"][0]["services"][0]["id"] == "s-1"


def test_featured_write_supersedes_in_flight_fetch(db):
    seed_services(db)
    view = ServicesView(db)
    view.refresh()

    seq = view.begin_fetch()
    stale = view.fetch()
    view.set_featured("s-1", True)

    assert view.apply_fetch(seq, stale, None) is False
    assert view.rows[0].is_featured is True
    assert view.refresh() is True
    assert view.rows[0].is_featured is True


def test_older_services_fetch_is_discarded(db):
    seed_services(db)
    view = ServicesView(db)
    slow = view.begin_fetch()
    fast = view.begin_fetch()

    assert view.apply_fetch(fast, view.fetch(), None) is True
    assert view.apply_fetch(slow, [], "late failure") is False
    assert [r.id for r in view.rows] == ["s-1"]
    assert view.error is None
