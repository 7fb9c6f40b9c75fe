"""DeviceRepository: ownership scoping, filters, partial updates."""

from datetime import date, datetime, timedelta, timezone

import pytest
from sqlmodel import select

from handytrack.models.device import Device, Document
from handytrack.repositories.device_repository import DeviceFilters, DeviceNotFoundError


def test_find_all_is_scoped_and_newest_first(repo, alice, bob, make_device):
    make_device(alice.id, "A-1", created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
    make_device(alice.id, "A-2", created_at=datetime(2024, 3, 1, tzinfo=timezone.utc))
    make_device(alice.id, "A-3", created_at=datetime(2024, 2, 1, tzinfo=timezone.utc))
    make_device(bob.id, "B-1")

    ids = [d.id for d in repo.find_all(alice.id)]
    assert ids == ["A-2", "A-3", "A-1"]
    assert [d.id for d in repo.find_all(bob.id)] == ["B-1"]


def test_find_by_id_hides_other_users_devices(repo, alice, bob, make_device):
    make_device(alice.id, "A-1")

    assert repo.find_by_id("A-1", alice.id) is not None
    assert repo.find_by_id("A-1", bob.id) is None
    assert repo.find_by_id("missing", alice.id) is None


def test_find_by_id_includes_documents(repo, session, alice, make_device):
    make_device(alice.id, "A-1")
    session.add(Document(device_id="A-1", user_id=alice.id, filename="invoice-001.pdf"))
    session.commit()

    device = repo.find_by_id("A-1", alice.id)
    assert [doc.filename for doc in device.documents] == ["invoice-001.pdf"]


def test_filter_by_purchase_date_range(repo, alice, make_device):
    make_device(alice.id, "A-1", purchase_date=datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc))
    make_device(alice.id, "A-2", purchase_date=datetime(2024, 1, 15, 18, 0, tzinfo=timezone.utc))
    make_device(alice.id, "A-3", purchase_date=datetime(2024, 2, 1, 0, 0, tzinfo=timezone.utc))

    filters = DeviceFilters(date_from=date(2024, 1, 1), date_to=date(2024, 1, 31))
    ids = {d.id for d in repo.find_all(alice.id, filters)}
    assert ids == {"A-1", "A-2"}


def test_filter_by_sale_date_skips_unsold(repo, alice, make_device):
    # purchase date is inside the range, but there is no sale date
    make_device(alice.id, "A-1", purchase_date=datetime(2024, 1, 10, tzinfo=timezone.utc))
    make_device(alice.id, "A-2", sale_date=datetime(2024, 1, 20, 14, 0, tzinfo=timezone.utc), status="SOLD")

    filters = DeviceFilters(date_from=date(2024, 1, 1), date_to=date(2024, 1, 31), date_type="sale_date")
    assert [d.id for d in repo.find_all(alice.id, filters)] == ["A-2"]


def test_date_to_is_inclusive_through_end_of_day(repo, alice, make_device):
    make_device(alice.id, "late", sale_date=datetime(2024, 1, 31, 23, 59, 0, tzinfo=timezone.utc))
    make_device(alice.id, "next-day", sale_date=datetime(2024, 2, 1, 0, 0, 1, tzinfo=timezone.utc))

    filters = DeviceFilters(date_to=date(2024, 1, 31), date_type="sale_date")
    assert [d.id for d in repo.find_all(alice.id, filters)] == ["late"]


def test_offset_timestamps_are_filtered_in_utc(repo, alice, make_device):
    # 01:00 on Feb 1st in UTC+2 is still Jan 31st in UTC
    berlin_summer = timezone(timedelta(hours=2))
    make_device(alice.id, "shipped-late", sale_date=datetime(2024, 2, 1, 1, 0, tzinfo=berlin_summer))

    in_january = DeviceFilters(date_to=date(2024, 1, 31), date_type="sale_date")
    in_february = DeviceFilters(date_from=date(2024, 2, 1), date_type="sale_date")
    assert [d.id for d in repo.find_all(alice.id, in_january)] == ["shipped-late"]
    assert repo.find_all(alice.id, in_february) == []


def test_naive_timestamps_are_taken_as_utc(repo, alice, make_device):
    make_device(alice.id, "A-1", purchase_date=datetime(2024, 1, 31, 23, 30))

    filters = DeviceFilters(date_from=date(2024, 1, 31), date_to=date(2024, 1, 31))
    assert [d.id for d in repo.find_all(alice.id, filters)] == ["A-1"]


def test_filter_by_status(repo, alice, make_device):
    make_device(alice.id, "A-1", status="STOCK")
    make_device(alice.id, "A-2", status="REPAIR")

    assert [d.id for d in repo.find_all(alice.id, DeviceFilters(status="REPAIR"))] == ["A-2"]


def test_update_fields_keeps_unspecified_columns(repo, alice, make_device):
    make_device(alice.id, "A-1", imei="356789012345678", defects="Cracked back")

    device = repo.update_fields("A-1", alice.id, {"color": "Midnight"})
    assert device.color == "Midnight"
    assert device.imei == "356789012345678"
    assert device.defects == "Cracked back"
    assert device.purchase_price == 350.0


def test_update_fields_rejects_foreign_owner(repo, alice, bob, make_device):
    make_device(alice.id, "A-1")

    with pytest.raises(DeviceNotFoundError):
        repo.update_fields("A-1", bob.id, {"color": "Red"})
    assert repo.find_by_id("A-1", alice.id).color == "Blue"


def test_delete_requires_owner_and_cascades_documents(repo, session, alice, bob, make_device):
    make_device(alice.id, "A-1")
    session.add(Document(device_id="A-1", user_id=alice.id, filename="invoice.pdf"))
    session.commit()

    with pytest.raises(DeviceNotFoundError):
        repo.delete("A-1", bob.id)
    assert repo.device_id_exists("A-1")

    repo.delete("A-1", alice.id)
    assert not repo.device_id_exists("A-1")
    assert session.exec(select(Document)).all() == []


def test_device_id_exists_is_global(repo, alice, bob, make_device):
    make_device(alice.id, "A-1")
    assert repo.device_id_exists("A-1")
    assert not repo.device_id_exists("B-1")


def test_count_by_status(repo, alice, bob, make_device):
    make_device(alice.id, "A-1", status="STOCK")
    make_device(alice.id, "A-2", status="STOCK")
    make_device(alice.id, "A-3", status="SOLD")
    make_device(bob.id, "B-1", status="STOCK")

    assert repo.count_by_status(alice.id, "STOCK") == 2
    assert repo.count_by_status(alice.id, "SOLD") == 1
    assert repo.count_by_status(alice.id, "REPAIR") == 0
    assert len(repo.session.exec(select(Device)).all()) == 4
