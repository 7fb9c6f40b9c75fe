"""Device data access.

Every query is scoped by the owning user id. The only exception is
``device_id_exists``, which backs the global uniqueness check on device ids.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Any, Optional

from sqlalchemy.orm import selectinload
from sqlmodel import Session, col, func, select

from handytrack.models.device import Device, as_utc, utcnow

DATE_FIELDS = ("purchase_date", "sale_date")

END_OF_DAY = time(23, 59, 59, 999000)


class DeviceNotFoundError(LookupError):
    """Device does not exist or belongs to another user."""


@dataclass
class DeviceFilters:
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    date_type: str = "purchase_date"  # 'purchase_date' | 'sale_date'
    status: Optional[str] = None


def _utc_fields(fields: dict[str, Any]) -> dict[str, Any]:
    return {
        name: as_utc(value) if isinstance(value, datetime) else value
        for name, value in fields.items()
    }


def apply_patch(device: Device, changes: dict[str, Any]) -> Device:
    """Overwrite exactly the attributes named in ``changes``."""
    for name, value in _utc_fields(changes).items():
        setattr(device, name, value)
    device.updated_at = utcnow()
    return device


class DeviceRepository:
    def __init__(self, session: Session):
        self.session = session

    def find_all(self, user_id: str, filters: DeviceFilters | None = None) -> list[Device]:
        """Devices owned by ``user_id``, newest first."""
        query = select(Device).where(Device.user_id == user_id)

        if filters:
            if filters.date_from or filters.date_to:
                field_name = filters.date_type if filters.date_type in DATE_FIELDS else "purchase_date"
                column = col(getattr(Device, field_name))
                if filters.date_from:
                    start = datetime.combine(filters.date_from, time.min, tzinfo=timezone.utc)
                    query = query.where(column >= start)
                if filters.date_to:
                    end = datetime.combine(filters.date_to, END_OF_DAY, tzinfo=timezone.utc)
                    query = query.where(column <= end)
                if field_name == "sale_date":
                    query = query.where(column.is_not(None))

            if filters.status:
                query = query.where(Device.status == filters.status)

        query = query.order_by(col(Device.created_at).desc())
        return list(self.session.exec(query).all())

    def find_by_id(self, device_id: str, user_id: str) -> Device | None:
        """Single device with its documents; None if missing or not owned."""
        return self.session.exec(
            select(Device)
            .where(Device.id == device_id, Device.user_id == user_id)
            .options(selectinload(Device.documents))
        ).first()

    def create(self, user_id: str, fields: dict[str, Any]) -> Device:
        device = Device(**_utc_fields(fields), user_id=user_id)
        self.session.add(device)
        self.session.commit()
        self.session.refresh(device)
        return device

    def update_fields(self, device_id: str, user_id: str, fields: dict[str, Any]) -> Device:
        """Apply a partial update; unspecified columns keep their values."""
        device = self.find_by_id(device_id, user_id)
        if not device:
            raise DeviceNotFoundError(device_id)

        apply_patch(device, fields)
        self.session.add(device)
        self.session.commit()
        self.session.refresh(device)
        return device

    def delete(self, device_id: str, user_id: str) -> None:
        device = self.find_by_id(device_id, user_id)
        if not device:
            raise DeviceNotFoundError(device_id)

        self.session.delete(device)
        self.session.commit()

    def device_id_exists(self, device_id: str) -> bool:
        count = self.session.exec(
            select(func.count()).select_from(Device).where(Device.id == device_id)
        ).one()
        return count > 0

    def count_by_status(self, user_id: str, status: str) -> int:
        return self.session.exec(
            select(func.count()).select_from(Device).where(
                Device.user_id == user_id,
                Device.status == status,
            )
        ).one()
