"""Device business logic.

Layers the inventory rules on top of DeviceRepository:
- device ids are unique across all users (checked before insert)
- missing costs default to 0, the margin-scheme flag defaults to on
- moving a device to SOLD stamps a sale date if it has none yet

Every mutating call returns a DeviceResult instead of raising for expected
failures (duplicate id or IMEI, unknown device). Database errors are caught
here, logged and turned into a generic failure result.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from handytrack.models.device import Device, DeviceStatus, utcnow
from handytrack.repositories.device_repository import (
    DeviceFilters,
    DeviceNotFoundError,
    DeviceRepository,
)
from handytrack.schemas.device import DeviceCreate, DevicePatch

logger = logging.getLogger(__name__)

MSG_DUPLICATE_ID = "Device ID already exists"
MSG_DUPLICATE_IMEI = "IMEI already exists"
MSG_NOT_FOUND = "Device not found"
MSG_INVALID_STATUS = "Invalid status"

MONEY_DEFAULTS = ("shipping_buy", "repair_cost", "shipping_sell", "sales_fees")


@dataclass
class DeviceResult:
    success: bool
    device: Optional[Device] = None
    error: Optional[str] = None
    reason: Optional[str] = None  # 'duplicate_id' | 'duplicate_imei' | 'not_found' | 'invalid_status' | 'error'

    @classmethod
    def ok(cls, device: Device | None = None) -> "DeviceResult":
        return cls(success=True, device=device)

    @classmethod
    def fail(cls, reason: str, error: str) -> "DeviceResult":
        return cls(success=False, error=error, reason=reason)


@dataclass
class DeviceStats:
    total: int
    stock: int
    repair: int
    sold: int


def _is_imei_conflict(exc: IntegrityError) -> bool:
    return "imei" in str(exc.orig).lower()


class DeviceService:
    def __init__(self, repository: DeviceRepository):
        self.repository = repository

    @property
    def session(self):
        return self.repository.session

    def get_devices(self, user_id: str, filters: DeviceFilters | None = None) -> list[Device]:
        return self.repository.find_all(user_id, filters)

    def get_device(self, user_id: str, device_id: str) -> Device | None:
        return self.repository.find_by_id(device_id, user_id)

    def create_device(self, user_id: str, data: DeviceCreate) -> DeviceResult:
        try:
            # Racing inserts are still caught by the primary key below
            if self.repository.device_id_exists(data.id):
                logger.warning("Rejected device %s for %s: id already taken", data.id, user_id)
                return DeviceResult.fail("duplicate_id", MSG_DUPLICATE_ID)

            fields = data.model_dump()
            fields["status"] = DeviceStatus(data.status).value
            for name in MONEY_DEFAULTS:
                fields[name] = fields[name] or 0
            if fields["is_diff_tax"] is None:
                fields["is_diff_tax"] = True

            device = self.repository.create(user_id, fields)
            logger.info("Created device %s for %s", device.id, user_id)
            return DeviceResult.ok(device)
        except IntegrityError as e:
            self.session.rollback()
            if _is_imei_conflict(e):
                return DeviceResult.fail("duplicate_imei", MSG_DUPLICATE_IMEI)
            logger.exception("Create device error")
            return DeviceResult.fail("error", "Failed to create device")
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Create device error")
            return DeviceResult.fail("error", "Failed to create device")

    def update_device(self, user_id: str, device_id: str, patch: DevicePatch) -> DeviceResult:
        """Merge-patch a device, stamping the sale date on first move to SOLD."""
        try:
            current = self.repository.find_by_id(device_id, user_id)
            if not current:
                return DeviceResult.fail("not_found", MSG_NOT_FOUND)

            changes = patch.changes()

            if (
                changes.get("status") == DeviceStatus.SOLD.value
                and current.status != DeviceStatus.SOLD.value
                and current.sale_date is None
                and not patch.has("sale_date")
            ):
                changes["sale_date"] = utcnow()

            device = self.repository.update_fields(device_id, user_id, changes)
            return DeviceResult.ok(device)
        except DeviceNotFoundError:
            return DeviceResult.fail("not_found", MSG_NOT_FOUND)
        except IntegrityError as e:
            self.session.rollback()
            if _is_imei_conflict(e):
                return DeviceResult.fail("duplicate_imei", MSG_DUPLICATE_IMEI)
            logger.exception("Update device error")
            return DeviceResult.fail("error", "Failed to update device")
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Update device error")
            return DeviceResult.fail("error", "Failed to update device")

    def update_status(self, user_id: str, device_id: str, status: DeviceStatus | str) -> DeviceResult:
        """Change only the status (board drag and drop); other columns stay as they are."""
        try:
            new_status = DeviceStatus(status)
        except ValueError:
            logger.warning("Rejected status %r for device %s", status, device_id)
            return DeviceResult.fail("invalid_status", MSG_INVALID_STATUS)

        try:
            device = self.repository.find_by_id(device_id, user_id)
            if not device:
                return DeviceResult.fail("not_found", MSG_NOT_FOUND)

            updates = {"status": new_status.value}
            if new_status == DeviceStatus.SOLD and device.sale_date is None:
                updates["sale_date"] = utcnow()

            device = self.repository.update_fields(device_id, user_id, updates)
            return DeviceResult.ok(device)
        except DeviceNotFoundError:
            return DeviceResult.fail("not_found", MSG_NOT_FOUND)
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Update status error")
            return DeviceResult.fail("error", "Failed to update status")

    def delete_device(self, user_id: str, device_id: str) -> DeviceResult:
        try:
            self.repository.delete(device_id, user_id)
        except DeviceNotFoundError:
            return DeviceResult.fail("not_found", MSG_NOT_FOUND)
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Delete device error")
            return DeviceResult.fail("error", "Failed to delete device")

        logger.info("Deleted device %s for %s", device_id, user_id)
        return DeviceResult.ok()

    def get_stats(self, user_id: str) -> DeviceStats:
        stock = self.repository.count_by_status(user_id, DeviceStatus.STOCK.value)
        repair = self.repository.count_by_status(user_id, DeviceStatus.REPAIR.value)
        sold = self.repository.count_by_status(user_id, DeviceStatus.SOLD.value)
        return DeviceStats(total=stock + repair + sold, stock=stock, repair=repair, sold=sold)
