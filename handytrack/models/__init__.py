"""HandyTrack Database Models."""

from handytrack.models.user import User
from handytrack.models.device import Device, DeviceStatus, Document
from handytrack.models.company import CompanySettings

__all__ = [
    "User",
    "Device",
    "DeviceStatus",
    "Document",
    "CompanySettings",
]
