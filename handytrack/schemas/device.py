"""Device request/response schemas."""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from handytrack.models.device import DeviceStatus, as_utc

# Client timestamps are stored in UTC
DATE_FIELDS = (
    "purchase_date",
    "shipping_buy_date",
    "repair_date",
    "sale_date",
    "shipping_sell_date",
)

# Optional text fields where an empty form value means "not set"
BLANKABLE_FIELDS = (
    "imei",
    "defects",
    "buyer_name",
    "platform_order_number",
    "sale_invoice_number",
)

# Columns that may be patched but never cleared
NON_NULLABLE_FIELDS = (
    "model",
    "storage",
    "color",
    "condition",
    "status",
    "purchase_date",
    "purchase_price",
    "shipping_buy",
    "repair_cost",
    "shipping_sell",
    "sales_fees",
    "is_diff_tax",
)


class DeviceCreate(BaseModel):
    model_config = {"use_enum_values": True}

    id: str = Field(min_length=1)
    model: str = Field(min_length=1)
    storage: str = Field(min_length=1)
    color: str = Field(min_length=1)
    condition: str = Field(min_length=1)
    status: DeviceStatus = DeviceStatus.STOCK
    imei: Optional[str] = None
    defects: Optional[str] = None

    purchase_date: datetime
    purchase_price: float
    shipping_buy: Optional[float] = None
    shipping_buy_date: Optional[datetime] = None

    repair_cost: Optional[float] = None
    repair_date: Optional[datetime] = None

    sale_price: Optional[float] = None
    sales_fees: Optional[float] = None
    sale_date: Optional[datetime] = None
    shipping_sell: Optional[float] = None
    shipping_sell_date: Optional[datetime] = None
    buyer_name: Optional[str] = None
    platform_order_number: Optional[str] = None
    sale_invoice_number: Optional[str] = None
    is_diff_tax: Optional[bool] = None

    @field_validator(*BLANKABLE_FIELDS)
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    @field_validator(*DATE_FIELDS)
    @classmethod
    def to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v) if v is not None else None


class DevicePatch(BaseModel):
    """Merge-patch for a device.

    Only fields the caller actually set are applied. A field explicitly
    set to null clears the stored value; an absent field is left untouched.
    """

    model_config = {"use_enum_values": True}

    model: Optional[str] = None
    storage: Optional[str] = None
    color: Optional[str] = None
    condition: Optional[str] = None
    status: Optional[DeviceStatus] = None
    imei: Optional[str] = None
    defects: Optional[str] = None

    purchase_date: Optional[datetime] = None
    purchase_price: Optional[float] = None
    shipping_buy: Optional[float] = None
    shipping_buy_date: Optional[datetime] = None

    repair_cost: Optional[float] = None
    repair_date: Optional[datetime] = None

    sale_price: Optional[float] = None
    sales_fees: Optional[float] = None
    sale_date: Optional[datetime] = None
    shipping_sell: Optional[float] = None
    shipping_sell_date: Optional[datetime] = None
    buyer_name: Optional[str] = None
    platform_order_number: Optional[str] = None
    sale_invoice_number: Optional[str] = None
    is_diff_tax: Optional[bool] = None

    @field_validator(*BLANKABLE_FIELDS)
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            return None
        return v

    @field_validator(*DATE_FIELDS)
    @classmethod
    def to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v) if v is not None else None

    @field_validator(*NON_NULLABLE_FIELDS)
    @classmethod
    def reject_null(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("field cannot be cleared")
        return v

    def has(self, name: str) -> bool:
        return name in self.model_fields_set

    def changes(self) -> dict[str, Any]:
        """Fields present in the patch, with their new values."""
        return self.model_dump(exclude_unset=True)


class DeviceStatusUpdate(BaseModel):
    status: DeviceStatus


class DocumentResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    doc_type: str
    filename: str
    file_path: Optional[str]
    created_at: datetime


class DeviceResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    model: str
    storage: str
    color: str
    condition: str
    status: DeviceStatus
    imei: Optional[str]
    defects: Optional[str]
    purchase_date: datetime
    purchase_price: float
    shipping_buy: float
    shipping_buy_date: Optional[datetime]
    repair_cost: float
    repair_date: Optional[datetime]
    sale_price: Optional[float]
    sales_fees: float
    sale_date: Optional[datetime]
    shipping_sell: float
    shipping_sell_date: Optional[datetime]
    buyer_name: Optional[str]
    platform_order_number: Optional[str]
    sale_invoice_number: Optional[str]
    is_diff_tax: bool
    created_at: datetime
    updated_at: datetime

    @field_validator(*DATE_FIELDS, "created_at", "updated_at")
    @classmethod
    def to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v) if v is not None else None


class DeviceDetailResponse(DeviceResponse):
    documents: list[DocumentResponse] = []


class DeviceStatsResponse(BaseModel):
    total: int
    stock: int
    repair: int
    sold: int
