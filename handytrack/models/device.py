"""Device and Document models."""

import secrets
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, Relationship, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Normalize to aware UTC; naive values are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# Stored with an offset where the backend supports it
UTC_DATETIME = DateTime(timezone=True)


class DeviceStatus(str, Enum):
    STOCK = "STOCK"
    REPAIR = "REPAIR"
    SOLD = "SOLD"


class Device(SQLModel, table=True):
    __tablename__ = "devices"

    id: str = Field(primary_key=True)  # chosen by the user, unique across all users
    user_id: str = Field(foreign_key="users.id", index=True)

    model: str
    storage: str
    color: str
    condition: str
    status: str = Field(default=DeviceStatus.STOCK.value, index=True)
    imei: Optional[str] = Field(default=None, unique=True)
    defects: Optional[str] = None

    # Purchase
    purchase_date: datetime = Field(sa_type=UTC_DATETIME, index=True)
    purchase_price: float
    shipping_buy: float = 0
    shipping_buy_date: Optional[datetime] = Field(default=None, sa_type=UTC_DATETIME)

    # Repair
    repair_cost: float = 0
    repair_date: Optional[datetime] = Field(default=None, sa_type=UTC_DATETIME)

    # Sale
    sale_price: Optional[float] = None
    sales_fees: float = 0
    sale_date: Optional[datetime] = Field(default=None, sa_type=UTC_DATETIME, index=True)
    shipping_sell: float = 0
    shipping_sell_date: Optional[datetime] = Field(default=None, sa_type=UTC_DATETIME)
    buyer_name: Optional[str] = None
    platform_order_number: Optional[str] = None
    sale_invoice_number: Optional[str] = None
    is_diff_tax: bool = Field(default=True)  # margin scheme (Differenzbesteuerung)

    created_at: datetime = Field(default_factory=utcnow, sa_type=UTC_DATETIME, index=True)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=UTC_DATETIME)

    documents: list["Document"] = Relationship(
        back_populates="device",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )


class Document(SQLModel, table=True):
    __tablename__ = "documents"

    id: str = Field(default_factory=lambda: f"doc_{secrets.token_hex(4)}", primary_key=True)
    device_id: str = Field(foreign_key="devices.id", index=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    doc_type: str = Field(default="INVOICE")  # 'INVOICE' | 'PURCHASE_RECEIPT' | ...
    filename: str
    file_path: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow, sa_type=UTC_DATETIME)

    device: Optional[Device] = Relationship(back_populates="documents")
