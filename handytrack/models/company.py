"""Company profile used on generated invoices."""

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Field, SQLModel


class CompanySettings(SQLModel, table=True):
    __tablename__ = "company_settings"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="users.id", unique=True, index=True)
    company_name: str
    owner_name: str
    street: str
    house_number: str
    postal_code: str
    city: str
    country: str = Field(default="Deutschland")
    vat_id: Optional[str] = None  # USt-IdNr.
    tax_id: Optional[str] = None
    email: str
    phone: Optional[str] = None
    logo_path: Optional[str] = None
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
