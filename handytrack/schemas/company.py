"""Company settings schemas."""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class CompanySettingsRequest(BaseModel):
    company_name: str = Field(min_length=1)
    owner_name: str = Field(min_length=1)
    street: str = Field(min_length=1)
    house_number: str = Field(min_length=1)
    postal_code: str = Field(min_length=1)
    city: str = Field(min_length=1)
    country: str = Field(default="Deutschland", min_length=1)
    vat_id: Optional[str] = None
    tax_id: Optional[str] = None
    email: str
    phone: Optional[str] = None
    logo_path: Optional[str] = None

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        if not EMAIL_RE.match(v):
            raise ValueError("Invalid email address")
        return v

    @field_validator("vat_id", "tax_id", "phone", "logo_path")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class CompanySettingsResponse(BaseModel):
    model_config = {"from_attributes": True}

    company_name: str
    owner_name: str
    street: str
    house_number: str
    postal_code: str
    city: str
    country: str
    vat_id: Optional[str]
    tax_id: Optional[str]
    email: str
    phone: Optional[str]
    logo_path: Optional[str]
    updated_at: datetime
