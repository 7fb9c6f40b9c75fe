"""Company settings API endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from handytrack.api.deps import get_current_user
from handytrack.database import get_session
from handytrack.models.user import User
from handytrack.schemas.company import CompanySettingsRequest, CompanySettingsResponse
from handytrack.services.company_service import get_settings, save_settings

router = APIRouter(prefix="/company-settings", tags=["company"])


@router.get("", response_model=Optional[CompanySettingsResponse])
def read_company_settings(
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Current user's company profile, or null if not set up yet."""
    company = get_settings(user.id, session)
    return CompanySettingsResponse.model_validate(company) if company else None


@router.put("", response_model=CompanySettingsResponse)
def write_company_settings(
    request: CompanySettingsRequest,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    company = save_settings(user.id, request, session)
    return CompanySettingsResponse.model_validate(company)
