"""Company profile storage (one record per user)."""

import logging
from datetime import datetime, timezone

from sqlmodel import Session, select

from handytrack.models.company import CompanySettings
from handytrack.schemas.company import CompanySettingsRequest

logger = logging.getLogger(__name__)


def get_settings(user_id: str, session: Session) -> CompanySettings | None:
    return session.exec(
        select(CompanySettings).where(CompanySettings.user_id == user_id)
    ).first()


def save_settings(user_id: str, data: CompanySettingsRequest, session: Session) -> CompanySettings:
    """Create or replace the user's company profile."""
    company = get_settings(user_id, session)
    if not company:
        company = CompanySettings(user_id=user_id, **data.model_dump())
        logger.info("Created company settings for %s", user_id)
    else:
        for name, value in data.model_dump().items():
            setattr(company, name, value)
        company.updated_at = datetime.now(timezone.utc)

    session.add(company)
    session.commit()
    session.refresh(company)
    return company
