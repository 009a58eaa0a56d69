"""
Forecast assumption settings endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from finance_tracker.api import schemas
from finance_tracker.db.database import get_db
from finance_tracker.db.repositories import SettingsRepository

router = APIRouter()


@router.get("/", response_model=schemas.SettingsResponse)
async def get_user_settings(db: Session = Depends(get_db)):
    """Current assumption defaults, seeded from configuration on first use."""
    return SettingsRepository(db).get()


@router.put("/", response_model=schemas.SettingsResponse)
async def update_user_settings(
    settings_data: schemas.SettingsUpdate,
    db: Session = Depends(get_db),
):
    """Update assumption defaults. Only provided fields change."""
    updates = {
        field: value
        for field, value in settings_data.model_dump(exclude_unset=True).items()
        if value is not None
    }
    return SettingsRepository(db).update(updates)
