from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from qualifications.core.config import get_settings
from qualifications.db.session import get_db
from qualifications.models.subject import Subject
from qualifications.models.user import User

router = APIRouter(tags=["system"])


@router.get("/health")
def health():
    settings = get_settings()
    return {"status": "ok", "version": settings.app_version}


@router.get("/system/info")
def system_info(db: Session = Depends(get_db)):
    settings = get_settings()
    users_count = db.scalar(select(func.count()).select_from(User)) or 0
    subjects_count = db.scalar(select(func.count()).select_from(Subject)) or 0
    return {
        "app_name": settings.app_name,
        "app_env": settings.app_env,
        "app_version": settings.app_version,
        "registered_users": users_count,
        "subjects": subjects_count,
    }
