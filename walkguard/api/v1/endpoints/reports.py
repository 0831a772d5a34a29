import logging
from typing import Any
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from walkguard import crud, schemas
from walkguard.api import deps
from walkguard.core.config import settings
from walkguard.db.database import get_db
from walkguard.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/", response_model=schemas.Report, status_code=status.HTTP_201_CREATED)
def create_report(
    *,
    db: Session = Depends(get_db),
    report_in: schemas.ReportCreate,
    current_user: User = Depends(deps.get_current_user)
) -> Any:
    """Submit an incident report"""
    report = crud.report.create_with_owner(db, obj_in=report_in, user_id=current_user.id)
    logger.info(f"Report {report.id} ({report.report_type.value}) submitted by user {current_user.id}")
    return schemas.Report.from_model(report)


@router.get("/my-reports", response_model=schemas.ReportList)
def get_my_reports(
    db: Session = Depends(get_db),
    current_user: User = Depends(deps.get_current_user)
) -> Any:
    """Get current user's reports, newest first"""
    reports = crud.report.get_by_user(db, user_id=current_user.id, limit=settings.REPORT_HISTORY_LIMIT)
    return schemas.ReportList(reports=[schemas.Report.from_model(r) for r in reports])
