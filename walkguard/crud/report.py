from typing import List
from sqlalchemy import desc
from sqlalchemy.orm import Session
from walkguard.crud.base import CRUDBase
from walkguard.models.report import Report
from walkguard.schemas.report import ReportCreate


class CRUDReport(CRUDBase[Report, ReportCreate, ReportCreate]):

    def create_with_owner(self, db: Session, *, obj_in: ReportCreate, user_id: int) -> Report:
        description = obj_in.description.strip() if obj_in.description else None
        db_obj = Report(
            user_id=user_id,
            report_type=obj_in.type,
            lat=obj_in.location.lat,
            lng=obj_in.location.lng,
            address=obj_in.location.address,
            description=description or None,
            is_anonymous=obj_in.is_anonymous,
        )
        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    def get_by_user(self, db: Session, *, user_id: int, limit: int = 50) -> List[Report]:
        """Newest first"""
        return (
            db.query(Report)
            .filter(Report.user_id == user_id)
            .order_by(desc(Report.created_at), desc(Report.id))
            .limit(limit)
            .all()
        )


report = CRUDReport(Report)
