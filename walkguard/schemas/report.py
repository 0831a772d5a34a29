from typing import List, Optional
from datetime import datetime
from pydantic import Field
from walkguard.models.report import ReportStatus, ReportType
from walkguard.schemas.base import CamelModel
from walkguard.schemas.location import Location


class ReportLocation(Location):
    address: Optional[str] = Field(None, max_length=500)


class ReportCreate(CamelModel):
    type: ReportType
    location: ReportLocation
    description: Optional[str] = None
    is_anonymous: bool = True


class Report(CamelModel):
    id: int
    type: ReportType
    location: ReportLocation
    description: Optional[str] = None
    is_anonymous: bool
    status: ReportStatus
    created_at: datetime
    date: datetime  # same as createdAt, older mobile builds read this key

    @classmethod
    def from_model(cls, report) -> "Report":
        return cls(
            id=report.id,
            type=report.report_type,
            location=report.location,
            description=report.description,
            is_anonymous=report.is_anonymous,
            status=report.status,
            created_at=report.created_at,
            date=report.created_at,
        )


class ReportList(CamelModel):
    reports: List[Report]
