from sqlalchemy import Column, String, Boolean, DateTime, Text, Integer, Float, ForeignKey, Enum, Index
from walkguard.models.base import BaseModel
import enum


class ReportType(enum.Enum):
    VERBAL = "verbal"
    PHYSICAL = "physical"
    STALKING = "stalking"
    ASSAULT = "assault"


class ReportStatus(enum.Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class Report(BaseModel):
    __tablename__ = "reports"
    __table_args__ = (
        Index("idx_reports_user_created", "user_id", "created_at"),
        Index("idx_reports_type", "report_type"),
        Index("idx_reports_status", "status"),
    )

    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    report_type = Column(
        Enum(ReportType, name="reporttype", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    lat = Column(Float, nullable=False)
    lng = Column(Float, nullable=False)
    address = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    is_anonymous = Column(Boolean, default=True, nullable=False)
    status = Column(
        Enum(ReportStatus, name="reportstatus", values_callable=lambda e: [m.value for m in e]),
        default=ReportStatus.PENDING,
        nullable=False,
    )
    verified_at = Column(DateTime(timezone=True), nullable=True)

    @property
    def location(self):
        location = {"lat": self.lat, "lng": self.lng}
        if self.address:
            location["address"] = self.address
        return location
