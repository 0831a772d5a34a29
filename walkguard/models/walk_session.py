from sqlalchemy import Column, Integer, String, Boolean, DateTime, Float, ForeignKey, Enum, Index
from sqlalchemy.orm import relationship
from walkguard.db.database import Base
from walkguard.models.base import BaseModel
import enum


class WalkMode(enum.Enum):
    FRIEND = "friend"
    GUARDIAN = "guardian"
    SAFE_PLACE = "safe-place"


class ContactScope(enum.Enum):
    EMERGENCY = "emergency"
    GUARDIAN = "guardian"


class WalkSession(BaseModel):
    __tablename__ = "walk_sessions"
    __table_args__ = (
        Index("idx_walk_sessions_owner_active", "owner_user_id", "is_active"),
        Index("idx_walk_sessions_start_time", "start_time"),
    )

    owner_user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    mode = Column(
        Enum(WalkMode, name="walkmode", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=True)
    duration = Column(String(16), nullable=True)  # MM:SS, minutes unbounded

    start_lat = Column(Float, nullable=False)
    start_lng = Column(Float, nullable=False)
    current_lat = Column(Float, nullable=True)
    current_lng = Column(Float, nullable=True)
    current_updated_at = Column(DateTime(timezone=True), nullable=True)
    end_lat = Column(Float, nullable=True)
    end_lng = Column(Float, nullable=True)

    is_active = Column(Boolean, default=True, nullable=False)

    owner = relationship("User", back_populates="walk_sessions")
    contact_links = relationship(
        "WalkSessionContact",
        back_populates="walk_session",
        order_by="WalkSessionContact.id",
        cascade="all, delete-orphan",
    )
    # Timestamps come from the app clock, so id order can disagree with time order
    check_ins = relationship(
        "WalkCheckIn",
        order_by=lambda: [WalkCheckIn.occurred_at, WalkCheckIn.id],
        cascade="all, delete-orphan",
    )
    panic_events = relationship(
        "WalkPanicEvent",
        order_by=lambda: [WalkPanicEvent.occurred_at, WalkPanicEvent.id],
        cascade="all, delete-orphan",
    )

    @property
    def start_location(self):
        return {"lat": self.start_lat, "lng": self.start_lng}

    @property
    def current_location(self):
        if self.current_lat is None or self.current_lng is None:
            return None
        return {"lat": self.current_lat, "lng": self.current_lng, "updatedAt": self.current_updated_at}

    @property
    def end_location(self):
        if self.end_lat is None or self.end_lng is None:
            return None
        return {"lat": self.end_lat, "lng": self.end_lng}

    def _contact_ids(self, scope):
        return [link.contact_id for link in self.contact_links if link.scope == scope]

    @property
    def contact_ids(self):
        return self._contact_ids(ContactScope.EMERGENCY)

    @property
    def guardian_ids(self):
        return self._contact_ids(ContactScope.GUARDIAN)


class WalkSessionContact(Base):
    """Contact referenced by a session, as an emergency contact or a guardian"""
    __tablename__ = "walk_session_contacts"
    __table_args__ = (
        Index("idx_walk_session_contacts_contact", "contact_id", "scope"),
    )

    id = Column(Integer, primary_key=True)
    walk_session_id = Column(Integer, ForeignKey("walk_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    contact_id = Column(Integer, ForeignKey("contacts.id", ondelete="CASCADE"), nullable=False)
    scope = Column(
        Enum(ContactScope, name="contactscope", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )

    walk_session = relationship("WalkSession", back_populates="contact_links")


class WalkCheckIn(Base):
    __tablename__ = "walk_check_ins"

    id = Column(Integer, primary_key=True)
    walk_session_id = Column(Integer, ForeignKey("walk_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    occurred_at = Column(DateTime(timezone=True), nullable=False)


class WalkPanicEvent(Base):
    __tablename__ = "walk_panic_events"

    id = Column(Integer, primary_key=True)
    walk_session_id = Column(Integer, ForeignKey("walk_sessions.id", ondelete="CASCADE"), nullable=False, index=True)
    occurred_at = Column(DateTime(timezone=True), nullable=False)
