from typing import List, Optional
from datetime import datetime
from pydantic import Field
from walkguard.models.walk_session import WalkMode
from walkguard.schemas.base import CamelModel
from walkguard.schemas.location import Location, TrackedLocation


# ---------------------------
# Requests
# ---------------------------
class WalkStartRequest(CamelModel):
    mode: WalkMode
    location: Location
    contact_ids: List[int] = Field(default_factory=list)
    guardian_ids: List[int] = Field(default_factory=list)


class LocationUpdateRequest(Location):
    pass


class PanicRequest(CamelModel):
    location: Optional[Location] = None


class WalkEndRequest(CamelModel):
    location: Optional[Location] = None


# ---------------------------
# Responses
# ---------------------------
class WalkStarted(CamelModel):
    session_id: int
    mode: WalkMode
    location: Location
    started_at: datetime


class LocationUpdated(CamelModel):
    session_id: int
    location: Location
    updated_at: datetime


class CheckInRecorded(CamelModel):
    session_id: int
    check_in_at: datetime
    message: str = "Check-in recorded"


class PanicResult(CamelModel):
    session_id: int
    panic_triggered: bool = True
    notifications_sent: int
    emergency_contacts: int
    delivery_failed: bool = False
    timestamp: datetime
    message: str = "Panic processed successfully"


class WalkEnded(CamelModel):
    session_id: int
    ended_at: datetime
    duration: str
    message: str = "Walk session ended"


class WalkSummary(CamelModel):
    id: int
    mode: WalkMode
    start_time: datetime
    end_time: Optional[datetime] = None
    duration: Optional[str] = None
    start_location: Location
    end_location: Optional[Location] = None
    check_ins: int
    panic_events: int
    is_active: bool


class WalkHistory(CamelModel):
    walks: List[WalkSummary]


class GuardianWalk(CamelModel):
    id: int
    user_id: int
    user_name: str
    mode: WalkMode
    start_time: datetime
    start_location: Location
    current_location: TrackedLocation
    check_ins: int
    panic_events: int
    last_check_in: Optional[datetime] = None


class GuardianWalks(CamelModel):
    walks: List[GuardianWalk]


class LiveLocation(CamelModel):
    session_id: int
    user_name: str
    location: Location
    start_location: Location
    start_time: datetime
    check_ins: int
    panic_events: int
    last_check_in: Optional[datetime] = None
    last_location_update: datetime
