from .location import Location, TrackedLocation
from .user import User, UserCreate, UserUpdate
from .contact import Contact, ContactCreate, ContactUpdate
from .walk import (
    WalkStartRequest, LocationUpdateRequest, PanicRequest, WalkEndRequest,
    WalkStarted, LocationUpdated, CheckInRecorded, PanicResult, WalkEnded,
    WalkSummary, WalkHistory, GuardianWalk, GuardianWalks, LiveLocation,
)
from .notification import (
    NotificationCreate, Notification, NotificationList,
    NotificationRead, NotificationsMarkedRead,
)
from .report import ReportLocation, ReportCreate, Report, ReportList
