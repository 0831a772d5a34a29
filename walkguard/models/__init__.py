from .base import BaseModel
from .user import User, AuthProvider
from .contact import Contact, ContactRole
from .walk_session import WalkSession, WalkSessionContact, WalkCheckIn, WalkPanicEvent, WalkMode, ContactScope
from .notification import Notification, NotificationType
from .report import Report, ReportType, ReportStatus
