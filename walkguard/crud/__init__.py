from .user import user
from .contact import contact
from .walk_session import walk_session
from .notification import notification
from .report import report

__all__ = ["user", "contact", "walk_session", "notification", "report"]
