from fastapi import APIRouter
from walkguard.api.v1.endpoints import users, contacts, walks, notifications, reports

# Create main API router
api_router = APIRouter()

api_router.include_router(
    users.router,
    prefix="/users",
    tags=["users"]
)

api_router.include_router(
    contacts.router,
    prefix="/contacts",
    tags=["contacts"]
)

api_router.include_router(
    walks.router,
    prefix="/walks",
    tags=["walks"]
)

api_router.include_router(
    notifications.router,
    prefix="/notifications",
    tags=["notifications"]
)

api_router.include_router(
    reports.router,
    prefix="/reports",
    tags=["reports"]
)
