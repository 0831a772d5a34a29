from typing import Optional
from datetime import datetime
from pydantic import Field
from walkguard.schemas.base import CamelModel


class Location(CamelModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)


class TrackedLocation(Location):
    updated_at: Optional[datetime] = None
