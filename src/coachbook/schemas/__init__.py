from coachbook.schemas.availability import (
    AvailabilityCheck,
    AvailabilitySlotCreate,
    AvailabilitySlotRead,
    SlotCreated,
)
from coachbook.schemas.booking import (
    BookingCreate,
    BookingCreated,
    BookingRead,
    BookingStatusRead,
    BookingStatusUpdate,
)
from coachbook.schemas.coach import CoachDetailsRead, CoachDetailsUpsert, PriceQuote
from coachbook.schemas.profile import ProfileCreate, ProfileRead, RoleUpdate
from coachbook.schemas.system import StatusResponse

__all__ = [
    "AvailabilityCheck",
    "AvailabilitySlotCreate",
    "AvailabilitySlotRead",
    "BookingCreate",
    "BookingCreated",
    "BookingRead",
    "BookingStatusRead",
    "BookingStatusUpdate",
    "CoachDetailsRead",
    "CoachDetailsUpsert",
    "PriceQuote",
    "ProfileCreate",
    "ProfileRead",
    "RoleUpdate",
    "SlotCreated",
    "StatusResponse",
]
