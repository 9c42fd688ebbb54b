from coachbook.models.availability import AvailabilitySlot
from coachbook.models.booking import Booking
from coachbook.models.coach import CoachDetails
from coachbook.models.profile import Profile

__all__ = [
    "AvailabilitySlot",
    "Booking",
    "CoachDetails",
    "Profile",
]
