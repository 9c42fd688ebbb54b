"""Closed vocabularies validated at the API boundary."""

from enum import Enum


class Role(str, Enum):
    CLIENT = "client"
    COACH = "coach"


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Statuses that occupy a coach's calendar
ACTIVE_BOOKING_STATUSES = (
    BookingStatus.PENDING,
    BookingStatus.CONFIRMED,
    BookingStatus.COMPLETED,
)


class Category(str, Enum):
    LIFE = "life"
    BUSINESS = "business"
    CREATIVE = "creative"
    SPIRITUAL = "spiritual"
    NATURE = "nature"


class Language(str, Enum):
    ASL = "ASL"
    ENGLISH = "English"
    SPANISH = "Spanish"
