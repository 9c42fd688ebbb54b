"""Session price calculation."""

from decimal import ROUND_HALF_UP, Decimal

from coachbook.exceptions import ValidationError

CENTS = Decimal("0.01")


def price(hourly_rate: Decimal | float | None, duration_minutes: int) -> Decimal | None:
    """Return ``hourly_rate * duration_minutes / 60`` rounded half-up to cents.

    Returns None when the coach has no rate set.
    """
    if duration_minutes <= 0:
        raise ValidationError("Duration must be positive", details={"duration_minutes": duration_minutes})
    if hourly_rate is None:
        return None
    rate = Decimal(str(hourly_rate))
    return (rate * duration_minutes / 60).quantize(CENTS, rounding=ROUND_HALF_UP)
