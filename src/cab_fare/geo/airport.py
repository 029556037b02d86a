"""Airport trips always start or end at Kempegowda International Airport."""

from ..core.exceptions import ValidationError
from .models import Coordinates

KIA = Coordinates(lat=13.1986, lng=77.7066)

# Roughly 100 m in degrees of latitude.
KIA_TOLERANCE_DEG = 0.001


def is_airport(point: Coordinates | None) -> bool:
    if point is None:
        return False
    return (
        abs(point.lat - KIA.lat) <= KIA_TOLERANCE_DEG
        and abs(point.lng - KIA.lng) <= KIA_TOLERANCE_DEG
    )


def anchor_airport_trip(
    pickup: Coordinates | None, drop: Coordinates | None
) -> tuple[Coordinates, Coordinates]:
    """Fill the missing endpoint with KIA and check exactly one end is the airport."""
    if pickup is None and drop is None:
        raise ValidationError("Airport trip needs a pickup or drop location")
    if pickup is None:
        pickup = KIA
    if drop is None:
        drop = KIA

    at_pickup = is_airport(pickup)
    at_drop = is_airport(drop)
    if at_pickup == at_drop:
        raise ValidationError(
            "Airport trip must start or end at the airport, not both",
            details={"pickup": pickup.as_param(), "drop": drop.as_param()},
        )
    return pickup, drop
