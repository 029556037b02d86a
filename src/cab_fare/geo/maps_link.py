import math
from typing import Any
from urllib.parse import quote

SEARCH_URL = "https://www.google.com/maps/search/?api=1&query="


def build_maps_link(address: str | None, lat: Any = None, lng: Any = None) -> str | None:
    """Google Maps search link, preferring coordinates over the address text."""
    if lat is not None and lng is not None:
        try:
            la, ln = float(lat), float(lng)
        except (TypeError, ValueError):
            la = ln = math.nan
        if math.isfinite(la) and math.isfinite(ln):
            return SEARCH_URL + quote(f"{la},{ln}", safe="")

    if address and str(address).strip():
        return SEARCH_URL + quote(str(address).strip(), safe="")
    return None


def booking_maps_links(booking: Any) -> dict[str, str | None]:
    """Pickup link for every booking; drop link only for airport bookings."""
    service_type = (getattr(booking, "service_type", None) or "local").lower()
    pickup = build_maps_link(
        getattr(booking, "from_location", None),
        getattr(booking, "pickup_lat", None),
        getattr(booking, "pickup_lng", None),
    )
    drop = None
    if service_type == "airport":
        drop = build_maps_link(
            getattr(booking, "to_location", None),
            getattr(booking, "destination_lat", None),
            getattr(booking, "destination_lng", None),
        )
    return {"pickup": pickup, "drop": drop}
