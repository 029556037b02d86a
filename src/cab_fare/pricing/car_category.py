"""Classification of car options into the coarse categories rate meters use."""

from typing import Any

from .multipliers import DEFAULT_CAR_CATEGORY

CAR_CATEGORIES = ("Sedan", "SUV", "Innova", "Innova Crysta", "Tempo", "Urbenia", "Minibus")

_NAME_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("honda city", "ciaz", "etios", "dzire"), "Sedan"),
    (("ertiga", "marazzo", "rumion"), "SUV"),
)

# Order matters: "innova crysta" must be checked before plain "innova".
_DESCRIPTION_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("sedan", "Sedan"),
    ("suv", "SUV"),
    ("crysta", "Innova Crysta"),
    ("innova", "Innova"),
    ("tempo", "Tempo"),
    ("urbenia", "Urbenia"),
    ("minibus", "Minibus"),
)


def map_car_to_subtype(name: str | None, description: str | None = None) -> str | None:
    """Map a car option's name, then its description, to a car category."""
    if not name:
        return None
    car_name = name.strip().lower()
    desc = (description or "").lower()

    for keywords, category in _NAME_KEYWORDS:
        if any(keyword in car_name for keyword in keywords):
            return category
    if "crysta" in car_name:
        return "Innova Crysta"
    if "innova" in car_name:
        return "Innova"
    for keyword in ("tempo", "urbenia", "minibus"):
        if keyword in car_name:
            return keyword.capitalize()

    for keyword, category in _DESCRIPTION_KEYWORDS:
        if keyword in desc:
            return category
    return None


def get_car_category(car_option: Any | None, default: str = DEFAULT_CAR_CATEGORY) -> str:
    """Category used for rate lookup; ``default`` when the option is unknown.

    Accepts an ORM row or a mapping with ``name``, ``description`` and
    ``car_subtype``.
    """
    if car_option is None:
        return default

    subtype = _field(car_option, "car_subtype")
    if subtype:
        return str(subtype)

    mapped = map_car_to_subtype(_field(car_option, "name"), _field(car_option, "description"))
    return mapped or default


def _field(obj: Any, key: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)
