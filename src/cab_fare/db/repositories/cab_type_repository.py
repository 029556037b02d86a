"""Cab type repository for legacy pricing rows and the admin cab-type list."""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..schema import CabType

# Local rate meters are only offered for these cab types.
LOCAL_RATE_METER_CAB_NAMES = ("Innova Crysta", "SUV", "Sedan")


def _normalize(name: str | None) -> str:
    return (name or "").strip().lower()


class CabTypeRepository:
    """Repository for cab type CRUD operations."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, cab_type_id: int) -> CabType | None:
        """Get cab type by ID."""
        return self.session.get(CabType, cab_type_id)

    def get_active(self, cab_type_id: int) -> CabType | None:
        """Get cab type by ID if it is active."""
        cab_type = self.session.get(CabType, cab_type_id)
        if cab_type is None or not cab_type.is_active:
            return None
        return cab_type

    def find_active_by_name(self, name: str) -> CabType | None:
        """Find the lowest-id active cab type whose name matches case-insensitively."""
        stmt = (
            select(CabType)
            .where(
                func.lower(func.trim(CabType.name)) == _normalize(name),
                CabType.is_active.is_(True),
            )
            .order_by(CabType.id)
            .limit(1)
        )
        return self.session.execute(stmt).scalar()

    def first_active(self) -> CabType | None:
        """Get the active cab type with the lowest ID."""
        stmt = select(CabType).where(CabType.is_active.is_(True)).order_by(CabType.id).limit(1)
        return self.session.execute(stmt).scalar()

    def create(
        self,
        name: str,
        service_type: str = "local",
        base_fare: float = 0.0,
        per_km_rate: float = 0.0,
        per_minute_rate: float | None = 0.0,
        per_hour_rate: float | None = None,
        description: str | None = None,
    ) -> CabType:
        """Create a new cab type."""
        cab_type = CabType(
            name=name.strip(),
            service_type=service_type,
            base_fare=base_fare,
            per_km_rate=per_km_rate,
            per_minute_rate=per_minute_rate,
            per_hour_rate=per_hour_rate,
            description=description,
        )
        self.session.add(cab_type)
        self.session.flush()
        return cab_type

    def deactivate(self, cab_type_id: int) -> bool:
        """Mark a cab type inactive. Returns False when it does not exist."""
        cab_type = self.session.get(CabType, cab_type_id)
        if cab_type is None:
            return False
        cab_type.is_active = False
        return True

    def list_for_service(self, service_type: str) -> list[CabType]:
        """Active cab types offered for a service type, one per name.

        Local offers only the rate-meter cab names; airport and outstation
        hide plain "Innova". Duplicate names keep the lowest ID. Sorted by name.
        """
        stmt = (
            select(CabType)
            .where(CabType.service_type == service_type, CabType.is_active.is_(True))
            .order_by(CabType.id)
        )
        rows = list(self.session.execute(stmt).scalars().all())

        if service_type == "local":
            allowed = {_normalize(name) for name in LOCAL_RATE_METER_CAB_NAMES}
            rows = [row for row in rows if _normalize(row.name) in allowed]
        elif service_type in ("airport", "outstation"):
            rows = [row for row in rows if _normalize(row.name) != "innova"]

        by_name: dict[str, CabType] = {}
        for row in rows:
            by_name.setdefault(_normalize(row.name), row)

        return sorted(by_name.values(), key=lambda row: row.name or "")
