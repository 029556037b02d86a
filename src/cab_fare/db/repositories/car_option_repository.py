"""Car option repository."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from ...pricing.car_category import map_car_to_subtype
from ..schema import CarOption


class CarOptionRepository:
    """Repository for car option CRUD operations."""

    def __init__(self, session: Session):
        self.session = session

    def get(self, car_option_id: int) -> CarOption | None:
        """Get car option by ID."""
        return self.session.get(CarOption, car_option_id)

    def list_all(self, active_only: bool = True) -> list[CarOption]:
        """List car options in display order."""
        stmt = select(CarOption).order_by(CarOption.sort_order, CarOption.id)
        if active_only:
            stmt = stmt.where(CarOption.is_active.is_(True))
        return list(self.session.execute(stmt).scalars().all())

    def create(
        self,
        name: str,
        description: str | None = None,
        sort_order: int = 0,
        car_subtype: str | None = None,
        cab_type_id: int | None = None,
    ) -> CarOption:
        """Create a car option, deriving its subtype when not given."""
        option = CarOption(
            name=name,
            description=description,
            sort_order=sort_order,
            car_subtype=car_subtype or map_car_to_subtype(name, description),
            cab_type_id=cab_type_id,
        )
        self.session.add(option)
        self.session.flush()
        return option
