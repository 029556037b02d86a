"""Local package rate repository (4, 8 and 12 hour packages per cab type)."""

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from ..schema import LocalPackageRate

PACKAGE_HOURS = (4, 8, 12)


class LocalPackageRepository:
    """Repository for local package rates."""

    def __init__(self, session: Session):
        self.session = session

    def get_packages(self, cab_type_id: int) -> list[LocalPackageRate]:
        """List package rows for a cab type ordered by hours."""
        stmt = (
            select(LocalPackageRate)
            .where(LocalPackageRate.cab_type_id == cab_type_id)
            .order_by(LocalPackageRate.hours)
        )
        return list(self.session.execute(stmt).scalars().all())

    def replace_packages(
        self,
        cab_type_id: int,
        package_fares: dict[int, float | None],
        extra_hour_rate: float | None,
    ) -> list[LocalPackageRate]:
        """Replace all package rows for a cab type.

        One row is written per entry in PACKAGE_HOURS; hours missing from
        ``package_fares`` are stored with no fare.
        """
        self.session.execute(
            delete(LocalPackageRate).where(LocalPackageRate.cab_type_id == cab_type_id)
        )
        rows = [
            LocalPackageRate(
                cab_type_id=cab_type_id,
                hours=hours,
                package_fare=package_fares.get(hours),
                extra_hour_rate=extra_hour_rate,
            )
            for hours in PACKAGE_HOURS
        ]
        self.session.add_all(rows)
        self.session.flush()
        return rows
