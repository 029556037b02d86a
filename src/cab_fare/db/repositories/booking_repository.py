"""Booking repository."""

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..schema import Booking


class BookingRepository:
    """Repository for booking CRUD operations."""

    def __init__(self, session: Session):
        self.session = session

    def create(self, **fields: Any) -> Booking:
        """Create a booking and assign its ID."""
        booking = Booking(**fields)
        self.session.add(booking)
        self.session.flush()
        return booking

    def get(self, booking_id: int) -> Booking | None:
        """Get booking by ID."""
        return self.session.get(Booking, booking_id)

    def update_status(self, booking_id: int, status: str) -> None:
        """Update booking status."""
        booking = self.session.get(Booking, booking_id)
        if booking:
            booking.status = status

    def list_by_status(self, status: str) -> list[Booking]:
        """List bookings by status, newest first."""
        stmt = select(Booking).where(Booking.status == status).order_by(Booking.id.desc())
        return list(self.session.execute(stmt).scalars().all())
