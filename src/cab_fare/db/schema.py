"""SQLAlchemy ORM models for pricing configuration and bookings."""

from datetime import UTC, datetime

from sqlalchemy import Boolean, Float, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class RateMeter(Base):
    __tablename__ = "rate_meters"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    service_type: Mapped[str] = mapped_column(String, nullable=False)
    car_category: Mapped[str] = mapped_column(String, nullable=False)
    trip_type: Mapped[str | None] = mapped_column(String, nullable=True)
    base_fare: Mapped[float] = mapped_column(Float, default=0.0)
    per_km_rate: Mapped[float] = mapped_column(Float, default=0.0)
    per_minute_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    per_hour_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    extra_km_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    min_km: Mapped[int | None] = mapped_column(Integer, nullable=True)
    base_km_per_day: Mapped[int | None] = mapped_column(Integer, nullable=True)
    driver_charges: Mapped[float | None] = mapped_column(Float, nullable=True)
    night_charges: Mapped[float | None] = mapped_column(Float, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))
    updated_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )

    __table_args__ = (Index("idx_rate_meter_lookup", "service_type", "car_category", "trip_type"),)


class CabType(Base):
    __tablename__ = "cab_types"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    service_type: Mapped[str] = mapped_column(String, default="local")
    base_fare: Mapped[float] = mapped_column(Float, default=0.0)
    per_km_rate: Mapped[float] = mapped_column(Float, default=0.0)
    per_minute_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    per_hour_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    capacity: Mapped[int] = mapped_column(Integer, default=4)
    image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))

    __table_args__ = (UniqueConstraint("name", "service_type", name="uq_cab_type_name_service"),)


class LocalPackageRate(Base):
    __tablename__ = "local_package_rates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    cab_type_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("cab_types.id", ondelete="CASCADE"), nullable=False
    )
    hours: Mapped[int] = mapped_column(Integer, nullable=False)
    package_fare: Mapped[float | None] = mapped_column(Float, nullable=True)
    extra_hour_rate: Mapped[float | None] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))

    __table_args__ = (UniqueConstraint("cab_type_id", "hours", name="uq_package_cab_hours"),)


class CarOption(Base):
    __tablename__ = "car_options"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)
    car_subtype: Mapped[str | None] = mapped_column(String, nullable=True)
    cab_type_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)


class Booking(Base):
    __tablename__ = "bookings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    from_location: Mapped[str] = mapped_column(String, nullable=False)
    to_location: Mapped[str] = mapped_column(String, nullable=False)
    passenger_name: Mapped[str] = mapped_column(String, nullable=False)
    passenger_phone: Mapped[str] = mapped_column(String, nullable=False)
    service_type: Mapped[str] = mapped_column(String, nullable=False, default="local")
    trip_type: Mapped[str | None] = mapped_column(String, nullable=True)
    car_category: Mapped[str | None] = mapped_column(String, nullable=True)
    car_option_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    cab_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    cab_type_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    number_of_hours: Mapped[int | None] = mapped_column(Integer, nullable=True)
    number_of_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    distance_km: Mapped[float] = mapped_column(Float, default=0.0)
    estimated_time_minutes: Mapped[float | None] = mapped_column(Float, nullable=True)
    fare_amount: Mapped[float] = mapped_column(Float, nullable=False)
    pricing_rule: Mapped[str | None] = mapped_column(String, nullable=True)
    pickup_lat: Mapped[float | None] = mapped_column(Float, nullable=True)
    pickup_lng: Mapped[float | None] = mapped_column(Float, nullable=True)
    destination_lat: Mapped[float | None] = mapped_column(Float, nullable=True)
    destination_lng: Mapped[float | None] = mapped_column(Float, nullable=True)
    pickup_datetime: Mapped[datetime | None] = mapped_column(nullable=True)
    drop_datetime: Mapped[datetime | None] = mapped_column(nullable=True)
    maps_link: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(String, default="pending")
    created_at: Mapped[datetime] = mapped_column(default=lambda: datetime.now(UTC))

    __table_args__ = (Index("idx_booking_status", "status"),)


class RouteCache(Base):
    __tablename__ = "route_cache"

    cache_key: Mapped[str] = mapped_column(String, primary_key=True)
    origin_key: Mapped[str] = mapped_column(String, nullable=False)
    dest_key: Mapped[str] = mapped_column(String, nullable=False)
    distance_km: Mapped[float] = mapped_column(Float, nullable=False)
    duration_min: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(nullable=False)


class AppMetadata(Base):
    __tablename__ = "app_metadata"

    key: Mapped[str] = mapped_column(String, primary_key=True)
    value: Mapped[str] = mapped_column(String, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
    )
