"""Database engine initialization, connection management and default seed data."""

import logging
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session, sessionmaker

from ..pricing.car_category import map_car_to_subtype
from .schema import AppMetadata, Base, CarOption, RateMeter

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0.0"

# (service_type, car_category, base_fare, per_km_rate, per_minute_rate, per_hour_rate)
DEFAULT_RATE_METERS: tuple[tuple[str, str, float, float, float, float], ...] = (
    ("local", "Sedan", 50.00, 0, 0, 200.00),
    ("local", "SUV", 60.00, 0, 0, 250.00),
    ("local", "Innova", 70.00, 0, 0, 300.00),
    ("local", "Innova Crysta", 80.00, 0, 0, 350.00),
    ("local", "Tempo", 90.00, 0, 0, 400.00),
    ("local", "Urbenia", 100.00, 0, 0, 450.00),
    ("local", "Minibus", 120.00, 0, 0, 500.00),
    ("airport", "Sedan", 80.00, 12.00, 1.20, 0),
    ("airport", "SUV", 100.00, 15.00, 1.50, 0),
    ("airport", "Innova", 120.00, 18.00, 1.80, 0),
    ("airport", "Innova Crysta", 140.00, 20.00, 2.00, 0),
    ("airport", "Tempo", 160.00, 22.00, 2.20, 0),
    ("airport", "Urbenia", 180.00, 25.00, 2.50, 0),
    ("airport", "Minibus", 200.00, 28.00, 2.80, 0),
    ("outstation", "Sedan", 100.00, 15.00, 1.50, 0),
    ("outstation", "SUV", 120.00, 18.00, 1.80, 0),
    ("outstation", "Innova", 150.00, 22.00, 2.20, 0),
    ("outstation", "Innova Crysta", 180.00, 25.00, 2.50, 0),
    ("outstation", "Tempo", 200.00, 28.00, 2.80, 0),
    ("outstation", "Urbenia", 220.00, 30.00, 3.00, 0),
    ("outstation", "Minibus", 250.00, 35.00, 3.50, 0),
)

# (name, description, sort_order)
DEFAULT_CAR_OPTIONS: tuple[tuple[str, str, int], ...] = (
    ("Etios", "Sedan – Etios (4 seats)", 1),
    ("Dzire", "Sedan – Dzire (4 seats)", 2),
    ("Honda City", "Sedan – Premiere (Honda City, 4 seats)", 3),
    ("Ciaz", "Sedan – Premiere (Ciaz, 4 seats)", 4),
    ("Ertiga", "SUV – Ertiga (6–7 seats)", 5),
    ("Marazzo", "SUV – Marazzo (6–7 seats)", 6),
    ("Rumion", "SUV – Rumion (6–7 seats)", 7),
    ("Innova", "Innova (7 seats)", 8),
    ("Crysta", "Innova Crysta (7 seats)", 9),
    ("Tempo Traveller 9+1", "Tempo Traveller (9+1 seater)", 10),
    ("Tempo Traveller 12+1", "Tempo Traveller (12-1 seater)", 11),
    ("Urbenia 9 seater", "Urbenia (9 seater)", 12),
    ("Urbenia 13 seater", "Urbenia (13 seater)", 13),
    ("Urbenia 15 seater", "Urbenia (15 seater)", 14),
    ("Urbenia 17 seater", "Urbenia (17 seater)", 15),
    ("Minibus 21 seater", "Minibus (21 seater)", 16),
    ("Minibus 24 seater", "Minibus (24 seater)", 17),
    ("Minibus 30 seater", "Minibus (30 seater)", 18),
)


def init_database(db_path: str, seed: bool = True) -> sessionmaker[Any]:
    """Initialize database and return session factory."""
    # Ensure parent directory exists
    db_dir = Path(db_path).parent
    db_dir.mkdir(parents=True, exist_ok=True)

    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)

    session_maker = sessionmaker(bind=engine)

    with session_maker() as session:
        schema_version = session.get(AppMetadata, "schema_version")
        if not schema_version:
            session.add(AppMetadata(key="schema_version", value=SCHEMA_VERSION))

        if seed:
            seed_rate_meters(session)
            seed_car_options(session)
        session.commit()

    return session_maker


def seed_rate_meters(session: Session) -> int:
    """Insert default rate meters that are missing; existing rows are left alone.

    Returns the number of rows inserted.
    """
    inserted = 0
    for service_type, category, base_fare, per_km, per_minute, per_hour in DEFAULT_RATE_METERS:
        stmt = select(RateMeter.id).where(
            RateMeter.service_type == service_type,
            RateMeter.car_category == category,
            RateMeter.trip_type.is_(None),
        )
        if session.execute(stmt).first() is not None:
            continue
        session.add(
            RateMeter(
                service_type=service_type,
                car_category=category,
                base_fare=base_fare,
                per_km_rate=per_km,
                per_minute_rate=per_minute,
                per_hour_rate=per_hour,
            )
        )
        inserted += 1

    if inserted:
        logger.info("Seeded %d default rate meters", inserted)
    return inserted


def seed_car_options(session: Session) -> int:
    """Insert predefined car options and keep their subtype mapping current."""
    inserted = 0
    for name, description, sort_order in DEFAULT_CAR_OPTIONS:
        subtype = map_car_to_subtype(name, description)
        existing = session.execute(select(CarOption).where(CarOption.name == name)).scalar()
        if existing is None:
            session.add(
                CarOption(
                    name=name,
                    description=description,
                    sort_order=sort_order,
                    car_subtype=subtype,
                )
            )
            inserted += 1
        elif subtype:
            existing.car_subtype = subtype

    if inserted:
        logger.info("Seeded %d default car options", inserted)
    return inserted
