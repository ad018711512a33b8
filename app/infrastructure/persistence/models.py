"""SQLAlchemy models for the vehicle inventory tables."""
from sqlalchemy import (
    CheckConstraint,
    Column,
    DECIMAL,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from app.domain.entities.vehicle import VehicleStatus
from app.infrastructure.persistence.db import Base


class Administrator(Base):
    __tablename__ = "administrators"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False)
    secret = Column(String(255), nullable=False)
    profile = Column(String(10), nullable=False)


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(150), nullable=False)
    make = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    plate = Column(String(8), nullable=False)
    status = Column(
        Enum(
            VehicleStatus,
            name="vehicle_status",
            values_callable=lambda statuses: [s.value for s in statuses],
        ),
        nullable=False,
        default=VehicleStatus.AVAILABLE,
    )
    color = Column(String(50), nullable=False)
    mileage = Column(DECIMAL(12, 2), nullable=False, default=0)
    price = Column(DECIMAL(12, 2), nullable=False)
    description = Column(String(500))

    photos = relationship(
        "VehiclePhoto",
        back_populates="vehicle",
        order_by="VehiclePhoto.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class VehiclePhoto(Base):
    __tablename__ = "vehicle_photos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_id = Column(
        Integer, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    url = Column(String(500), nullable=False)

    vehicle = relationship("Vehicle", back_populates="photos")


class VehicleRating(Base):
    """One administrator's rating of one vehicle.

    Related rows are fetched with explicit joins by the repository; there are
    no ORM relationships here, so deletes are left to the foreign keys.
    """
    __tablename__ = "vehicle_ratings"
    __table_args__ = (
        UniqueConstraint("vehicle_id", "administrator_id", name="uq_vehicle_ratings_vehicle_admin"),
        CheckConstraint("stars BETWEEN 1 AND 5", name="ck_vehicle_ratings_stars"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_id = Column(
        Integer, ForeignKey("vehicles.id", ondelete="CASCADE"), nullable=False, index=True
    )
    administrator_id = Column(
        Integer, ForeignKey("administrators.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    stars = Column(Integer, nullable=False)
    comment = Column(String(500))
    created_at = Column(DateTime, nullable=False, index=True)
