# SQLAlchemy ORM models for the listing schema (users, properties, reservations, reviews).
# Used to create tables for local SQLite and tests; accessors talk to these tables with plain SQL.
from sqlalchemy import Boolean, CheckConstraint, Column, Date, ForeignKey, Index, Integer, String, Text, true

from .db import Base


class User(Base):
    """Guest or owner account. Passwords are stored exactly as handed in."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)


class Property(Base):
    """Rental listing owned by a user. cost_per_night is in cents."""
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    thumbnail_photo_url = Column(String(255), nullable=True)
    cover_photo_url = Column(String(255), nullable=True)
    cost_per_night = Column(Integer, nullable=False, default=0, server_default="0")
    parking_spaces = Column(Integer, nullable=False, default=0, server_default="0")
    number_of_bathrooms = Column(Integer, nullable=False, default=0, server_default="0")
    number_of_bedrooms = Column(Integer, nullable=False, default=0, server_default="0")
    country = Column(String(255), nullable=True)
    street = Column(String(255), nullable=True)
    city = Column(String(255), nullable=True, index=True)
    province = Column(String(255), nullable=True)
    post_code = Column(String(255), nullable=True)
    active = Column(Boolean, nullable=False, default=True, server_default=true())


class Reservation(Base):
    """A guest's stay at a property over [start_date, end_date)."""
    __tablename__ = "reservations"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    guest_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Past-reservation lookups filter by guest and order by start date
    __table_args__ = (
        Index("ix_reservations_guest_start", "guest_id", "start_date"),
    )


class PropertyReview(Base):
    """Guest rating of a property, tied to the reservation it reviews."""
    __tablename__ = "property_reviews"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    guest_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
    reservation_id = Column(Integer, ForeignKey("reservations.id", ondelete="CASCADE"), nullable=False, index=True)
    rating = Column(Integer, nullable=False, default=0, server_default="0")
    message = Column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint("rating >= 0 AND rating <= 5", name="ck_property_reviews_rating"),
    )
