# Pydantic models for rows crossing the data-access boundary and for caller-supplied input.
# Keep models minimal and serializable; query construction lives in filters/queries.
from pydantic import BaseModel, Field, ConfigDict, field_validator, EmailStr
from typing import Optional
from datetime import date


# Users
# Request payload for creating a user; password is stored as given (hashing happens upstream)
class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=1)

    # Normalize email input to lowercase without surrounding whitespace
    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        if isinstance(v, str):
            v = v.strip().lower()
        return v


# A users row as returned by the database
class User(BaseModel):
    id: int
    name: str
    email: str
    password: str

    model_config = ConfigDict(from_attributes=True)


# Properties
# Fields shared by listing input and stored rows; no input bounds here
class PropertyBase(BaseModel):
    owner_id: int
    title: str
    description: Optional[str] = None
    thumbnail_photo_url: Optional[str] = None
    cover_photo_url: Optional[str] = None
    cost_per_night: int
    parking_spaces: int = 0
    number_of_bathrooms: int = 0
    number_of_bedrooms: int = 0
    country: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    post_code: Optional[str] = None


# Payload for creating a listing; cost_per_night is in cents
class PropertyCreate(PropertyBase):
    owner_id: int = Field(..., ge=1)
    title: str = Field(..., min_length=1, max_length=255)
    cost_per_night: int = Field(..., gt=0)
    parking_spaces: int = Field(0, ge=0)
    number_of_bathrooms: int = Field(0, ge=0)
    number_of_bedrooms: int = Field(0, ge=0)

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: str) -> str:
        # Trim surrounding whitespace before validation
        if isinstance(v, str):
            v = v.strip()
        return v


# A properties row as returned by the database.
# Rows are taken as stored, so input bounds don't apply.
class Property(PropertyBase):
    id: int
    active: bool = True

    model_config = ConfigDict(from_attributes=True)


# Listing row with the averaged review score attached
class PropertyWithRating(Property):
    average_rating: Optional[float] = None


# Filter options for property listings.
# None means "not filtering on this"; zero is a real bound.
class PropertyFilters(BaseModel):
    city: Optional[str] = None
    owner_id: Optional[int] = Field(None, ge=1)
    minimum_price_per_night: Optional[int] = Field(None, ge=0)
    maximum_price_per_night: Optional[int] = Field(None, ge=0)
    minimum_rating: Optional[float] = Field(None, ge=0, le=5)

    # A blank city means no city filter
    @field_validator("city", mode="before")
    @classmethod
    def blank_city_is_absent(cls, v):
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
        return v

    # Search forms send unfilled numeric fields as empty strings
    @field_validator("owner_id", "minimum_price_per_night", "maximum_price_per_night", "minimum_rating", mode="before")
    @classmethod
    def blank_number_is_absent(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


# Reservations
# One past stay for a guest, summarized with the property's average rating
class ReservationSummary(BaseModel):
    id: int
    property_id: int
    title: str
    cost_per_night: int
    start_date: date
    end_date: date
    average_rating: Optional[float] = None
