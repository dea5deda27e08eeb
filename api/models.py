"""
API request and response models for Furnishare REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py and
catalog/models.py, which own the internal domain representation. Route
handlers map between the two.

Request models default every field to "" so a missing field and an empty one
reach the route the same way; the route owns the "required" messages.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from auth.models import User
from catalog.models import Furniture

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class SignupRequest(BaseModel):
    """Request body for POST /api/auth/signup."""

    name: str = ""
    email: str = ""
    password: str = ""


class LoginRequest(BaseModel):
    """Request body for POST /api/auth/login."""

    email: str = ""
    password: str = ""


class TemporaryUserRequest(BaseModel):
    """Request body for POST /api/auth/temporary."""

    name: str = ""


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class UserSummary(BaseModel):
    """Identity returned alongside a freshly issued token."""

    model_config = ConfigDict(frozen=True)

    id: int
    email: str
    name: str

    @classmethod
    def from_user(cls, user: User) -> "UserSummary":
        return cls(id=user.id, email=user.email, name=user.name)


class AuthResponse(BaseModel):
    """Response for signup, login, and temporary-account creation."""

    model_config = ConfigDict(frozen=True)

    message: str
    token: str
    user: UserSummary


class ProfileUser(BaseModel):
    """Profile view of a user. Serialized with camelCase createdAt."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    email: str
    name: str
    created_at: str = Field(serialization_alias="createdAt")

    @classmethod
    def from_user(cls, user: User) -> "ProfileUser":
        return cls(id=user.id, email=user.email, name=user.name, created_at=user.created_at or "")


class ProfileResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    user: ProfileUser


class FurnitureItem(BaseModel):
    """One catalog row. latitude/longitude are dropped from the JSON when unknown."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    title: str
    url: str
    tags: list[str]
    seller: str
    location: str
    offer_type: str = Field(serialization_alias="offerType")
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @classmethod
    def from_furniture(cls, item: Furniture) -> "FurnitureItem":
        return cls(
            id=item.id,
            title=item.title,
            url=item.url,
            tags=item.tags,
            seller=item.seller,
            location=item.location,
            offer_type=item.offer_type,
            latitude=item.latitude,
            longitude=item.longitude,
        )


class FurnitureListResponse(BaseModel):
    """Response for GET /api/furniture."""

    model_config = ConfigDict(frozen=True)

    furniture: list[FurnitureItem]
    total: int


class ErrorResponse(BaseModel):
    """Envelope returned on every 4xx/5xx response."""

    model_config = ConfigDict(frozen=True)

    error: str


class HealthResponse(BaseModel):
    """Response for GET /api/health."""

    model_config = ConfigDict(frozen=True)

    status: str
    version: str
    components: dict[str, str]
