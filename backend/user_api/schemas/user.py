"""User Schemas: request/response models for the users endpoints.

Invariants:
    - UserPayload accepts absent fields so the route can answer with the
      domain 400 ("Name and email are required") instead of a schema error
    - Non-string name/email is a schema error (400 via RequestValidationError)
    - require_user_fields rejects None and "" for either field
    - AddUserResponse serializes user_id as `userId`
    - A path id that is not an integer names no user: 404, not a schema error

Design Decisions:
    - Whitespace-only values are accepted: only emptiness is checked
"""

from pydantic import BaseModel, ConfigDict, Field

from user_api.core.domain_types import UserId
from user_api.core.errors import MissingFieldError, ResourceNotFoundError

MISSING_FIELDS_MESSAGE = "Name and email are required"


class UserPayload(BaseModel):
    """Body of POST /add-user and PUT /update-user/{id}."""
    name: str | None = None
    email: str | None = None


def require_user_fields(body: UserPayload | None) -> UserPayload:
    """Return body if name and email are both non-empty, else raise 400."""
    if body is None:
        raise MissingFieldError(MISSING_FIELDS_MESSAGE, ["name", "email"])
    missing = [f for f in ("name", "email") if not getattr(body, f)]
    if missing:
        raise MissingFieldError(MISSING_FIELDS_MESSAGE, missing)
    return body


def parse_user_id(raw: str) -> UserId:
    """Path id as a UserId. Anything non-integer matches no row."""
    try:
        return UserId(int(raw))
    except ValueError:
        raise ResourceNotFoundError("User", raw) from None


class UserResponse(BaseModel):
    """One row of the users table."""
    id: int
    name: str
    email: str


class MessageResponse(BaseModel):
    message: str


class AddUserResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    user_id: int = Field(alias="userId")


class HealthResponse(BaseModel):
    status: str


class ReadinessResponse(BaseModel):
    status: str
    database: str
