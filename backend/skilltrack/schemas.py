"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable and provide validation for
controller handlers and tests.
"""

from pydantic import BaseModel, Field
from typing import Optional

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class RegisterIn(BaseModel):
    """Payload for user registration/login endpoints."""
    username: str
    password: str


class TokenOut(BaseModel):
    """Authentication response containing an access token."""
    access_token: str


class ServiceIn(BaseModel):
    """Request body for creating a service row."""
    slug: str = Field(pattern=SLUG_PATTERN, max_length=120)
    title: str = Field(min_length=1, max_length=200)
    description: str = ""
    icon: str = "Code"
    image_url: Optional[str] = None
    is_active: bool = True
    sort_order: int = 0


class ServiceUpdate(BaseModel):
    """Partial update for a service row; omitted fields are left untouched."""
    slug: Optional[str] = Field(default=None, pattern=SLUG_PATTERN, max_length=120)
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    icon: Optional[str] = None
    image_url: Optional[str] = None
    is_active: Optional[bool] = None
    sort_order: Optional[int] = None


class ServiceOut(BaseModel):
    """Service row as returned by the admin and public JSON endpoints."""
    id: str
    slug: str
    title: str
    description: str
    icon: str
    image_url: Optional[str] = None
    is_active: bool
    sort_order: int
