"""SQLModel data models.

`ServiceRow` mirrors the remote `services` table so the site can run
against a local database in development; `User` holds admin accounts.
"""

import uuid
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    """A registered user.

    Fields:
    - `username`: unique login name
    - `password_hash`: hashed password string (never store plaintext)
    - `is_admin`: grants access to the admin CRUD endpoints
    """
    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(index=True, nullable=False, unique=True)
    password_hash: str
    is_admin: bool = False
    created_at: datetime = Field(default_factory=_utcnow)


class ServiceRow(SQLModel, table=True):
    """A row of the `services` table.

    `icon` is a key into the closed icon registry; unknown keys are still
    stored and fall back to the default symbol at render time.
    """
    __tablename__ = "services"

    id: str = Field(default_factory=lambda: uuid.uuid4().hex, primary_key=True)
    slug: str = Field(index=True, unique=True, nullable=False)
    title: str
    description: str = ""
    icon: str = "Code"
    image_url: Optional[str] = None
    is_active: bool = Field(default=True, index=True)
    sort_order: int = Field(default=0, index=True)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
