"""Business logic services used by HTTP controllers.

This module holds small service classes that coordinate repositories.
Services are intentionally thin: they perform validation, execute domain
logic and persist aggregates via repositories.
"""

from datetime import datetime, timedelta, timezone
from passlib.context import CryptContext
import jwt
from typing import List, Optional
from sqlmodel import Session
from . import models, repositories
from .config import settings
from .schemas import ServiceIn, ServiceUpdate

PWD_CTX = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class AuthService:
    """Authentication related operations (register + authenticate)."""
    def __init__(self, session: Session):
        self.session = session
        self.user_repo = repositories.UserRepository(session)

    def register(self, username: str, password: str, is_admin: Optional[bool] = None) -> models.User:
        """Create a new user with a hashed password.

        When `is_admin` is not given, admin rights are granted to names
        listed in `ADMIN_USERNAMES`. Returns the persisted `User` instance.
        """
        if not username.strip() or not password:
            raise ValueError("username and password are required")
        if is_admin is None:
            is_admin = username in settings.ADMIN_USERNAMES
        hashed = PWD_CTX.hash(password)
        u = models.User(username=username, password_hash=hashed, is_admin=is_admin)
        return self.user_repo.create(u)

    def authenticate(self, username: str, password: str):
        """Verify credentials and return a signed JWT token on success.

        Returns `None` if authentication fails.
        """
        user = self.user_repo.get_by_username(username)
        if not user:
            return None
        if not PWD_CTX.verify(password, user.password_hash):
            return None
        expire = datetime.now(timezone.utc) + timedelta(hours=settings.JWT_EXPIRE_HOURS)
        payload = {"user_id": user.id, "username": user.username, "exp": int(expire.timestamp())}
        return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


class ServiceAdminService:
    """Create, update and delete rows of the `services` table."""
    def __init__(self, session: Session):
        self.session = session
        self.repo = repositories.ServiceRepository(session)

    def list_all(self) -> List[models.ServiceRow]:
        return self.repo.list_all()

    def create(self, data: ServiceIn) -> models.ServiceRow:
        """Persist a new service; raises ValueError if the slug is taken."""
        if self.repo.get_by_slug(data.slug):
            raise ValueError(f"slug already in use: {data.slug}")
        row = models.ServiceRow(**data.model_dump())
        return self.repo.save(row)

    def update(self, service_id: str, data: ServiceUpdate) -> models.ServiceRow:
        """Apply the fields set on `data` to an existing service.

        Raises LookupError for an unknown id and ValueError when the new
        slug collides with another service.
        """
        row = self.repo.get(service_id)
        if not row:
            raise LookupError(f"service not found: {service_id}")
        changes = data.model_dump(exclude_unset=True)
        new_slug = changes.get("slug")
        if new_slug and new_slug != row.slug:
            other = self.repo.get_by_slug(new_slug)
            if other and other.id != row.id:
                raise ValueError(f"slug already in use: {new_slug}")
        for key, value in changes.items():
            if value is None and key != "image_url":
                continue
            setattr(row, key, value)
        row.updated_at = datetime.now(timezone.utc)
        return self.repo.save(row)

    def delete(self, service_id: str) -> None:
        row = self.repo.get(service_id)
        if not row:
            raise LookupError(f"service not found: {service_id}")
        self.repo.delete(row)
