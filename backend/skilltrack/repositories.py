"""Repository classes encapsulating database operations.

Each repository is small and focused on a single aggregate (users,
services). Repositories return SQLModel objects and perform
commits/refreshes where appropriate.
"""

from typing import List, Optional
from sqlmodel import Session, select
from . import models


class UserRepository:
    """CRUD operations for `User` objects."""
    def __init__(self, session: Session):
        self.session = session

    def create(self, user: models.User) -> models.User:
        """Persist a new user and return the managed instance."""
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def get_by_username(self, username: str) -> Optional[models.User]:
        """Return a `User` by username or `None` if not found."""
        stmt = select(models.User).where(models.User.username == username)
        return self.session.exec(stmt).first()

    def get(self, user_id: int) -> Optional[models.User]:
        """Get a `User` by primary key."""
        return self.session.get(models.User, user_id)


class ServiceRepository:
    """CRUD operations for rows of the `services` table."""
    def __init__(self, session: Session):
        self.session = session

    def list_all(self) -> List[models.ServiceRow]:
        """Return every service, inactive ones included, in display order."""
        stmt = select(models.ServiceRow).order_by(models.ServiceRow.sort_order)
        return self.session.exec(stmt).all()

    def get(self, service_id: str) -> Optional[models.ServiceRow]:
        """Fetch a service by primary key."""
        return self.session.get(models.ServiceRow, service_id)

    def get_by_slug(self, slug: str) -> Optional[models.ServiceRow]:
        """Return the service routed at `slug` or `None`."""
        stmt = select(models.ServiceRow).where(models.ServiceRow.slug == slug)
        return self.session.exec(stmt).first()

    def save(self, row: models.ServiceRow) -> models.ServiceRow:
        """Insert or update `row` and return the refreshed instance."""
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        return row

    def delete(self, row: models.ServiceRow) -> None:
        self.session.delete(row)
        self.session.commit()
