"""Immutable records rendered by the site's cards."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class CatalogRecord:
    """A displayable unit of course, assessment or sandbox content.

    Only `identifier`, `title` and `description` are always present; the
    remaining attributes are display-only and optional.
    """
    identifier: str
    title: str
    description: str
    kind: Optional[str] = None
    difficulty: Optional[str] = None
    duration_minutes: Optional[int] = None
    question_count: Optional[int] = None
    percentage: Optional[int] = None
    attempts: Optional[int] = None
    topics: tuple[str, ...] = ()


@dataclass(frozen=True)
class FAQRecord:
    question: str
    answer: str


def _truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "t", "1", "yes")
    return value is True or value == 1


def row_is_active(row: Mapping[str, Any]) -> bool:
    """Read the activation flag, stored as `is_active` or `active`."""
    return _truthy(row["is_active"] if "is_active" in row else row.get("active", False))


def _sort_order(value: Any) -> int:
    # bools are ints in Python but never a valid position
    if isinstance(value, bool) or value is None:
        raise ValueError(f"invalid sort_order: {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"non-integral sort_order: {value!r}")
        return int(value)
    return int(value)


def _icon_name(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class ServiceRecord:
    """One row of the `services` table as the site sees it."""
    id: str
    slug: str
    title: str
    description: str
    icon: Optional[str]
    is_active: bool
    sort_order: int
    image_url: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "ServiceRecord":
        """Build a record from a table row.

        Accepts either `is_active` or `active` for the activation flag.
        Raises KeyError/ValueError/TypeError for rows missing an id or
        carrying a missing or non-integral sort order. An icon that is not
        a string is stored as `None`.
        """
        slug = row.get("slug") or str(row["id"])
        return cls(
            id=str(row["id"]),
            slug=str(slug),
            title=str(row.get("title") or ""),
            description=str(row.get("description") or ""),
            icon=_icon_name(row.get("icon")),
            is_active=row_is_active(row),
            sort_order=_sort_order(row.get("sort_order")),
            image_url=row.get("image_url"),
        )

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "slug": self.slug,
            "title": self.title,
            "description": self.description,
            "icon": self.icon,
            "image_url": self.image_url,
            "is_active": self.is_active,
            "sort_order": self.sort_order,
        }
