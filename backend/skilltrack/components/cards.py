"""Leaf cards: render-only mappings from one record to one visual block.

A card never holds state. Templates read its properties; `activate()` is
what the card's action control triggers and simply hands the record's
identifier to the `on_start` callback, if one was supplied.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from .icons import IconSymbol, resolve_icon
from .records import CatalogRecord, FAQRecord, ServiceRecord

OnStart = Callable[[str], None]

NEUTRAL_BADGE = "badge-gray"

KIND_BADGES = {
    "quiz": "badge-blue",
    "assignment": "badge-purple",
    "final_exam": "badge-orange",
}

DIFFICULTY_BADGES = {
    "Beginner": "badge-green",
    "Intermediate": "badge-yellow",
    "Advanced": "badge-red",
}


@dataclass(frozen=True)
class Badge:
    label: str
    css: str


@dataclass(frozen=True)
class Stat:
    name: str
    text: str


@dataclass(frozen=True)
class Meter:
    label: str
    percent: int


@dataclass(frozen=True)
class Action:
    label: str
    href: str
    method: str = "get"


def kind_badge(kind: str) -> Badge:
    return Badge(kind.replace("_", " ").upper(), KIND_BADGES.get(kind, NEUTRAL_BADGE))


def difficulty_badge(difficulty: str) -> Badge:
    return Badge(difficulty, DIFFICULTY_BADGES.get(difficulty, NEUTRAL_BADGE))


def clamp_percent(value: Optional[float]) -> int:
    if value is None:
        return 0
    return max(0, min(100, int(round(value))))


class LeafCard:
    """Base card. Subclasses describe the record; this class owns activation."""

    template = "card"

    def __init__(self, record, on_start: Optional[OnStart] = None):
        self.record = record
        self.on_start = on_start

    @property
    def identifier(self) -> str:
        return self.record.identifier

    @property
    def title(self) -> str:
        return self.record.title

    @property
    def description(self) -> str:
        return self.record.description

    @property
    def badges(self) -> list[Badge]:
        return []

    @property
    def stats(self) -> list[Stat]:
        return []

    @property
    def meter(self) -> Optional[Meter]:
        return None

    @property
    def action(self) -> Optional[Action]:
        return None

    def activate(self) -> None:
        """Invoke `on_start` once with this card's identifier; inert without one."""
        if self.on_start is None or self.action is None:
            return
        self.on_start(self.identifier)


class AssessmentCard(LeafCard):
    template = "assessment_card"
    record: CatalogRecord

    @property
    def badges(self) -> list[Badge]:
        out = []
        if self.record.kind:
            out.append(kind_badge(self.record.kind))
        if self.record.difficulty:
            out.append(difficulty_badge(self.record.difficulty))
        return out

    @property
    def stats(self) -> list[Stat]:
        out = []
        if self.record.duration_minutes is not None:
            out.append(Stat("duration", f"{self.record.duration_minutes} minutes"))
        if self.record.question_count is not None:
            out.append(Stat("questions", f"{self.record.question_count} questions"))
        if self.record.attempts is not None:
            out.append(Stat("attempts", f"{self.record.attempts:,} attempts completed"))
        return out

    @property
    def meter(self) -> Optional[Meter]:
        if self.record.percentage is None:
            return None
        return Meter("Pass Rate", clamp_percent(self.record.percentage))

    @property
    def topics(self) -> tuple[str, ...]:
        return self.record.topics

    @property
    def action(self) -> Action:
        return Action("Start Assessment", f"/assessments/{self.identifier}/start", method="post")


class ServiceCard(LeafCard):
    template = "service_card"
    record: ServiceRecord

    @property
    def identifier(self) -> str:
        return self.record.id

    @property
    def icon(self) -> IconSymbol:
        return resolve_icon(self.record.icon)

    @property
    def href(self) -> str:
        return f"/services/{self.record.slug}"

    @property
    def action(self) -> Action:
        return Action("View Courses", self.href)


class PlaygroundCard(LeafCard):
    template = "playground_card"
    record: CatalogRecord

    def __init__(self, record: CatalogRecord, on_start: Optional[OnStart] = None, position: Optional[int] = None):
        super().__init__(record, on_start)
        self.position = position

    @property
    def marker(self) -> str:
        if self.position is not None:
            return str(self.position)
        return self.title[:1]

    @property
    def action(self) -> Action:
        label = " ".join(f"Start {self.title.replace('Sandbox', '')}".split())
        return Action(label, f"/cloud-sandbox/{self.identifier}")


class FAQItem(LeafCard):
    template = "faq_item"
    record: FAQRecord

    @property
    def identifier(self) -> str:
        return self.record.question

    @property
    def title(self) -> str:
        return self.record.question

    @property
    def description(self) -> str:
        return self.record.answer


class BenefitBlock(LeafCard):
    template = "benefit_block"
