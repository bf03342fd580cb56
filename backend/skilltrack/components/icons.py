"""Closed icon registry used by service cards.

Icon names stored in the `services` table are looked up here; anything not
in the registry renders as the default `Code` symbol.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class IconSymbol:
    name: str
    # inner SVG markup for a 24x24 stroke icon
    paths: str

    def svg(self, css_class: str = "icon") -> str:
        return (
            f'<svg class="{css_class}" data-icon="{self.name}" xmlns="http://www.w3.org/2000/svg" '
            'viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" '
            f'stroke-linecap="round" stroke-linejoin="round" aria-hidden="true">{self.paths}</svg>'
        )


DEFAULT_ICON = "Code"

ICONS: dict[str, IconSymbol] = {
    "Brain": IconSymbol(
        "Brain",
        '<path d="M12 5a3 3 0 1 0-5.997.125 4 4 0 0 0-2.526 5.77 4 4 0 0 0 .556 6.588A4 4 0 1 0 12 18Z"/>'
        '<path d="M12 5a3 3 0 1 1 5.997.125 4 4 0 0 1 2.526 5.77 4 4 0 0 1-.556 6.588A4 4 0 1 1 12 18Z"/>',
    ),
    "Code": IconSymbol(
        "Code",
        '<polyline points="16 18 22 12 16 6"/><polyline points="8 6 2 12 8 18"/>',
    ),
    "Cloud": IconSymbol(
        "Cloud",
        '<path d="M17.5 19H9a7 7 0 1 1 6.71-9h1.79a4.5 4.5 0 1 1 0 9Z"/>',
    ),
    "Smartphone": IconSymbol(
        "Smartphone",
        '<rect width="14" height="20" x="5" y="2" rx="2" ry="2"/><path d="M12 18h.01"/>',
    ),
    "Database": IconSymbol(
        "Database",
        '<ellipse cx="12" cy="5" rx="9" ry="3"/><path d="M3 5V19A9 3 0 0 0 21 19V5"/>'
        '<path d="M3 12A9 3 0 0 0 21 12"/>',
    ),
    "Shield": IconSymbol(
        "Shield",
        '<path d="M12 22s8-4 8-10V5l-8-3-8 3v7c0 6 8 10 8 10"/>',
    ),
}


def resolve_icon(name: str | None) -> IconSymbol:
    """Return the symbol registered under `name`, or the default symbol."""
    if not isinstance(name, str):
        return ICONS[DEFAULT_ICON]
    return ICONS.get(name, ICONS[DEFAULT_ICON])
