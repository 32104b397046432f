"""Domain entity — colour and font theme derived from the business type."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ThemeColors:
    primary: str
    secondary: str
    accent: str
    background: str
    text: str


@dataclass(frozen=True)
class ThemeFonts:
    heading: str
    body: str


@dataclass(frozen=True)
class Theme:
    """Presentational theme of a generated website.

    Derived once at generation time; no editing operation changes it.
    """

    colors: ThemeColors
    fonts: ThemeFonts = field(default_factory=lambda: ThemeFonts(heading="Inter", body="Inter"))

    def to_dict(self) -> dict[str, Any]:
        return {
            "colors": {
                "primary": self.colors.primary,
                "secondary": self.colors.secondary,
                "accent": self.colors.accent,
                "background": self.colors.background,
                "text": self.colors.text,
            },
            "fonts": {"heading": self.fonts.heading, "body": self.fonts.body},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Theme":
        colors = data["colors"]
        fonts = data.get("fonts") or {}
        return cls(
            colors=ThemeColors(
                primary=colors["primary"],
                secondary=colors["secondary"],
                accent=colors["accent"],
                background=colors["background"],
                text=colors["text"],
            ),
            fonts=ThemeFonts(
                heading=fonts.get("heading", "Inter"),
                body=fonts.get("body", "Inter"),
            ),
        )


DEFAULT_THEME = Theme(
    colors=ThemeColors(
        primary="#3b82f6",
        secondary="#64748b",
        accent="#f59e0b",
        background="#ffffff",
        text="#1f2937",
    ),
)

# Business-category substring → theme. First match in table order wins.
_THEMES_BY_CATEGORY: tuple[tuple[str, Theme], ...] = (
    ("restaurant", Theme(
        colors=ThemeColors("#b91c1c", "#78350f", "#f59e0b", "#fffbeb", "#292524"),
        fonts=ThemeFonts("Playfair Display", "Lato"),
    )),
    ("cafe", Theme(
        colors=ThemeColors("#92400e", "#a16207", "#f97316", "#fff7ed", "#292524"),
        fonts=ThemeFonts("Playfair Display", "Lato"),
    )),
    ("bakery", Theme(
        colors=ThemeColors("#c2410c", "#a16207", "#facc15", "#fffbeb", "#292524"),
        fonts=ThemeFonts("Playfair Display", "Lato"),
    )),
    ("dental", Theme(
        colors=ThemeColors("#0891b2", "#0f766e", "#22d3ee", "#f0fdfa", "#134e4a"),
        fonts=ThemeFonts("Poppins", "Inter"),
    )),
    ("medical", Theme(
        colors=ThemeColors("#0284c7", "#0f766e", "#34d399", "#f0f9ff", "#0c4a6e"),
        fonts=ThemeFonts("Poppins", "Inter"),
    )),
    ("law", Theme(
        colors=ThemeColors("#1e3a8a", "#334155", "#b45309", "#f8fafc", "#0f172a"),
        fonts=ThemeFonts("Merriweather", "Source Sans Pro"),
    )),
    ("fitness", Theme(
        colors=ThemeColors("#dc2626", "#111827", "#facc15", "#ffffff", "#111827"),
        fonts=ThemeFonts("Montserrat", "Inter"),
    )),
    ("gym", Theme(
        colors=ThemeColors("#dc2626", "#111827", "#facc15", "#ffffff", "#111827"),
        fonts=ThemeFonts("Montserrat", "Inter"),
    )),
    ("salon", Theme(
        colors=ThemeColors("#db2777", "#9d174d", "#f9a8d4", "#fdf2f8", "#500724"),
        fonts=ThemeFonts("Playfair Display", "Lato"),
    )),
    ("spa", Theme(
        colors=ThemeColors("#0d9488", "#65a30d", "#a7f3d0", "#f0fdf4", "#14532d"),
        fonts=ThemeFonts("Cormorant Garamond", "Lato"),
    )),
    ("tech", Theme(
        colors=ThemeColors("#6366f1", "#0f172a", "#06b6d4", "#ffffff", "#0f172a"),
        fonts=ThemeFonts("Space Grotesk", "Inter"),
    )),
    ("software", Theme(
        colors=ThemeColors("#6366f1", "#0f172a", "#06b6d4", "#ffffff", "#0f172a"),
        fonts=ThemeFonts("Space Grotesk", "Inter"),
    )),
    ("construction", Theme(
        colors=ThemeColors("#ea580c", "#1f2937", "#facc15", "#ffffff", "#1f2937"),
        fonts=ThemeFonts("Oswald", "Roboto"),
    )),
    ("real estate", Theme(
        colors=ThemeColors("#047857", "#1e293b", "#d4a017", "#ffffff", "#1e293b"),
        fonts=ThemeFonts("Playfair Display", "Inter"),
    )),
    ("photography", Theme(
        colors=ThemeColors("#111827", "#4b5563", "#f59e0b", "#ffffff", "#111827"),
        fonts=ThemeFonts("Raleway", "Inter"),
    )),
)


def theme_for_business_type(business_type: str | None) -> Theme:
    """Look up the theme for a business type by case-insensitive substring match."""
    normalized = (business_type or "").lower()
    for category, theme in _THEMES_BY_CATEGORY:
        if category in normalized:
            return theme
    return DEFAULT_THEME
