"""
Codeloom Backend - Theme Color Tokens
======================================

What:  The design-token color palette shared by the UI components and the
       frontend Tailwind build.
Who:   Read by `color()` lookups and served as JSON by
       GET /api/system/theme for the build step.

Token syntax:
    "brand.teal"      → a named shade
    "primary.500"     → a numeric shade
    "primary"         → the palette's DEFAULT shade
"""

import copy
from typing import Any, Dict

COLORS: Dict[str, Dict[str, str]] = {
    "brand": {
        "ink": "#020617",
        "teal": "#0F766E",
        "tealSoft": "#CCF3EC",
    },
    "semantic": {
        "border": "#E2E8F0",
        "muted": "#64748B",
        "warning": "#EA580C",
        "success": "#16A34A",
    },
    "primary": {
        "50": "#eef2ff",
        "100": "#e0e7ff",
        "200": "#c7d2fe",
        "300": "#a5b4fc",
        "400": "#818cf8",
        "500": "#6366f1",
        "600": "#4f46e5",
        "700": "#4338ca",
        "800": "#3730a3",
        "900": "#312e81",
        "DEFAULT": "#1f2a44",
    },
    "accent": {
        "50": "#ecfeff",
        "100": "#cffafe",
        "200": "#a5f3fc",
        "300": "#67e8f9",
        "400": "#22d3ee",
        "500": "#06b6d4",
        "600": "#0891b2",
        "700": "#0e7490",
        "800": "#155e75",
        "900": "#164e63",
        "DEFAULT": "#0f9ebf",
    },
}

# Files the Tailwind build scans for class names
CONTENT_GLOBS = ["./index.html", "./src/**/*.{ts,tsx,jsx,js}"]


def color(token: str) -> str:
    """
    Resolve a color token to its hex value.

    Raises:
        KeyError: Unknown palette or shade, or a palette without DEFAULT
                  looked up by name alone.
    """
    palette_name, _, shade = token.partition(".")
    palette = COLORS[palette_name]
    return palette[shade or "DEFAULT"]


def tailwind_config() -> Dict[str, Any]:
    """Returns the Tailwind config structure; callers get their own copy."""
    return {
        "content": list(CONTENT_GLOBS),
        "theme": {"extend": {"colors": copy.deepcopy(COLORS)}},
        "plugins": [],
    }
