"""Cell styling translation: fills, fonts, and alignment to presentation styles."""

import math
from enum import IntEnum
from typing import Dict, Optional, Tuple

from openpyxl.cell import Cell
from openpyxl.styles.colors import COLOR_INDEX

from app.verticals.investor_reports.models import CellStyle

RGB = Tuple[int, int, int]


class ThemeColor(IntEnum):
    """Theme color slots as stored in cell color metadata."""
    LIGHT_1 = 0
    DARK_1 = 1
    LIGHT_2 = 2
    DARK_2 = 3
    ACCENT_1 = 4
    ACCENT_2 = 5
    ACCENT_3 = 6
    ACCENT_4 = 7
    ACCENT_5 = 8
    ACCENT_6 = 9


# Approximation of the Office 2013-2022 default theme
THEME_PALETTE: Dict[ThemeColor, RGB] = {
    ThemeColor.LIGHT_1: (255, 255, 255),
    ThemeColor.DARK_1: (0, 0, 0),
    ThemeColor.LIGHT_2: (231, 230, 230),
    ThemeColor.DARK_2: (68, 84, 106),
    ThemeColor.ACCENT_1: (68, 114, 196),
    ThemeColor.ACCENT_2: (237, 125, 49),
    ThemeColor.ACCENT_3: (165, 165, 165),
    ThemeColor.ACCENT_4: (255, 192, 0),
    ThemeColor.ACCENT_5: (91, 155, 213),
    ThemeColor.ACCENT_6: (112, 173, 71),
}

# Indexes 64/65 are "system foreground/background", not real colors
_SYSTEM_COLOR_INDEXES = {64, 65}

BASE_CELL_CSS = (
    "border: 1px solid #444; padding: 4px; font-size: 10pt; "
    "font-family: Arial, sans-serif; text-align: center; vertical-align: middle;"
)


def apply_tint(rgb: RGB, tint: Optional[float]) -> RGB:
    """
    Lighten or darken an RGB triple by an Excel tint.

    Positive tints move each channel toward white, negative tints scale
    each channel toward black.
    """
    if not tint:
        return rgb
    if tint > 0:
        adjusted = [c + (255 - c) * tint for c in rgb]
    else:
        adjusted = [c * (1 + tint) for c in rgb]
    # Round half up, clamp to a valid channel
    return tuple(min(255, max(0, int(math.floor(c + 0.5)))) for c in adjusted)


def theme_color_hex(theme: int, tint: Optional[float] = None) -> str:
    """Resolve a theme slot plus tint to a '#rrggbb' string (unknown slots are white)."""
    try:
        base = THEME_PALETTE[ThemeColor(theme)]
    except ValueError:
        base = THEME_PALETTE[ThemeColor.LIGHT_1]
    return _to_hex(apply_tint(base, tint))


def _to_hex(rgb: RGB) -> str:
    return "#" + "".join(f"{c:02x}" for c in rgb)


def _argb_to_hex(argb: str) -> Optional[str]:
    value = str(argb).strip()
    if len(value) == 8:
        value = value[2:]
    if len(value) != 6:
        return None
    try:
        int(value, 16)
    except ValueError:
        return None
    return f"#{value}"


class StyleInspector:
    """Translate openpyxl cell styling into CellStyle values."""

    def resolve_color(self, color) -> Optional[str]:
        """
        Resolve an openpyxl Color to '#rrggbb'.

        Handles explicit ARGB, theme slot + tint, and the legacy indexed
        palette. Returns None when the color carries no usable value.
        """
        if color is None:
            return None

        # Accessing .rgb on a theme/indexed color returns a descriptor error string,
        # so dispatch on the color type first
        color_type = getattr(color, "type", None)

        if color_type == "rgb":
            rgb = getattr(color, "rgb", None)
            return _argb_to_hex(rgb) if isinstance(rgb, str) else None

        if color_type == "theme":
            theme = getattr(color, "theme", None)
            if theme is None:
                return None
            return theme_color_hex(theme, getattr(color, "tint", 0.0))

        if color_type == "indexed":
            indexed = getattr(color, "indexed", None)
            if indexed is None or indexed in _SYSTEM_COLOR_INDEXES or indexed >= len(COLOR_INDEX):
                return None
            return _argb_to_hex(COLOR_INDEX[indexed])

        return None

    def _get_fill_color(self, cell: Cell) -> Optional[str]:
        """Background color of a pattern fill (None for no fill)."""
        fill = getattr(cell, "fill", None)
        if not fill:
            return None

        pattern_type = getattr(fill, "fill_type", None) or getattr(fill, "patternType", None)
        if not pattern_type or str(pattern_type).lower() == "none":
            return None

        return self.resolve_color(getattr(fill, "fgColor", None))

    def _get_font_color(self, cell: Cell) -> Optional[str]:
        font = getattr(cell, "font", None)
        if not font:
            return None
        return self.resolve_color(getattr(font, "color", None))

    def _is_bold(self, cell: Cell) -> bool:
        font = getattr(cell, "font", None)
        if not font:
            return False
        return bool(getattr(font, "bold", False))

    def _get_alignment(self, cell: Cell) -> Optional[str]:
        """Horizontal alignment; "centered across selection" becomes plain center."""
        alignment = getattr(cell, "alignment", None)
        if not alignment:
            return None
        horizontal = getattr(alignment, "horizontal", None)
        if not horizontal:
            return None
        if horizontal == "centerContinuous":
            return "center"
        return horizontal

    def cell_style(self, cell: Cell) -> CellStyle:
        """Compute the presentation style of one cell."""
        return CellStyle(
            background=self._get_fill_color(cell),
            color=self._get_font_color(cell),
            bold=self._is_bold(cell),
            text_align=self._get_alignment(cell),
        )

    @staticmethod
    def to_css(style: CellStyle) -> str:
        """Inline CSS for a rendered table cell."""
        css = BASE_CELL_CSS
        if style.background:
            css += f" background-color: {style.background};"
        if style.bold:
            css += " font-weight: bold;"
        if style.color:
            css += f" color: {style.color};"
        if style.text_align:
            css += f" text-align: {style.text_align};"
        return css
