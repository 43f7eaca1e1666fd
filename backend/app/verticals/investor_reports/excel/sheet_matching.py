"""Fuzzy matching of manifest investor names to worksheet names."""

import re
import unicodedata
from typing import Iterable, Optional

from openpyxl.worksheet.worksheet import Worksheet

from app.verticals.investor_reports.layout_config import LayoutConfig

_WHITESPACE = re.compile(r"\s+")

# Arabic letter variants folded to one canonical form
_LETTER_FOLDS = str.maketrans({
    "أ": "ا",
    "إ": "ا",
    "آ": "ا",
    "ى": "ي",
    "ة": "ه",
    "ؤ": "و",
    "ئ": "ي",
})


def collapse_whitespace(text: Optional[str]) -> str:
    return _WHITESPACE.sub(" ", str(text or "")).strip()


def normalize_key(text: Optional[str]) -> str:
    """
    Fold a name into a comparison key.

    Unifies alef variants, ya/alef maksura, ta marbuta/ha and hamza
    carriers, drops harakat and any character that is not a letter, digit
    or whitespace, and collapses whitespace.
    """
    key = unicodedata.normalize("NFKC", collapse_whitespace(text))
    key = key.translate(_LETTER_FOLDS)
    kept = []
    for char in key:
        if "\u064b" <= char <= "\u065f":
            continue
        category = unicodedata.category(char)
        if category[0] in ("L", "N") or char.isspace():
            kept.append(char)
    return collapse_whitespace("".join(kept))


class SheetMatcher:
    """Locate the worksheet belonging to a manifest investor."""

    def __init__(self, config: LayoutConfig = None):
        self._config = config or LayoutConfig()

    def _tokens_overlap(self, target_key: str, sheet_key: str) -> bool:
        target_words = target_key.split(" ")
        sheet_words = sheet_key.split(" ")
        matches = sum(
            1 for word in target_words
            if len(word) >= self._config.token_match_min_length and word in sheet_words
        )
        return (
            matches >= self._config.token_match_min_shared
            and abs(len(target_words) - len(sheet_words)) <= self._config.token_match_max_count_gap
        )

    def find_sheet(self, worksheets: Iterable[Worksheet], investor_name: str) -> Optional[Worksheet]:
        """
        Find an investor's sheet, trying stricter rules first.

        Order: exact name, exact normalized key, normalized substring in
        either direction, then shared-token overlap. The manifest sheet is
        never a fuzzy candidate.

        Args:
            worksheets: Candidate worksheets in workbook order
            investor_name: Name as written in the manifest

        Returns:
            Matching worksheet, or None
        """
        sheets = list(worksheets)

        target = collapse_whitespace(investor_name)
        for sheet in sheets:
            if collapse_whitespace(sheet.title) == target:
                return sheet

        target_key = normalize_key(investor_name)
        if not target_key:
            return None

        for sheet in sheets:
            if normalize_key(sheet.title) == target_key:
                return sheet

        candidates = [
            (sheet, normalize_key(sheet.title))
            for sheet in sheets
            if sheet.title != self._config.manifest_sheet_name
        ]
        candidates = [(sheet, key) for sheet, key in candidates if key]

        for sheet, sheet_key in candidates:
            if target_key in sheet_key or sheet_key in target_key:
                return sheet

        for sheet, sheet_key in candidates:
            if self._tokens_overlap(target_key, sheet_key):
                return sheet

        return None
