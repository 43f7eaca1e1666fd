# app/utils/file_utils.py
from pathlib import Path
from datetime import datetime
from typing import Optional, Set
import random
import re

# Characters Windows and POSIX both refuse in a path component
_RESERVED_PATH_CHARS = re.compile(r'[<>:"/\\|?*]+')


def sanitize_path_component(name: str) -> str:
    """Replace reserved path characters with '_' (keeps Arabic and spaces).

    Leading/trailing dots are dropped so "." and ".." never survive;
    returns "" when nothing usable is left.
    """
    return _RESERVED_PATH_CHARS.sub("_", name or "").strip().strip(".").strip()


def unique_pdf_path(directory: Path, stem: str, reserved: Optional[Set[Path]] = None) -> Path:
    """Return directory/<stem>.pdf, or <stem>_1.pdf, <stem>_2.pdf, ... if taken.

    A path is taken when it exists on disk or is already in `reserved`.
    """
    reserved = reserved or set()
    candidate = directory / f"{stem}.pdf"
    counter = 1
    while candidate.exists() or candidate in reserved:
        candidate = directory / f"{stem}_{counter}.pdf"
        counter += 1
    return candidate


def make_request_id() -> str:
    """Short, human-readable id for one upload ("<epoch ms>_<random>")."""
    return f"{int(datetime.now().timestamp() * 1000)}_{random.randint(0, 9999)}"


def make_upload_path(upload_dir: Path, request_id: str, filename: str) -> Path:
    """Temporary path for an uploaded workbook, keeping its extension."""
    suffix = Path(filename or "").suffix.lower() or ".xlsx"
    return upload_dir / f"{request_id}{suffix}"
