"""Per-investor concatenation of rendered table PDFs."""
import unicodedata
from pathlib import Path
from typing import Iterable, List, Optional

from PyPDF2 import PdfReader, PdfWriter

from app.utils.logging import logger


def collation_key(name: str) -> str:
    """Case- and accent-insensitive key approximating locale alphabetical order."""
    decomposed = unicodedata.normalize("NFKD", name.casefold())
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def merge_order(filenames: Iterable[str]) -> List[str]:
    """
    Order per-table documents for concatenation.

    Fewer hyphens first (detail documents), more hyphens last (summary
    documents); ties are broken alphabetically.

    >>> merge_order(["B.pdf", "A-x.pdf", "A.pdf"])
    ['A.pdf', 'B.pdf', 'A-x.pdf']
    """
    return sorted(filenames, key=lambda name: (name.count("-"), collation_key(name), name))


def merged_suffix(year: int) -> str:
    """Filename suffix identifying a merged per-investor document."""
    return f" {year}.pdf"


def merged_filename(investor_name: str, year: int) -> str:
    return f"{investor_name}{merged_suffix(year)}"


def collect_merge_inputs(investor_dir: Path, year: int) -> List[Path]:
    """PDFs in the investor directory, excluding prior merged output, in merge order."""
    suffix = merged_suffix(year)
    names = [
        path.name for path in investor_dir.iterdir()
        if path.is_file() and path.suffix.lower() == ".pdf" and not path.name.endswith(suffix)
    ]
    return [investor_dir / name for name in merge_order(names)]


def merge_investor_pdfs(
    investor_dir: Path,
    investor_name: str,
    year: int = 2025,
    delete_sources: bool = False,
) -> Optional[Path]:
    """
    Concatenate an investor's PDFs page by page into "<name> <year>.pdf".

    Args:
        investor_dir: Directory holding the investor's per-table PDFs
        investor_name: Investor name used for the merged file name
        year: Year stamped on the merged file name
        delete_sources: Remove the per-table PDFs after a successful merge

    Returns:
        Path of the merged document, or None when there was nothing to merge
    """
    investor_dir = Path(investor_dir)
    inputs = collect_merge_inputs(investor_dir, year)
    if not inputs:
        logger.warning(f"No PDFs to merge for '{investor_name}'", extra={"investor": investor_name})
        return None

    writer = PdfWriter()
    for path in inputs:
        reader = PdfReader(str(path))
        for page in reader.pages:
            writer.add_page(page)

    output_path = investor_dir / merged_filename(investor_name, year)
    with open(output_path, "wb") as f:
        writer.write(f)

    logger.info(
        f"📎 Merged {len(inputs)} PDF(s) into {output_path.name}",
        extra={"investor": investor_name},
    )

    if delete_sources:
        for path in inputs:
            path.unlink(missing_ok=True)

    return output_path
