"""Header/footer image payloads embedded in every rendered report."""
import base64
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from app.utils.logging import logger


@dataclass(frozen=True)
class ReportAssets:
    """Base64 header (PNG) and footer (JPEG) images; empty when absent."""
    header_base64: str = ""
    footer_base64: str = ""

    @property
    def has_header(self) -> bool:
        return bool(self.header_base64)

    @property
    def has_footer(self) -> bool:
        return bool(self.footer_base64)


def _read_base64(path: Optional[Path], label: str) -> str:
    if not path:
        return ""
    path = Path(path)
    if not path.is_file():
        logger.warning(f"{label} image not found at {path}; rendering without it")
        return ""
    return base64.b64encode(path.read_bytes()).decode("ascii")


def load_report_assets(header_path: Optional[Path], footer_path: Optional[Path]) -> ReportAssets:
    """Load both images once; missing files yield empty payloads, not errors."""
    return ReportAssets(
        header_base64=_read_base64(header_path, "Header"),
        footer_base64=_read_base64(footer_path, "Footer"),
    )
