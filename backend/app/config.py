# backend/app/config.py
from pydantic_settings import BaseSettings
from pathlib import Path
from pydantic import field_validator

class Settings(BaseSettings):
    """Application settings from environment variables"""

    # Paths
    log_dir: Path = Path("logs")
    output_dir: Path = Path("vps_extracted_files")  # One folder per investor
    upload_dir: Path = Path("uploads")  # Temporary uploaded workbooks
    header_image_path: Path = Path("header.png")
    footer_image_path: Path = Path("footer.jpg")

    # File Upload Limits
    max_file_size_mb: int = 50

    # ===== TABLE DISCOVERY (anchor keyword scan) =====
    anchor_keyword: str = "تقرير المستثمر"
    anchor_scan_rows: int = 100
    # Hits closer than this to a kept origin belong to the same table header
    dedup_row_distance: int = 2
    dedup_col_distance: int = 3
    default_table_width: int = 4

    # ===== TABLE BOUNDS =====
    min_rows_per_table: int = 15
    max_rows_per_table: int = 60
    empty_row_streak: int = 2

    # ===== FIELD EXTRACTION =====
    identifier_scan_rows: int = 15
    identifier_keywords: list[str] = ["لوحة", "اللوحة"]
    fallback_identifier_keyword: str = "نوع السيارة"
    max_name_length: int = 50

    # ===== VALUE FORMATTING =====
    # A zero rendered with one of these number formats shows as "-"
    accounting_dash_tokens: list[str] = ['"-"', " - ", "_-"]
    zero_epsilon: float = 1e-6

    # ===== MANIFEST (investor list sheet) =====
    manifest_sheet_name: str = "قائمة المستثمرين"
    manifest_name_header: str = "اسم المستثمر"
    manifest_count_header: str = "عدد السيارات"
    manifest_header_scan_rows: int = 20
    manifest_item_label: str = "سيارة"
    column_scan_cap: int = 500
    # Token-overlap sheet matching (tuned for real investor lists)
    token_match_min_shared: int = 2
    token_match_min_length: int = 3
    token_match_max_count_gap: int = 2

    # ===== MERGE =====
    report_year: int = 2025
    delete_merged_sources: bool = True

    # ===== LOCATOR =====
    default_locator: str = "anchor"  # "anchor" or "manifest"

    # Server
    port: int = 3172
    public_files_prefix: str = "/files"

    # CORS
    cors_origins: list[str] = ["*"]
    @field_validator("cors_origins", "identifier_keywords", "accounting_dash_tokens", mode="before")
    def parse_list(cls, v):
        if isinstance(v, str):
            import json
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                return [v]
        return v

    # Environment
    environment: str = "development"  # development, production

    class Config:
        # Point explicitly to backend/.env so scripts run from repo root still load variables
        env_file = Path(__file__).resolve().parent.parent / ".env"
        case_sensitive = False
        extra = "ignore"  # Allow future env vars without breaking startup

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Create directories if they don't exist
        for directory in [self.log_dir, self.output_dir, self.upload_dir]:
            directory.mkdir(parents=True, exist_ok=True)


# Global settings instance
settings = Settings()
