"""ProTech configuration — site, service-area and audit settings."""

from pydantic import model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Site
    site_base_url: str = "https://protech-ohio.com"
    sitemap_url: str = "https://protech-ohio.com/sitemap.xml"

    # Service area
    served_state_code: str = "OH"
    fallback_location_slug: str = "northeast-ohio"
    fallback_location_name: str = "Northeast Ohio"
    default_location_id: str = "cleveland-oh"

    @model_validator(mode="after")
    def _normalize_area(self) -> "Settings":
        """State codes compare upper-case, slugs compare lower-case."""
        self.served_state_code = self.served_state_code.strip().upper()
        self.fallback_location_slug = self.fallback_location_slug.strip().lower()
        self.default_location_id = self.default_location_id.strip().lower()
        return self

    # Uniqueness audit
    audit_output_dir: str = "reports"
    audit_output_file: str = "uniqueness-report.json"
    audit_detailed_output_file: str = "uniqueness-detailed.json"
    audit_concurrency: int = 5
    audit_batch_delay_ms: int = 500
    audit_content_selector: str = "main"
    audit_min_word_count: int = 100
    audit_similarity_threshold: float = 0.8
    audit_exclude_patterns: list[str] = ["/blog/", "/category/"]

    @model_validator(mode="after")
    def _check_audit_bounds(self) -> "Settings":
        if self.audit_concurrency < 1:
            raise ValueError("audit_concurrency must be at least 1")
        if not 0.0 <= self.audit_similarity_threshold <= 1.0:
            raise ValueError("audit_similarity_threshold must be within [0, 1]")
        return self

    # Observability
    log_json: bool = True
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "https://protech-ohio.com",
    ]

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
