from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Webhooks and scrapers write with this key

    # Stripe
    stripe_secret_key: str = ""
    stripe_webhook_secret: str = ""
    currency: str = "eur"

    # Resend
    resend_api_key: str = ""
    email_from: str = "bilietai@noriumuzikos.lt"
    bulk_email_to: str = "noreply@resend.dev"  # Visible recipient for BCC campaigns
    admin_email: str = "info@gvozdovic.com"

    # QR codes
    qr_code_secret: str = "default-secret-key-change-in-production"

    # AWS S3 (will read from uppercase env vars automatically)
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: str = "eu-central-1"
    s3_bucket_name: Optional[str] = None

    # Supabase Storage buckets used when S3 is not configured
    storage_bucket: str = "tickets"
    images_bucket: str = "team-logo"
    max_upload_size: int = 5 * 1024 * 1024

    # Scraper
    scraper_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )
    scraper_timeout: int = 10
    scraper_retries: int = 3
    scraper_delay_seconds: float = 1.0
    club_name: str = "Banga"

    # Headless browser (PDF rendering, roster pages)
    pdf_browser_channel: Optional[str] = None  # e.g. "chrome"; None uses bundled chromium
    playwright_headless: bool = True

    # App
    app_name: str = "clubhub"
    app_url: str = "http://localhost:3000"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def s3_configured(self) -> bool:
        return all([self.aws_access_key_id, self.aws_secret_access_key, self.s3_bucket_name])

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore"
    )


settings = Settings()
