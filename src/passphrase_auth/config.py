"""Passphrase Auth — configuration loaded from environment."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, loaded from .env or environment variables."""

    # ── Database ──────────────────────────────────────────
    database_url: str = "sqlite+aiosqlite:///./passphrase_auth.db"

    # ── SMTP delivery ─────────────────────────────────────
    smtp_host: str = ""
    smtp_port: int = 465
    smtp_username: str = ""
    smtp_password: str = ""
    smtp_use_tls: bool = True
    smtp_timeout_seconds: float = 10.0
    email_from: str = "2FA Sample Server <noreply@ethereal.email>"

    # ── Passphrase lifecycle ──────────────────────────────
    passphrase_pattern: str = "WWW"
    passphrase_separator: str = "-"
    passphrase_ttl_seconds: int = 30 * 60
    csrf_ttl_seconds: int = 30 * 60

    # ── Argon2id ──────────────────────────────────────────
    # Shared by every identity; see DESIGN.md before changing.
    hash_salt: str = "a948904f2f0f479b8f8197694b30184b0d2ed1c1cd2a1ec0fb85d299a192a447"
    argon2_time_cost: int = 1
    argon2_memory_cost_kib: int = 64 * 1024
    argon2_parallelism: int = 4
    argon2_hash_len: int = 32

    # ── App ───────────────────────────────────────────────
    app_name: str = "Passphrase Auth"
    cors_allow_origins: list[str] = ["*"]
    host: str = "127.0.0.1"
    port: int = 3000
    debug: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton settings instance
settings = Settings()
