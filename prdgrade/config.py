"""Central configuration — loads from .env and environment variables."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


_BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment / .env file."""

    model_config = SettingsConfigDict(
        env_file=str(_BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        env_prefix="PRDGRADE_",
        extra="ignore",
    )

    # ── Environment ──────────────────────────────────────────────
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"
    log_format: Literal["auto", "json", "console"] = "auto"  # auto: console in development

    # ── Evaluation ───────────────────────────────────────────────
    review_type: str = "prd"
    generated_by: str = "prdgrade (deterministic)"
    template_generated_by: str = "prdgrade"
    rerun_command_template: str = "prdgrade score {filename}"

    # ── Paths ────────────────────────────────────────────────────
    report_dir: str = str(_BASE_DIR / "data" / "reports")

    # ── API ──────────────────────────────────────────────────────
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # ── Helpers ──────────────────────────────────────────────────
    def ensure_dirs(self) -> None:
        """Create all required data directories."""
        Path(self.report_dir).mkdir(parents=True, exist_ok=True)

    def rerun_command(self, filename: str) -> str:
        return self.rerun_command_template.format(filename=filename)


def get_settings() -> Settings:
    """Return a Settings instance built from the current environment."""
    return Settings()


if __name__ == "__main__":
    s = get_settings()
    s.ensure_dirs()
    print(f"Environment : {s.environment}")
    print(f"Review type : {s.review_type}")
    print(f"Reports     : {s.report_dir}")
    print("✓ Config loaded successfully")
