"""Configuration management for the payroll tax engine."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment."""

    tax_table_version: str
    tax_tables_path: Path | None
    strict_components: bool
    engine_version: str
    host: str
    port: int
    debug: bool
    log_level: str

    @property
    def HOST(self) -> str:
        """Alias for host."""
        return self.host

    @property
    def PORT(self) -> int:
        """Alias for port."""
        return self.port

    @property
    def DEBUG(self) -> bool:
        """Alias for debug."""
        return self.debug

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment variables."""
        load_dotenv()

        tables_path = os.getenv("TAX_TABLES_PATH")
        return cls(
            tax_table_version=os.getenv("TAX_TABLE_VERSION", "zimra-usd-2025"),
            tax_tables_path=Path(tables_path) if tables_path else None,
            strict_components=os.getenv("STRICT_COMPONENTS", "true").lower() == "true",
            engine_version=os.getenv("ENGINE_VERSION", "0.1.0"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
