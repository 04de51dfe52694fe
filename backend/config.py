"""Centralised settings for the RuleLinks backend.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

DEFAULT_SOURCE_URL = (
    "https://raw.githubusercontent.com/blackmatrix7/ios_rule_script/"
    "refs/heads/master/rule/Clash/README.md"
)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Workspace / storage
    # ------------------------------------------------------------------
    workspace_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("RULELINKS_WORKSPACE", Path.home() / ".rulelinks_data")
        )
    )

    @property
    def db_path(self) -> Path:
        """Absolute path to the SQLite database file."""
        return self.workspace_dir / "rulelinks.db"

    @property
    def schema_path(self) -> Path:
        """Absolute path to the schema SQL file bundled with the package."""
        return Path(__file__).resolve().parent / "db" / "schema.sql"

    @property
    def cache_path(self) -> Path:
        """Last successfully fetched copy of the source document."""
        return self.workspace_dir / "source-cache.md"

    @property
    def selection_path(self) -> Path:
        """JSON file used by the ``json`` selection backend."""
        return self.workspace_dir / "selected-links.json"

    selection_backend: str = field(
        default_factory=lambda: os.environ.get("SELECTION_BACKEND", "sqlite")
    )

    # ------------------------------------------------------------------
    # Source document
    # ------------------------------------------------------------------
    source_url: str = field(
        default_factory=lambda: os.environ.get("SOURCE_URL", DEFAULT_SOURCE_URL)
    )
    revalidate_seconds: float = field(
        default_factory=lambda: float(os.environ.get("SOURCE_REVALIDATE_SECONDS", "3600"))
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO")
    )

    def ensure_workspace(self) -> None:
        """Create the workspace directory if it does not exist."""
        self.workspace_dir.mkdir(parents=True, exist_ok=True)


# Module-level singleton — import this everywhere:
#   from backend.config import settings
settings = Settings()
