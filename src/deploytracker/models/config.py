"""Configuration models."""

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Lookback used as the start of the oldest release's range when the
# repository root cannot be resolved. Approximate by nature.
FALLBACK_WINDOW = 500

DEFAULT_TRUNK_BRANCHES = ["main", "master"]
DEFAULT_REMOTES = ["origin", "upstream"]


class RepositoryConfig(BaseModel):
    """Configuration for a repository to mine."""

    repo_path: Path = Field(..., description="Path to the Git repository")
    trunk_branches: List[str] = Field(
        default_factory=lambda: list(DEFAULT_TRUNK_BRANCHES),
        description="Branches that count as mainline for reachability checks",
    )
    remotes: List[str] = Field(
        default_factory=lambda: list(DEFAULT_REMOTES),
        description="Remote names stripped from branch names",
    )
    fallback_window: int = Field(
        FALLBACK_WINDOW,
        ge=1,
        description="Commits to look back from the oldest tag when the root commit is unknown",
    )
    max_workers: int = Field(4, ge=1, description="Releases mined concurrently")

    class Config:
        """Pydantic config."""
        json_schema_extra = {
            "example": {
                "repo_path": "/path/to/repo",
                "trunk_branches": ["main", "master"],
                "remotes": ["origin", "upstream"],
                "fallback_window": 500,
                "max_workers": 4,
            }
        }


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings are prefixed with DEPLOYTRACKER_ (e.g., DEPLOYTRACKER_LOG_LEVEL).
    """

    model_config = SettingsConfigDict(
        env_prefix="DEPLOYTRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Mining
    trunk_branches: List[str] = Field(default_factory=lambda: list(DEFAULT_TRUNK_BRANCHES))
    remotes: List[str] = Field(default_factory=lambda: list(DEFAULT_REMOTES))
    fallback_window: int = FALLBACK_WINDOW
    max_workers: int = 4

    # Reporting
    work_item_url: Optional[str] = None

    # Logging
    log_level: str = "WARNING"
    log_format: str = "console"

    def repository_config(self, repo_path: Path) -> RepositoryConfig:
        """Build a RepositoryConfig for ``repo_path`` from these settings."""
        return RepositoryConfig(
            repo_path=repo_path,
            trunk_branches=self.trunk_branches,
            remotes=self.remotes,
            fallback_window=self.fallback_window,
            max_workers=self.max_workers,
        )
