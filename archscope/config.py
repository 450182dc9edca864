from pathlib import Path
from typing import Optional, List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="ARCHSCOPE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Traversal Configuration
    max_files: int = Field(default=500, description="Cap on source files visited by the import graph pass")
    max_depth: int = Field(default=64, description="Maximum directory nesting followed during traversal")
    extra_ignored_dirs: str = Field(default="", description="Comma-separated directory names to skip")

    # Extraction Configuration
    alias_prefix: str = Field(default="@/", description="Import prefix mapped to the project root")
    schema_entity_keywords: str = Field(default="model,entity")

    # Output Configuration
    output_dir: str = Field(default="public/data")

    # API Configuration
    api_host: str = Field(default="localhost")
    api_port: int = Field(default=8000)

    # Logging Configuration
    log_level: str = Field(default="INFO")
    log_file: str = Field(default="")

    @property
    def extra_ignored_dirs_list(self) -> List[str]:
        """Get extra ignored directories as a list."""
        return [d.strip() for d in self.extra_ignored_dirs.split(",") if d.strip()]

    @property
    def schema_entity_keywords_list(self) -> List[str]:
        """Get schema entity keywords as a list."""
        return [k.strip() for k in self.schema_entity_keywords.split(",") if k.strip()]

    @property
    def log_dir(self) -> Optional[Path]:
        """Get log directory path, if file logging is enabled."""
        if not self.log_file:
            return None
        return Path(self.log_file).parent

    def ensure_directories(self):
        """Ensure necessary directories exist."""
        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)


settings = Settings()
settings.ensure_directories()
