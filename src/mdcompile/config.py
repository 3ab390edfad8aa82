"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from mdcompile.core.models import CleanUrlsMode


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDCOMPILE_"


class Settings(BaseModel):
    app_name:          str = "mdcompile"
    src_dir:           str = Field(default="docs",     description="Root directory of markdown pages")
    public_dir:        str = Field(default="public",   description="Static asset directory, relative to src_dir")
    out_dir:           str = Field(default="dist",     description="Directory for compiled units + page data JSON")
    parser_config:     str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    header_levels:     list[int] = Field(default_factory=lambda: [2, 3], description="Heading levels reported in page data")
    clean_urls:        CleanUrlsMode = Field(default=CleanUrlsMode.disabled, description="Link output mode")
    last_updated:      bool = Field(default=False, description="Include git last-updated timestamps")
    is_build:          bool = Field(default=False, description="Production build: also guard import.meta and defines")
    defines:           dict[str, Any] = Field(default_factory=dict, description="User constants replaced at build time")
    cache_size:        int = Field(default=1024, ge=1, description="Max cached compile results")
    ignore_dead_links: bool = Field(default=False, description="Do not fail the build on dead links")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDCOMPILE_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return Settings(**data)
    except ValueError as e:
        raise ValueError(f"Invalid configuration: {e}") from e
