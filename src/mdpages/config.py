"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDPAGES_"


class Settings(BaseModel):
    app_name:        str  = "mdpages"
    content_dir:     Path = Field(default=Path("content"), description="Root of the markdown sources")
    output_dir:      Path = Field(default=Path("dist"),    description="Directory for rendered HTML + JSON files")
    layout_dir:      Path = Field(default=Path("layouts"), description="Jinja2 page layouts (<layout>.html)")
    parser_config:   str  = Field(default="gfm-like",      description="MarkdownIt parser preset name")
    development:     bool = Field(default=False, description="Show drafts/future posts and refresh on read")
    background_task: bool = Field(default=False, description="Running outside a request; disables refresh")
    slug_max_length: int  = Field(default=100, ge=1, description="Max characters considered when slugifying")
    words_per_min:   int  = Field(default=225, ge=1, description="Reading speed for minutes-to-read")
    db_url:          str  = "sqlite:///mdpages.db"


def load_config(overrides: dict[str, Any] = None, config_file: Path | str = CONFIG_FILE) -> Settings:
    """Build Settings from defaults < config_file < MDPAGES_<FIELD> env vars < non-None overrides."""
    path = Path(config_file)
    data: dict[str, Any] = {}
    if path.exists():
        try:
            data = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {path.name}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {path.name}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
