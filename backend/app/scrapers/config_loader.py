"""
Helpers for loading the news sources configuration.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from loguru import logger
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    ValidationError,
    field_validator,
)

from app.core.config import settings
from app.core.exceptions import ConfigError


class SourceSpec(BaseModel):
    """
    One scrapeable listing page and the CSS selectors used to extract its items.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(min_length=1, description="Unique source title, also used as category key")
    url: HttpUrl
    item_selector: str = Field(alias="itemSelector", min_length=1)
    date_selector: str = Field(alias="dateSelector", min_length=1)
    title_selector: str = Field(alias="titleSelector", min_length=1)
    href_selector: str = Field(alias="hrefSelector", min_length=1)
    headers: Dict[str, str] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("headers", "HEADERS"),
        description="Per-source request header overrides",
    )

    @field_validator("headers", mode="before")
    @classmethod
    def validate_headers(cls, v):
        return v or {}


class NewsConfig(BaseModel):
    """Validated configuration resource."""

    model_config = ConfigDict(populate_by_name=True)

    days: int = Field(ge=1)
    interval_minutes: int = Field(default=30, ge=1, alias="intervalMinutes")
    sources: List[SourceSpec]
    output_path: Optional[str] = Field(default=None, alias="outputPath")

    @field_validator("sources")
    @classmethod
    def validate_unique_titles(cls, v: List[SourceSpec]) -> List[SourceSpec]:
        seen = set()
        for source in v:
            if source.title in seen:
                raise ValueError(f"duplicate source title: {source.title}")
            seen.add(source.title)
        return v


def default_news_config() -> NewsConfig:
    """Minimal safe configuration used whenever the real one cannot be loaded."""
    return NewsConfig(
        days=settings.NEWS_DEFAULT_DAYS,
        intervalMinutes=settings.NEWS_CACHE_TTL_MINUTES,
        sources=[],
    )


def _load_file(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as handle:
            if path.suffix in {".yml", ".yaml"}:
                data = yaml.safe_load(handle) or {}
            else:
                data = json.load(handle)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config root in {path} must be an object")
    return data


def parse_news_config(data: Dict[str, Any]) -> NewsConfig:
    """Validate raw configuration data, raising ConfigError on any problem."""
    try:
        return NewsConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Config is missing required fields or is invalid: {exc}") from exc


def load_news_config(config_path: Optional[str] = None) -> NewsConfig:
    """
    Load the sources configuration, falling back to safe defaults on failure.
    """
    path = Path(config_path or settings.NEWS_CONFIG_PATH)
    if not path.exists():
        logger.error(f"News config file {path} not found; using default config")
        return default_news_config()

    try:
        config = parse_news_config(_load_file(path))
    except ConfigError as exc:
        logger.error(f"Failed to load news config, using default config: {exc.message}")
        return default_news_config()

    logger.info(
        f"Loaded news config from {path}: {len(config.sources)} sources, "
        f"days={config.days}, intervalMinutes={config.interval_minutes}"
    )
    return config
