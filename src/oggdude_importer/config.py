"""
Configuration for the OggDude importer.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from .base import ConflictMode

logger = logging.getLogger("oggdude-importer")

ALL_CATEGORIES = ("armor", "weapon", "gear")


class ImporterSettings(BaseModel):
    """Settings controlling where and how OggDude data is imported."""

    data_dir: Path = Field(
        default=Path("oggdude_data"),
        description="Root of the host data directory (uploaded images and documents)",
    )
    system_id: str = Field(
        default="swes",
        description="Host game system id, used to build default icon paths",
    )
    world_id: str = Field(
        default="world",
        description="Host world id, used to build world storage paths",
    )
    conflict_mode: ConflictMode = Field(
        default=ConflictMode.UPSERT,
        description="Re-import behavior for records whose key already exists",
    )
    categories: list[str] = Field(
        default_factory=lambda: list(ALL_CATEGORIES),
        description="Categories imported by default",
    )

    @field_validator("system_id", "world_id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        v = v.strip().strip("/")
        if not v:
            raise ValueError("Identifier cannot be empty")
        return v

    @field_validator("categories")
    @classmethod
    def validate_categories(cls, v: list[str]) -> list[str]:
        normalized = [c.strip().lower() for c in v if c.strip()]
        unknown = set(normalized) - set(ALL_CATEGORIES)
        if unknown:
            raise ValueError(
                f"Unknown categories: {sorted(unknown)}. Valid categories: {list(ALL_CATEGORIES)}"
            )
        return normalized


def load_settings() -> ImporterSettings:
    """Build settings from the environment, reading a ``.env`` file if present."""
    if not load_dotenv():
        logger.debug(".env file not found, using environment and defaults")

    values: dict = {}
    if data_dir := os.getenv("OGGDUDE_DATA_DIR"):
        values["data_dir"] = Path(data_dir)
    if system_id := os.getenv("OGGDUDE_SYSTEM_ID"):
        values["system_id"] = system_id
    if world_id := os.getenv("OGGDUDE_WORLD_ID"):
        values["world_id"] = world_id
    if conflict_mode := os.getenv("OGGDUDE_CONFLICT_MODE"):
        values["conflict_mode"] = conflict_mode.lower()
    if categories := os.getenv("OGGDUDE_CATEGORIES"):
        values["categories"] = categories.split(",")
    return ImporterSettings(**values)
