"""
Shared Pydantic base models.

StrictModel is for payloads this project builds itself. ApiModel is for
GitHub responses, which routinely grow new fields.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    """Base model with strict validation settings."""

    model_config = ConfigDict(
        extra='forbid',  # Raise error on unexpected fields
        strict=True,  # Strict type validation
        frozen=True,  # Immutable (cannot modify after creation)
    )


class ApiModel(BaseModel):
    """Base model for GitHub API responses."""

    model_config = ConfigDict(
        extra='ignore',  # GitHub adds fields without notice
        frozen=True,  # Snapshots are replaced wholesale, never edited
    )
