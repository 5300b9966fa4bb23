"""Shared Pydantic base models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class GymBaaziBase(BaseModel):
    """Base model with shared config for all GymBaazi schemas.

    ``from_attributes`` lets routes validate the workout core's dataclasses
    directly, properties included.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )
