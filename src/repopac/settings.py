from __future__ import annotations

from pydantic import BaseModel, Field

from repopac.config import MAX_BYTES


class Settings(BaseModel):
    """Options for one repopac run, built from the command line."""

    paths: list[str] = Field(default_factory=lambda: ["."], description="Target paths.")
    max_bytes: int = Field(default=MAX_BYTES, gt=0, description="Per-file byte cap.")
