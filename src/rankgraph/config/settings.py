"""Configuration settings using Pydantic Settings.

Provides typed configuration with environment variable support for the graph.

Usage:
    from rankgraph.config import RankSettings

    # Load from environment variables (RANKGRAPH_*)
    settings = RankSettings()

    # Or override with explicit values
    settings = RankSettings(alpha=0.9, threshold=1e-8)
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rankgraph.core.identity import MAX_ID
from rankgraph.ranking.models import DEFAULT_ALPHA, DEFAULT_THRESHOLD


class RankSettings(BaseSettings):  # type: ignore[misc]
    """Configuration for a RankGraph.

    Settings are frozen: a graph's damping, threshold and id range are fixed
    once it is built.

    Attributes:
        alpha: Damping factor (0.0-1.0).
        threshold: Convergence threshold on the squared rank-vector distance.
        start_id: Smallest entity id handed out.
        max_id: Id-space exhaustion marker, never handed out.

    Environment Variables:
        RANKGRAPH_ALPHA
        RANKGRAPH_THRESHOLD
        RANKGRAPH_START_ID
        RANKGRAPH_MAX_ID
    """

    model_config = SettingsConfigDict(
        env_prefix="RANKGRAPH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    alpha: float = Field(default=DEFAULT_ALPHA, ge=0.0, le=1.0)
    threshold: float = Field(default=DEFAULT_THRESHOLD, gt=0.0)
    start_id: int = Field(default=0, ge=0)
    max_id: int = Field(default=MAX_ID, gt=0)

    @model_validator(mode="after")
    def _check_id_range(self) -> RankSettings:
        if self.max_id <= self.start_id:
            raise ValueError(f"max_id must exceed start_id ({self.start_id}), got {self.max_id}")
        return self
