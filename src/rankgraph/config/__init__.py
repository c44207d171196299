"""Configuration module using Pydantic Settings.

Usage:
    from rankgraph.config import RankSettings

    settings = RankSettings(alpha=0.9)
"""

from rankgraph.config.settings import RankSettings

__all__ = [
    "RankSettings",
]
