"""Rank computation: damped power iteration over graph storage."""

from rankgraph.ranking.engine import RankEngine, squared_distance
from rankgraph.ranking.models import DEFAULT_ALPHA, DEFAULT_THRESHOLD, RankResult

__all__ = [
    "RankEngine",
    "RankResult",
    "squared_distance",
    "DEFAULT_ALPHA",
    "DEFAULT_THRESHOLD",
]
