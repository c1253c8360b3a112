"""Domain port definitions for adapters."""

from __future__ import annotations

from .registry import GameRegistry
from .workspace import RecordSink, RecordSource

__all__ = [
    "GameRegistry",
    "RecordSink",
    "RecordSource",
]
