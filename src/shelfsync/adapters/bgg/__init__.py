"""BoardGameGeek registry adapter."""

from __future__ import annotations

from .client import BggAPIError, BggClient
from .registry import BggRegistry, build_bgg_registry
from .schema import BggSearchResponse, BggThing, BggThingResponse
from .translator import translate_search, translate_thing

__all__ = [
    "BggAPIError",
    "BggClient",
    "BggRegistry",
    "BggSearchResponse",
    "BggThing",
    "BggThingResponse",
    "build_bgg_registry",
    "translate_search",
    "translate_thing",
]
