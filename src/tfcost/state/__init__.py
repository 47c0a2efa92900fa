"""Remote state retrieval with an explicit, caller-owned cache."""

from .cache import StateCache, cache_key
from .sources import StateSource, LocalStateSource, HttpStateSource
from .fetcher import StateFetcher

__all__ = [
    "StateCache",
    "cache_key",
    "StateSource",
    "LocalStateSource",
    "HttpStateSource",
    "StateFetcher",
]
