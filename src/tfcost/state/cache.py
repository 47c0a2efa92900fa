"""In-process cache of normalized Terraform states keyed by bucket/path."""

from typing import Dict, Optional
from ..ingest.models import TerraformState
from ..utils.logging import get_logger

logger = get_logger("state.cache")


def cache_key(bucket_name: str, file_path: str) -> str:
    return f"{bucket_name}/{file_path}"


class StateCache:
    """
    Memoizes normalized states until explicitly invalidated.

    Owned by the caller; its lifetime is the hosting process or session.
    """

    def __init__(self):
        self._states: Dict[str, TerraformState] = {}

    def get(self, bucket_name: str, file_path: str) -> Optional[TerraformState]:
        return self._states.get(cache_key(bucket_name, file_path))

    def put(self, bucket_name: str, file_path: str, state: TerraformState) -> None:
        self._states[cache_key(bucket_name, file_path)] = state

    def invalidate(self, bucket_name: str, file_path: str) -> bool:
        """Drop one entry. Returns True if it was cached."""
        removed = self._states.pop(cache_key(bucket_name, file_path), None)
        if removed is not None:
            logger.debug(f"Invalidated cached state {cache_key(bucket_name, file_path)}")
        return removed is not None

    def clear(self) -> None:
        self._states.clear()

    def __contains__(self, key: str) -> bool:
        return key in self._states

    def __len__(self) -> int:
        return len(self._states)
