"""Fetch, normalize and memoize remote Terraform states."""

from typing import Optional
from ..ingest.models import TerraformState
from ..ingest.state_normalizer import normalize_state
from ..utils.errors import StateFetchError
from ..utils.logging import get_logger
from .cache import StateCache, cache_key
from .sources import StateSource

logger = get_logger("state.fetcher")


class StateFetcher:
    """Retrieves states from a source, caching normalized results."""

    def __init__(self, source: StateSource, cache: Optional[StateCache] = None):
        self.source = source
        self.cache = cache if cache is not None else StateCache()

    def fetch(self, bucket_name: str, file_path: str, force_refresh: bool = False) -> TerraformState:
        """
        Return the normalized state for bucket/path.

        A cached state is returned unless force_refresh is set.

        Raises:
            StateFetchError: If bucket or path is missing, or retrieval fails
        """
        if not bucket_name or not file_path:
            raise StateFetchError("Bucket name and file path are required")

        if not force_refresh:
            cached = self.cache.get(bucket_name, file_path)
            if cached is not None:
                logger.debug(f"Using cached state {cache_key(bucket_name, file_path)}")
                return cached

        logger.info(f"Fetching {file_path} from bucket {bucket_name}")
        raw_state = self.source.fetch_raw(bucket_name, file_path)
        state = normalize_state(raw_state)
        self.cache.put(bucket_name, file_path, state)
        return state
