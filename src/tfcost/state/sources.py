"""Sources of raw Terraform state documents."""

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Optional
import requests
from ..utils.errors import StateFetchError
from ..utils.logging import get_logger

logger = get_logger("state.sources")


class StateSource(ABC):
    """
    Abstract interface for retrieving raw state JSON.

    Sources only fetch and parse JSON; normalization happens in the fetcher.
    """

    @abstractmethod
    def fetch_raw(self, bucket_name: str, file_path: str) -> Any:
        """
        Retrieve the raw state document.

        Args:
            bucket_name: Bucket (or top-level directory) holding the state
            file_path: Path of the state file within the bucket

        Returns:
            Parsed JSON document

        Raises:
            StateFetchError: If the document cannot be retrieved or parsed
        """
        pass


class LocalStateSource(StateSource):
    """Reads `<root>/<bucket>/<path>` from the local filesystem (e.g. a synced bucket)."""

    def __init__(self, root: str = "."):
        self.root = Path(root)

    def fetch_raw(self, bucket_name: str, file_path: str) -> Any:
        path = self.root / bucket_name / file_path
        if not path.is_file():
            raise StateFetchError(f"File {file_path} not found in bucket {bucket_name}")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise StateFetchError(f"Invalid JSON in Terraform state file: {e}")
        except OSError as e:
            raise StateFetchError(f"Error reading state file {path}: {e}")


class HttpStateSource(StateSource):
    """
    Fetches state through an HTTP endpoint.

    The endpoint receives a JSON body `{"bucketName": ..., "filePath": ...}` and
    answers with the raw state document.
    """

    def __init__(self, endpoint: Optional[str] = None, timeout: float = 30):
        """
        Initialize HTTP state source.

        Args:
            endpoint: State endpoint URL (default: TFCOST_STATE_ENDPOINT or http://localhost:3000/api/terraform-state)
            timeout: Request timeout in seconds
        """
        self.endpoint = endpoint or os.getenv("TFCOST_STATE_ENDPOINT", "http://localhost:3000/api/terraform-state")
        self.timeout = timeout

    def fetch_raw(self, bucket_name: str, file_path: str) -> Any:
        try:
            response = requests.post(
                self.endpoint,
                json={"bucketName": bucket_name, "filePath": file_path},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"State endpoint error: {e}")
            raise StateFetchError(f"Failed to fetch state from {self.endpoint}: {e}")

        if not response.ok:
            raise StateFetchError(
                f"Failed to fetch state: {response.status_code} {response.reason} - {response.text}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise StateFetchError(f"State endpoint returned invalid JSON: {e}")
