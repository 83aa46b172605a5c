from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx
from loguru import logger

from nhl_standings.models.validation import ValidationResult


class TransientAcquisitionError(Exception):
    """A single fetch attempt failed; the attempt may be retried."""

    pass


class InvalidSnapshotError(TransientAcquisitionError):
    """The fetched snapshot was rejected by the validator."""

    def __init__(self, message: str, result: ValidationResult):
        super().__init__(message)
        self.result = result


class BaseFetcher(ABC):
    """Abstract base class for standings snapshot sources."""

    source_name: str = "unknown"

    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: float = 30.0):
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            headers={"Accept": "application/json"},
        )

    @abstractmethod
    async def fetch_snapshot(self) -> Dict[str, Any]:
        """Fetch one raw standings snapshot.

        Returns:
            The decoded JSON payload, unvalidated.

        Raises:
            TransientAcquisitionError: on any transport, status or decoding failure.
        """
        pass

    async def _get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """Makes a GET request and decodes the JSON body.

        Retrying is left to the caller so that a rejected payload counts as a
        failed attempt too.
        """
        logger.debug(f"Making request to {url} for {self.source_name}")
        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()  # Raises HTTPStatusError for 4xx/5xx
        except httpx.HTTPStatusError as e:
            logger.warning(
                f"HTTP error from {self.source_name}: {e.response.status_code} for {url}"
            )
            raise TransientAcquisitionError(
                f"HTTP error! status: {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            # Network errors, timeouts etc.
            logger.warning(f"Request error for {self.source_name}: {e!r}")
            raise TransientAcquisitionError(f"Request to {url} failed: {e!r}") from e

        logger.debug(f"Request successful: {response.status_code} for {url}")
        try:
            return response.json()
        except ValueError as e:
            logger.warning(f"Response from {self.source_name} is not valid JSON: {e}")
            raise TransientAcquisitionError(f"Invalid JSON in response from {url}") from e

    async def close(self):
        """Closes the underlying HTTP client."""
        await self.client.aclose()
        logger.debug(f"Closed HTTP client for {self.source_name}")
