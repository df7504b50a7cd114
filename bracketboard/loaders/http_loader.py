from typing import Any, Optional

import httpx
from loguru import logger
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from bracketboard.config.settings import settings
from bracketboard.models.enums import DataSource

from .base_loader import AuthenticationError, BaseLoader, LoadError

# Define common HTTP status codes that warrant a retry
RETRYABLE_STATUS_CODES = {408, 429, 500, 502, 503, 504}


class HttpLoader(BaseLoader):
    """Fetches the datasets as JSON documents over HTTP."""

    source = DataSource.HTTP

    def __init__(
        self,
        teams_url: str,
        matches_url: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.teams_url = teams_url
        self.matches_url = matches_url
        self.timeout = timeout or settings.request_timeout_seconds
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
        )

    async def fetch_teams(self) -> Any:
        return await self._get_json(self.teams_url)

    async def fetch_matches(self) -> Any:
        return await self._get_json(self.matches_url)

    async def _get_json(self, url: str) -> Any:
        try:
            response = await self._make_request(url)
        except httpx.HTTPError as e:
            # Retries exhausted on a transport error or retryable status
            logger.error(f"Giving up on {url} after retries: {e}")
            raise LoadError(f"Failed request to {url} after multiple retries") from e
        try:
            return response.json()
        except ValueError as e:
            raise LoadError(f"Response from {url} is not valid JSON") from e

    @retry(
        stop=stop_after_attempt(4),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        retry=retry_if_exception_type((httpx.RequestError, httpx.HTTPStatusError)),
        reraise=True,
    )
    async def _make_request(self, url: str) -> httpx.Response:
        """GETs ``url`` with retry logic on transient failures."""
        logger.debug(f"Making request to {url}")
        try:
            response = await self.client.get(url)

            if response.status_code in {401, 403}:
                logger.warning(
                    f"Authentication error ({response.status_code}) at {url}."
                )
                raise AuthenticationError(
                    f"Authentication failed ({response.status_code}) for {url}"
                )

            response.raise_for_status()
            logger.debug(f"Request successful: {response.status_code} for {url}")
            return response

        except httpx.HTTPStatusError as e:
            if e.response.status_code in RETRYABLE_STATUS_CODES:
                logger.warning(
                    f"Retrying request to {url} due to status {e.response.status_code}"
                )
                raise  # Re-raise to trigger tenacity retry
            logger.error(f"HTTP error fetching {url}: {e.response.status_code}")
            raise LoadError(f"HTTP error: {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.warning(f"Request error for {url}, retrying: {e}")
            raise  # Re-raise to trigger tenacity retry

    async def close(self) -> None:
        """Closes the underlying HTTP client."""
        await self.client.aclose()
        logger.debug("Closed HTTP client")
