import asyncio
from abc import ABC, abstractmethod
from typing import Any

from loguru import logger

from bracketboard.models.enums import DataSource
from bracketboard.normalization.normalizer import (
    NormalizationError,
    NormalizedData,
    Normalizer,
)


class LoadError(Exception):
    """Custom exception for dataset loading errors."""

    pass


class AuthenticationError(LoadError):
    """Exception raised for authentication failures (401, 403)."""

    pass


class BaseLoader(ABC):
    """Abstract base class for team/match dataset sources."""

    source: DataSource

    def __init__(self, normalizer: Normalizer | None = None):
        self.normalizer = normalizer or Normalizer()

    @abstractmethod
    async def fetch_teams(self) -> Any:
        """Fetch the raw teams payload."""
        pass

    @abstractmethod
    async def fetch_matches(self) -> Any:
        """Fetch the raw matches payload."""
        pass

    async def load(self) -> NormalizedData:
        """Fetches both datasets concurrently and normalizes them.

        Nothing is returned unless both fetches succeed.

        Raises:
            LoadError: either fetch failed or a payload could not be normalized.
        """
        logger.info(f"Loading teams and matches from {self.source.value} source")
        raw_teams, raw_matches = await asyncio.gather(
            self.fetch_teams(), self.fetch_matches(), return_exceptions=True
        )

        for name, result in (("teams", raw_teams), ("matches", raw_matches)):
            if isinstance(result, LoadError):
                logger.error(f"Failed to load {name}: {result}")
                raise result
            if isinstance(result, BaseException):
                logger.error(f"Unexpected error loading {name}: {result}")
                raise LoadError(f"Failed to load {name}: {result}") from result

        try:
            return self.normalizer.normalize(raw_teams, raw_matches)
        except NormalizationError as e:
            raise LoadError(f"Malformed dataset: {e}") from e

    async def close(self) -> None:
        """Releases any held connections."""
        pass
