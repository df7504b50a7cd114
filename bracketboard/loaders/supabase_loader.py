from typing import Any, Dict, List, Optional

from loguru import logger
from postgrest import APIResponse
from postgrest.exceptions import APIError
from supabase import AsyncClient, create_async_client

from bracketboard.models.enums import DataSource

from .base_loader import BaseLoader, LoadError


class SupabaseLoader(BaseLoader):
    """Reads the teams and matches tables from a Supabase project."""

    source = DataSource.SUPABASE

    def __init__(
        self,
        url: str,
        key: str,
        teams_table: str = "teams",
        matches_table: str = "matches",
        client: Optional[AsyncClient] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        if not url or not key:
            logger.critical("Supabase URL or Key not configured in settings.")
            raise LoadError("Supabase configuration missing.")
        self.url = url
        self.key = key
        self.teams_table = teams_table
        self.matches_table = matches_table
        self._client = client

    async def _get_client(self) -> AsyncClient:
        if self._client is None:
            try:
                self._client = await create_async_client(self.url, self.key)
            except Exception as e:
                logger.exception(f"Failed to initialize Async Supabase client: {e}")
                raise LoadError("Could not connect to Supabase") from e
            logger.success("Async Supabase client initialized successfully.")
        return self._client

    async def load(self):
        # Connect once up front so the two concurrent fetches share a client
        await self._get_client()
        return await super().load()

    async def fetch_teams(self) -> List[Dict[str, Any]]:
        return await self._select_all(self.teams_table)

    async def fetch_matches(self) -> List[Dict[str, Any]]:
        return await self._select_all(self.matches_table)

    async def _select_all(self, table_name: str) -> List[Dict[str, Any]]:
        client = await self._get_client()
        try:
            response: APIResponse = await client.table(table_name).select("*").execute()
        except APIError as e:
            logger.error(f"Supabase API error reading {table_name}: {e.message}")
            logger.debug(f"Full APIError details: {e}")
            raise LoadError(f"Supabase API error reading {table_name}") from e
        logger.debug(f"Fetched {len(response.data)} rows from {table_name}")
        return response.data

    async def close(self) -> None:
        """Closes the PostgREST session held by the Supabase client."""
        if self._client is None:
            return
        await self._client.postgrest.aclose()
        self._client = None
        logger.debug("Closed Supabase client")
