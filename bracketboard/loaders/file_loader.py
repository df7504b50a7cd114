import asyncio
import json
from pathlib import Path
from typing import Any

from loguru import logger

from bracketboard.models.enums import DataSource

from .base_loader import BaseLoader, LoadError


class FileLoader(BaseLoader):
    """Reads the datasets from local JSON files."""

    source = DataSource.FILE

    def __init__(self, teams_path: str | Path, matches_path: str | Path, **kwargs):
        super().__init__(**kwargs)
        self.teams_path = Path(teams_path)
        self.matches_path = Path(matches_path)

    async def fetch_teams(self) -> Any:
        return await asyncio.to_thread(self._read_json, self.teams_path)

    async def fetch_matches(self) -> Any:
        return await asyncio.to_thread(self._read_json, self.matches_path)

    @staticmethod
    def _read_json(path: Path) -> Any:
        logger.debug(f"Reading {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError as e:
            raise LoadError(f"Dataset file not found: {path}") from e
        except json.JSONDecodeError as e:
            raise LoadError(f"Dataset file {path} is not valid JSON: {e}") from e
        except OSError as e:
            raise LoadError(f"Could not read {path}: {e}") from e
