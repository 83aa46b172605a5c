# nhl_standings/acquisition/nhl_fetcher.py

from typing import Any, Dict, Optional

import httpx
from loguru import logger

from nhl_standings.config.settings import AppSettings
from .base_fetcher import BaseFetcher, TransientAcquisitionError


class NHLStandingsFetcher(BaseFetcher):
    """Fetches the current standings snapshot from the NHL web API."""

    source_name: str = "NHL API"

    def __init__(self, settings: AppSettings, client: Optional[httpx.AsyncClient] = None):
        super().__init__(client=client, timeout=settings.request_timeout_seconds)
        self.url = str(settings.standings_url)

    async def fetch_snapshot(self) -> Dict[str, Any]:
        payload = await self._get_json(self.url)
        if not isinstance(payload, dict):
            raise TransientAcquisitionError(
                f"Expected a JSON object from {self.source_name}, got {type(payload).__name__}"
            )
        logger.debug(f"Fetched snapshot from {self.source_name} with keys {list(payload.keys())}")
        return payload
