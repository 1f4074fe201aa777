# sources/philosophers.py
# Quotes + philosopher names from philosophersapi.com.
# Used by routes_quotes.py via get_source().

from typing import Optional
from urllib.parse import quote

import httpx

from errors import DetailFetchFailure, UpstreamFailure
from logic import log, HTTP_TIMEOUT, PHILOSOPHERS_API, PLACEHOLDER_AUTHOR
from sources.base import PhilosopherLookup

UA = "Philosopher-Quote-Card/1.0"

class Source:
    def __init__(self, base_url: str = PHILOSOPHERS_API, timeout: float = HTTP_TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        headers = {"Accept": "application/json", "User-Agent": UA}
        return httpx.AsyncClient(timeout=self.timeout, headers=headers, transport=self._transport)

    async def fetch_quotes(self) -> list:
        url = f"{self.base_url}/api/quotes"
        try:
            async with self._client() as cx:
                r = await cx.get(url)
                r.raise_for_status()
                data = r.json()
        except httpx.HTTPError as e:
            raise UpstreamFailure(f"GET {url} failed: {e!r}") from e
        except ValueError as e:
            raise UpstreamFailure(f"GET {url} returned invalid JSON: {e}") from e
        if not isinstance(data, list):
            raise UpstreamFailure(f"GET {url} returned {type(data).__name__}, expected a list")
        return data

    async def _fetch_name(self, philosopher_id: str) -> str:
        url = f"{self.base_url}/api/philosophers/{quote(philosopher_id, safe='')}"
        try:
            async with self._client() as cx:
                r = await cx.get(url)
                r.raise_for_status()
                data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise DetailFetchFailure(f"GET {url} failed: {e!r}") from e
        name = data.get("name") if isinstance(data, dict) else None
        if not isinstance(name, str) or not name.strip():
            raise DetailFetchFailure(f"GET {url} returned no name")
        return name.strip()

    async def fetch_philosopher(self, philosopher_id: Optional[str]) -> PhilosopherLookup:
        """Wirft nie: ein Fehlschlag kommt als ok=False mit Platzhalter-Namen zurueck."""
        if not philosopher_id:
            return PhilosopherLookup(name=PLACEHOLDER_AUTHOR, ok=False, error="no philosopher id")
        try:
            return PhilosopherLookup(name=await self._fetch_name(philosopher_id))
        except DetailFetchFailure as e:
            log("⚠️ Philosopher fetch failed:", e)
            return PhilosopherLookup(name=PLACEHOLDER_AUTHOR, ok=False, error=str(e))
