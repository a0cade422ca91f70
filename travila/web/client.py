from typing import Any, Dict, List, Optional, Sequence
import logging
import aiohttp

logger = logging.getLogger(__name__)


class ApiClientError(Exception):
    """The API could not be reached or answered with a server error."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)


class TravilaApiClient:
    """Async client for the search API, shared by every widget on a page."""

    def __init__(
        self,
        base_url: str,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "TravilaApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Send a request and return the JSON envelope.

        Client errors (4xx) still carry a ``{"success": false}`` envelope and are
        returned as-is; server errors and transport failures raise ApiClientError.
        """
        url = f"{self.base_url}{path}"
        session = await self._get_session()
        try:
            async with session.request(method, url, params=params, json=json) as response:
                if response.status >= 500:
                    body = await response.text()
                    logger.error(f"API {method} {path} failed with {response.status}: {body[:200]}")
                    raise ApiClientError(
                        f"{method} {path} failed with status {response.status}",
                        status=response.status,
                    )
                try:
                    return await response.json()
                except (aiohttp.ContentTypeError, ValueError) as e:
                    raise ApiClientError(
                        f"{method} {path} returned a non-JSON body", status=response.status
                    ) from e
        except aiohttp.ClientError as e:
            logger.error(f"API {method} {path} transport error: {e}")
            raise ApiClientError(f"{method} {path} failed: {e}") from e

    async def search(
        self, query: str, types: Sequence[str] = ("tours", "hotels", "cars"), limit: int = 20
    ) -> Dict[str, Any]:
        return await self._request(
            "POST", "/api/search", json={"q": query, "types": list(types), "limit": limit}
        )

    async def get_search_suggestions(self, query: str, limit: int = 5) -> Dict[str, Any]:
        return await self._request(
            "GET", "/api/search/suggestions", params={"q": query, "limit": limit}
        )

    async def get_search_filters(self) -> Dict[str, Any]:
        return await self._request("GET", "/api/search/filters")

    async def suggestion_list(self, query: str, limit: int = 5) -> List[Dict[str, Any]]:
        data = await self.get_search_suggestions(query, limit)
        if not data.get("success"):
            return []
        return data.get("data", {}).get("suggestions", [])
