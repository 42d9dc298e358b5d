"""Elasticsearch client wrapper."""

import json
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
from urllib.parse import quote

import aiohttp

from ..utils.logger import get_logger

logger = get_logger(__name__)

RequestSpec = Tuple[str, str, Optional[Dict[str, Any]]]


class EsApiError(RuntimeError):
    """Raised when Elasticsearch answers with a non-2xx status."""

    def __init__(self, status: int, path: str, body: str = ""):
        self.status = status
        self.path = path
        self.body = body
        super().__init__(f"Elasticsearch returned {status} for {path}: {body[:200]}")


def _join_names(names: Union[str, List[str], None]) -> str:
    """Join index names into a URL path segment."""
    if not names:
        return ""
    if isinstance(names, str):
        names = [names]
    return ",".join(quote(name, safe="*") for name in names)


def _format_param(value: Any) -> str:
    """Format a query parameter value the way Elasticsearch expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


def _transport_request(params: Dict[str, Any]) -> RequestSpec:
    """Raw request passthrough."""
    return params.get("method", "GET").upper(), params["path"], params.get("query")


def _cat_indices(params: Dict[str, Any]) -> RequestSpec:
    """GET /_cat/indices/<index>."""
    index = _join_names(params.get("index"))
    path = f"/_cat/indices/{index}" if index else "/_cat/indices"
    query = {
        "format": params.get("format", "json"),
        "expand_wildcards": params.get("expand_wildcards"),
    }
    return "GET", path, query


def _indices_get_mapping(params: Dict[str, Any]) -> RequestSpec:
    """GET /<index>/_mapping."""
    index = _join_names(params.get("index"))
    path = f"/{index}/_mapping" if index else "/_mapping"
    query = {
        "filter_path": params.get("filter_path"),
        "ignore_unavailable": params.get("ignore_unavailable"),
        "allow_no_indices": params.get("allow_no_indices"),
    }
    return "GET", path, query


# Dictionary mapping endpoint names to request builders
ENDPOINT_BUILDERS: Dict[str, Callable[[Dict[str, Any]], RequestSpec]] = {
    "transport.request": _transport_request,
    "cat.indices": _cat_indices,
    "indices.getMapping": _indices_get_mapping,
}


class EsClient:
    """Async HTTP client that calls Elasticsearch as the configured user."""

    def __init__(
        self,
        url: str = "http://localhost:9200",
        username: Optional[str] = None,
        password: Optional[str] = None,
        api_key: Optional[str] = None,
        verify_certs: bool = True,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.url = url.rstrip("/")
        self.username = username
        self.password = password
        self.api_key = api_key
        self.verify_certs = verify_certs
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "EsClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def _build_headers(self) -> Dict[str, str]:
        """Build request headers, including API key auth when configured."""
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"ApiKey {self.api_key}"
        return headers

    def _get_session(self) -> aiohttp.ClientSession:
        """Return the HTTP session, creating it on first use."""
        if self._session is None or self._session.closed:
            auth = None
            if self.username and not self.api_key:
                auth = aiohttp.BasicAuth(self.username, self.password or "")
            self._session = aiohttp.ClientSession(
                auth=auth,
                headers=self._build_headers(),
                connector=aiohttp.TCPConnector(ssl=self.verify_certs),
            )
            self._owns_session = True
        return self._session

    async def request(
        self, method: str, path: str, params: Optional[Dict[str, Any]] = None
    ) -> Any:
        """Issue a request and return the decoded JSON body."""
        session = self._get_session()
        url = f"{self.url}{path}"
        query = {k: _format_param(v) for k, v in (params or {}).items() if v is not None}
        logger.debug(f"{method} {url} {query}")

        async with session.request(method, url, params=query) as response:
            status = response.status
            body = await response.text()

        if not 200 <= status < 300:
            logger.error(f"Request failed: {method} {path} returned {status}")
            raise EsApiError(status, path, body)

        return json.loads(body) if body else {}

    async def call_as_current_user(self, endpoint: str, params: Dict[str, Any]) -> Any:
        """Call a named API endpoint with the client's credentials."""
        builder = ENDPOINT_BUILDERS.get(endpoint)
        if builder is None:
            raise ValueError(f"Unsupported endpoint: {endpoint}")

        method, path, query = builder(params)
        return await self.request(method, path, query)

    async def close(self):
        """Close the HTTP session if this client created it."""
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
