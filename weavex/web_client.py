"""httpx client for the Ollama web search and web fetch API.

Both endpoints take a JSON body, authenticate with a bearer token and return
JSON. Failures are mapped onto the project's exception hierarchy:
network/timeout problems become TransportError, non-2xx answers become
ApiError with the response body preserved, undecodable bodies become
InvalidResponseError. Requests are never retried.
"""

from __future__ import annotations

import logging
from typing import Any, Type, TypeVar, TYPE_CHECKING

import httpx
from pydantic import BaseModel, ValidationError

from .exceptions import ApiError, InvalidResponseError, TransportError
from .models import FetchResponse, SearchResponse

if TYPE_CHECKING:  # pragma: no cover - import for type checking only
    from .config import AgentConfig

logger = logging.getLogger(__name__)

_ModelT = TypeVar("_ModelT", bound=BaseModel)


class WebClient:
    """Search the web and fetch pages through the hosted API.

    Can be used as a context manager to ensure the connection pool is closed:
        with WebClient(api_key="...") as client:
            response = client.search("query")
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str,
        timeout: float,
        max_results: int | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._max_results = max_results
        self._client = httpx.Client(
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
        )

    @classmethod
    def from_config(cls, cfg: "AgentConfig", *, transport: httpx.BaseTransport | None = None) -> "WebClient":
        """Build a client from configuration, requiring an API key."""
        return cls(
            cfg.require_api_key(),
            base_url=cfg.base_url,
            timeout=cfg.timeout,
            max_results=cfg.max_results,
            transport=transport,
        )

    def __enter__(self) -> "WebClient":
        return self

    def __exit__(self, _exc_type: Any, _exc_val: Any, _exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def search(self, query: str, max_results: int | None = None) -> SearchResponse:
        """Run a web search.

        Args:
            query: Search query string
            max_results: Per-call result limit; falls back to the configured limit

        Returns:
            Parsed search response

        Raises:
            TransportError: If the API could not be reached
            ApiError: If the API answered with a non-2xx status
            InvalidResponseError: If the body is not a valid search response
        """
        limit = max_results if max_results is not None else self._max_results
        payload: dict[str, Any] = {"query": query}
        if limit is not None:
            payload["max_results"] = limit
        return self._post("web_search", payload, SearchResponse, "search")

    def fetch(self, url: str) -> FetchResponse:
        """Fetch and parse a single page.

        Raises:
            TransportError: If the API could not be reached
            ApiError: If the API answered with a non-2xx status
            InvalidResponseError: If the body is not a valid fetch response
        """
        return self._post("web_fetch", {"url": url}, FetchResponse, "fetch")

    def _post(self, endpoint: str, payload: dict[str, Any], model: Type[_ModelT], label: str) -> _ModelT:
        url = f"{self._base_url}/{endpoint}"
        logger.debug("Sending %s request to: %s", label, url)

        try:
            response = self._client.post(url, json=payload)
        except httpx.HTTPError as exc:
            raise TransportError(f"HTTP request failed: {exc}") from exc

        if not response.is_success:
            try:
                body = response.text
            except (httpx.HTTPError, UnicodeDecodeError):
                body = "Unknown error"
            raise ApiError(response.status_code, body)

        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise InvalidResponseError(f"Failed to parse {label} response: {exc}") from exc


__all__ = ["WebClient"]
