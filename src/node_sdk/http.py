"""
HTTP Client - Timeout-bounded HTTP requests for nodes.

All HTTP calls MUST use timeouts (sync-Celery requirement).
There is no retry or backoff here; a failed call fails once.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests
from requests.exceptions import Timeout, RequestException


logger = logging.getLogger(__name__)

# Default timeout in seconds (REQUIRED for sync-Celery)
DEFAULT_TIMEOUT = 30


class NodeTimeoutError(Exception):
    """Raised when an HTTP request times out."""

    def __init__(self, message: str, timeout: float, url: str):
        self.timeout = timeout
        self.url = url
        super().__init__(message)


class HttpApiError(Exception):
    """Network failure or non-2xx HTTP status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_body: Optional[str] = None,
        url: Optional[str] = None,
        method: Optional[str] = None,
    ):
        self.status_code = status_code
        self.response_body = response_body
        self.url = url
        self.method = method
        super().__init__(message)


class HttpResponse:
    """Thin wrapper over requests.Response."""

    def __init__(self, response: requests.Response):
        self._response = response

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def text(self) -> str:
        return self._response.text

    @property
    def ok(self) -> bool:
        """True if status code is 2xx."""
        return self._response.ok

    def json(self) -> Any:
        """
        Parse response as JSON.

        Raises:
            HttpApiError: If the body is not JSON
        """
        try:
            return self._response.json()
        except ValueError as e:
            raise HttpApiError(
                message=f"Response is not valid JSON: {e}",
                status_code=self.status_code,
                response_body=self.text[:1000] if self.text else None,
                url=str(self._response.url),
            ) from e

    def raise_for_status(self) -> None:
        """Raise HttpApiError if status code indicates error."""
        if not self.ok:
            raise HttpApiError(
                message=f"HTTP {self.status_code}: {self._response.reason}",
                status_code=self.status_code,
                response_body=self.text[:1000] if self.text else None,
                url=str(self._response.url),
                method=self._response.request.method if self._response.request else None,
            )


class HttpClient:
    """
    HTTP client with timeout enforcement and default headers.

    SYNC-CELERY SAFE: All requests have explicit timeouts.

    Usage:
        client = HttpClient(default_headers={"X-Shopify-Access-Token": token})
        response = client.request("POST", url, json={"query": "{ shop { name } }"})
        data = response.json()
    """

    def __init__(
        self,
        default_headers: Optional[Dict[str, str]] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.timeout = timeout
        self.headers: Dict[str, str] = dict(default_headers or {})

    def request(
        self,
        method: str,
        url: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> HttpResponse:
        """
        Make HTTP request with timeout enforcement.

        Raises:
            NodeTimeoutError: If request times out
            HttpApiError: If the request could not be sent
        """
        logger.debug(f"{method} {url}")

        try:
            response = requests.request(
                method=method,
                url=url,
                json=json,
                headers=self.headers,
                timeout=self.timeout,  # REQUIRED for sync-Celery
            )
            return HttpResponse(response)

        except Timeout as e:
            raise NodeTimeoutError(
                message=f"Request timed out after {self.timeout}s",
                timeout=self.timeout,
                url=url,
            ) from e

        except RequestException as e:
            raise HttpApiError(
                message=f"Request failed: {e}",
                url=url,
                method=method,
            ) from e


def post_json(
    url: str,
    headers: Dict[str, str],
    body: Dict[str, Any],
    timeout: float = DEFAULT_TIMEOUT,
) -> Any:
    """
    POST a JSON body and return the parsed JSON response.

    Raises:
        HttpApiError: On non-2xx status, network failure or non-JSON body
        NodeTimeoutError: If the request times out
    """
    client = HttpClient(default_headers=headers, timeout=timeout)
    response = client.request("POST", url, json=body)
    response.raise_for_status()
    return response.json()
