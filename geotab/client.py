"""Geotab HTTP client."""

import json
import logging
from typing import Any

import httpx

from .types import Failure, Response, parse_response

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class GeotabClient:
    """HTTP client for the MyGeotab JSON-RPC endpoint.

    Args:
        timeout: Request timeout in seconds.
        transport: Optional httpx transport, e.g. ``httpx.MockTransport``.

    Example:
        >>> client = GeotabClient()
        >>> response = client.post("https://my.geotab.com/apiv1/", {
        ...     "method": "Get",
        ...     "params": {"typeName": "Device", "credentials": creds},
        ... })
    """

    def __init__(
        self,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "GeotabClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def post(self, url: str, payload: dict[str, Any]) -> Response:
        """Send one request and parse the response.

        Server-reported errors come back as a ``Failure``; nothing is raised
        for them here. Transport errors (``httpx.HTTPError``) and malformed
        JSON propagate as-is.

        Args:
            url: Endpoint URL, e.g. ``https://my.geotab.com/apiv1/``.
            payload: Request envelope with ``method`` and ``params``.

        Returns:
            ``Success`` with the raw result, or ``Failure`` with the
            classified error.
        """
        params = payload.get("params", {})
        logger.debug(
            "Geotab %s request for %s to %s",
            payload.get("method"),
            params.get("typeName", "-"),
            url,
        )

        response = self._client.post(url, json=payload, headers=JSON_HEADERS)
        try:
            body = response.json()
        except json.JSONDecodeError:
            response.raise_for_status()
            raise

        if not isinstance(body, dict):
            response.raise_for_status()
            raise ValueError(f"Unexpected Geotab response body: {type(body).__name__}")
        if response.is_error and body.get("error") is None:
            response.raise_for_status()

        result = parse_response(body)
        if isinstance(result, Failure):
            logger.warning(
                "Geotab %s request failed (%s): %s",
                payload.get("method"),
                result.kind.value,
                result.message,
            )
        return result

    def call(self, url: str, payload: dict[str, Any]) -> Any:
        """Send one request and return its ``result``.

        Raises:
            IncorrectCredentialsError: The login credentials were rejected.
            ApiError: Any other server-reported error.
        """
        response = self.post(url, payload)
        if isinstance(response, Failure):
            response.raise_error()
        return response.result
