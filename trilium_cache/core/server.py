"""
Implementation of the asynchronous interface to the Trilium server.
"""

from __future__ import annotations

import logging
from logging import Logger
from typing import Any

import httpx

from .exceptions import ServerError

__all__ = ["Server"]


REQUEST_TIMEOUT = 10.0
"""
Default timeout for requests, in seconds.
"""


class Server:
    """
    Asynchronous client for the Trilium server's internal API.

    Every request is a suspension point; there is no caching at this layer.
    Use as an async context manager or invoke {obj}`Server.aclose` when done.
    """

    _host: str
    """
    Host as configured by user.
    """

    _client: httpx.AsyncClient
    """
    Underlying HTTP client.
    """

    _logger: Logger
    """
    Logger to use.
    """

    def __init__(
        self,
        host: str,
        token: str | None = None,
        *,
        timeout: float = REQUEST_TIMEOUT,
        logger: Logger | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        :param host: Hostname of Trilium server, e.g. `http://localhost:8080`
        :param token: Token sent in `Authorization` header, if any
        :param timeout: Request timeout in seconds
        :param logger: Logger to use, or `None` to use default logger
        :param transport: Transport override, e.g. for testing
        """
        self._logger = logger or logging.getLogger()
        self._host = host.rstrip("/")

        headers: dict[str, str] = {}
        if token is not None:
            headers["Authorization"] = token

        self._client = httpx.AsyncClient(
            base_url=self._base_path,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    def __str__(self):
        return f"Server(host={self._host})"

    async def __aenter__(self):
        self._logger.debug(f"Entering context: {self}")
        return self

    async def __aexit__(self, exc_type, exc_val, traceback):
        if exc_type:
            self._logger.error(f"Exiting context with error: {self}")
        else:
            self._logger.debug(f"Exiting context: {self}")

        await self.aclose()

    @property
    def host(self) -> str:
        """
        Host as configured by user.
        """
        return self._host

    @property
    def logger(self) -> Logger:
        return self._logger

    async def get(self, path: str) -> Any:
        """
        Send GET request and return decoded JSON response.

        :param path: Path relative to API base, e.g. `notes/root`
        :raises ServerError: Request failed
        """
        return await self._request("GET", path)

    async def post(self, path: str, body: Any = None) -> Any:
        """
        Send POST request with JSON body and return decoded JSON response.

        :param path: Path relative to API base, e.g. `tree/load`
        :param body: JSON-serializable request body
        :raises ServerError: Request failed
        """
        return await self._request("POST", path, body)

    async def aclose(self):
        """
        Close underlying HTTP client.
        """
        await self._client.aclose()

    @property
    def _base_path(self) -> str:
        """
        Return API base path. This is the host appended with `/api/`.
        """
        return f"{self._host}/api/"

    async def _request(self, method: str, path: str, body: Any = None) -> Any:
        self._logger.debug(f"{method} {path}")

        try:
            response = await self._client.request(method, path, json=body)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            reason = e.response.reason_phrase
            self._logger.error(
                f"{method} {path} failed: status={status}, reason={reason}"
            )
            raise ServerError(path, status, reason) from e
        except httpx.HTTPError as e:
            self._logger.error(f"{method} {path} failed: {e}")
            raise ServerError(path, None, str(e)) from e

        return response.json()
