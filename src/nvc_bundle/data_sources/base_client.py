"""
Base client for external data source clients.

Provides: lazy aiohttp session management, a single-attempt JSON request,
structured logging, and the DataSourceError taxonomy. Failures are raised,
never retried; the scheduler re-runs the whole job.
"""

import asyncio
import json
import logging
import time
from abc import ABC, abstractmethod
from typing import Any

import aiohttp
from pydantic import BaseModel

from nvc_bundle.constants import DEFAULT_TIMEOUT

logger = logging.getLogger("nvc_bundle.data_sources")


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ClientConfig(BaseModel):
    """HTTP client settings. ``timeout_seconds=None`` disables the total timeout."""

    timeout_seconds: float | None = DEFAULT_TIMEOUT


# ---------------------------------------------------------------------------
# Request context (for structured logging)
# ---------------------------------------------------------------------------


class RequestContext(BaseModel):
    """Metadata attached to every outgoing request for logging."""

    source: str  # e.g. "nvc"
    method: str  # e.g. "get_bundle"
    params: dict[str, Any] = {}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class DataSourceError(Exception):
    """Base exception for data source failures."""

    def __init__(self, source: str, message: str, status_code: int | None = None):
        self.source = source
        self.status_code = status_code
        super().__init__(f"[{source}] {message}")


class ResponseFormatError(DataSourceError):
    """Raised when a 2xx response body is not the expected JSON document."""

    pass


# ---------------------------------------------------------------------------
# Base client
# ---------------------------------------------------------------------------


class BaseClient(ABC):
    """
    Abstract base for upstream API clients.

    Subclasses implement `_source_name` and their own typed methods that
    call `_request()` or `_rest_get()`.
    """

    def __init__(self, config: ClientConfig | None = None):
        self.config = config or ClientConfig()
        self._session: aiohttp.ClientSession | None = None

    @property
    @abstractmethod
    def _source_name(self) -> str:
        """Identifier for this data source, e.g. 'nvc'."""
        ...

    # -- Session management --------------------------------------------------

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.close()

    # -- Core request --------------------------------------------------------

    async def _request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        context: RequestContext | None = None,
    ) -> Any:
        """
        Make one HTTP request and return the decoded JSON body.

        Parameters
        ----------
        method : str
            HTTP method, e.g. "GET".
        url : str
            Full URL.
        params : dict, optional
            Query string parameters.
        headers : dict, optional
            Additional HTTP headers.
        context : RequestContext, optional
            Logging context.

        Raises
        ------
        DataSourceError
            On a non-2xx status, a timeout or a connection failure.
        ResponseFormatError
            When a 2xx body cannot be decoded as JSON.
        """
        ctx = context or RequestContext(source=self._source_name, method="unknown")
        start = time.monotonic()

        try:
            session = await self._get_session()

            logger.info(
                "Request [%s.%s] %s url=%s",
                ctx.source,
                ctx.method,
                method.upper(),
                url,
            )

            resp = await session.request(
                method.upper(), url, params=params, headers=headers
            )

            if not 200 <= resp.status < 300:
                body = await resp.text()
                raise DataSourceError(
                    ctx.source,
                    f"HTTP {resp.status}: {body[:500]}",
                    status_code=resp.status,
                )

            # The NVC API answers application/json+fhir, which aiohttp's
            # content-type check would reject.
            try:
                data = await resp.json(content_type=None)
            except (json.JSONDecodeError, UnicodeDecodeError) as e:
                raise ResponseFormatError(
                    ctx.source, f"Invalid JSON body: {e}", status_code=resp.status
                ) from e

        except asyncio.TimeoutError as e:
            elapsed = time.monotonic() - start
            raise DataSourceError(ctx.source, f"Timeout after {elapsed:.1f}s") from e

        except aiohttp.ClientError as e:
            raise DataSourceError(ctx.source, f"Connection error: {e}") from e

        logger.info(
            "Success [%s.%s] elapsed=%.2fs",
            ctx.source,
            ctx.method,
            time.monotonic() - start,
        )
        return data

    # -- Convenience methods for subclasses ----------------------------------

    async def _rest_get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        *,
        headers: dict[str, str] | None = None,
        context: RequestContext | None = None,
    ) -> Any:
        """Convenience wrapper for REST GET requests."""
        return await self._request(
            "GET",
            url,
            params=params,
            headers=headers,
            context=context,
        )
