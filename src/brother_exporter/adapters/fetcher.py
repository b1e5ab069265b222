"""HTTP adapter that fetches the maintenance CSV from the device."""

import asyncio

import httpx

from brother_exporter.core.exceptions import FetchTimeoutError, ProtocolError, TransportError
from brother_exporter.core.logs import get_logger

logger = get_logger(__name__)

MAX_REDIRECTS = 10


class HttpSnapshotFetcher:
    """Fetches one CSV snapshot per call with a bounded deadline.

    Implements SnapshotFetcherPort. There is no retry and no caching:
    every call issues one GET request, following at most ``MAX_REDIRECTS``
    redirects.

    Args:
        url: Full http(s) URL of the CSV file on the device.
        timeout: Deadline for the whole request in seconds.
        transport: Optional httpx transport (tests pass a MockTransport).

    Raises:
        ValueError: If ``timeout`` is not positive or ``url`` is not an
            absolute http(s) URL.
    """

    def __init__(
        self,
        url: str,
        timeout: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not timeout > 0:
            raise ValueError(f"timeout must be greater than 0, got {timeout!r}")
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as e:
            raise ValueError(f"invalid URL {url!r}: {e}") from e
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise ValueError(f"URL must be an absolute http(s) URL, got {url!r}")
        self._url = url
        self._timeout = timeout
        self._transport = transport

    @property
    def url(self) -> str:
        return self._url

    @property
    def timeout(self) -> float:
        return self._timeout

    async def fetch(self) -> str:
        """GET the snapshot and return its body text.

        Redirects are followed; only the final response's status counts.

        Returns:
            The response body decoded as text.

        Raises:
            FetchTimeoutError: If the request exceeds the deadline.
            TransportError: If the connection fails, the redirect limit is
                exceeded or the body cannot be decoded.
            ProtocolError: If the final status is not 200 OK.
        """
        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=httpx.Timeout(self._timeout),
            follow_redirects=True,
            max_redirects=MAX_REDIRECTS,
        ) as client:
            try:
                response = await asyncio.wait_for(client.get(self._url), self._timeout)
            except (httpx.TimeoutException, asyncio.TimeoutError) as e:
                raise FetchTimeoutError(self._url, self._timeout) from e
            except httpx.RequestError as e:
                raise TransportError(f"request to {self._url} failed: {e!r}") from e

        if response.status_code != httpx.codes.OK:
            raise ProtocolError(self._url, response.status_code)
        logger.debug(
            "fetched snapshot",
            extra={"target": self._url, "body_size": len(response.content)},
        )
        return response.text
