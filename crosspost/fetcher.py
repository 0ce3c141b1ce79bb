from __future__ import annotations

import asyncio
from typing import Any, Sequence

import httpx

from .config_schema import HttpConfig
from .errors import FetchError
from .run_log import RunLogger


class JsonFetcher:
    """
    Fetch batches of JSON documents concurrently over HTTPS.

    A batch is all-or-nothing: every request runs to completion, then the first
    failure in request order (if any) is raised as FetchError. Successful
    batches come back in request order, whatever order the responses arrived in.
    """

    def __init__(
        self,
        http: HttpConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        logger: RunLogger | None = None,
    ) -> None:
        self._http = http or HttpConfig()
        self._transport = transport
        self._logger = logger

        if self._http.insecure_skip_tls_verify and logger is not None:
            logger.warning("tls_verification_disabled")

    def fetch_one(self, location: str) -> Any:
        return self.fetch_all([location])[0]

    def fetch_all(self, locations: Sequence[str]) -> list[Any]:
        urls = list(locations)
        if not urls:
            return []
        return asyncio.run(self._fetch_batch(urls))

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers={"User-Agent": self._http.user_agent, "Accept": "application/json"},
            timeout=self._http.timeout_seconds,
            verify=not self._http.insecure_skip_tls_verify,
            transport=self._transport,
        )

    async def _fetch_batch(self, urls: list[str]) -> list[Any]:
        async with self._client() as client:
            results = await asyncio.gather(
                *(self._get_json(client, url) for url in urls),
                return_exceptions=True,
            )

        for url, result in zip(urls, results):
            if isinstance(result, FetchError):
                raise result
            if isinstance(result, BaseException):
                raise FetchError(url, "transport", result) from result

        return list(results)

    async def _get_json(self, client: httpx.AsyncClient, url: str) -> Any:
        try:
            resp = await client.get(url)
        except httpx.HTTPError as e:
            # Certificate rejections surface here as httpx.ConnectError.
            raise FetchError(url, "transport", e) from e

        if resp.status_code != 200:
            raise FetchError(url, "status", f"HTTP {resp.status_code} {resp.reason_phrase}")

        try:
            return resp.json()
        except ValueError as e:
            raise FetchError(url, "decode", e) from e
