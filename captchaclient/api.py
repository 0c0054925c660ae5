"""HTTP client for the submit and result endpoints of the service."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from pathlib import Path

import httpx

from .errors import ApiError, NetworkError, RequestError

DEFAULT_SERVER = "2captcha.com"


class ApiClient:
    """Sends captchas to the service and queries it for results."""

    def __init__(
        self, post_url: str | None = None, client: httpx.AsyncClient | None = None
    ) -> None:
        self.post_url = post_url if post_url is not None else DEFAULT_SERVER
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient()

    async def submit(
        self, params: Mapping[str, str], files: Mapping[str, bytes] | None = None
    ) -> str:
        """POST a captcha to the submit endpoint and return the raw answer."""
        url = f"https://{self.post_url}/in.php"
        params = dict(params)

        if files:
            upload = {key: ("file", content) for key, content in files.items()}
            request = self._client.post(url, data=params, files=upload)
        elif "file" in params:
            path = params.pop("file")
            content = await asyncio.to_thread(Path(path).read_bytes)
            request = self._client.post(url, data=params, files={"file": ("file", content)})
        else:
            request = self._client.post(url, data=params)

        return await self._send(request)

    async def query(self, params: Mapping[str, str]) -> str:
        """GET the result endpoint (results, balance, reports) and return the answer."""
        url = f"https://{self.post_url}/res.php"
        return await self._send(self._client.get(url, params=dict(params)))

    async def _send(self, request) -> str:
        try:
            response = await request
        except httpx.HTTPError as exc:
            raise RequestError(str(exc)) from exc

        if response.status_code != 200:
            raise NetworkError(
                f"bad response: {response.status_code} {response.reason_phrase}".rstrip()
            )

        text = response.text
        if "ERROR" in text:
            raise ApiError(text)
        return text

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this object created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()