"""Core solver: submitting captchas, polling for answers and account operations."""

from __future__ import annotations

import asyncio
import json
import time
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import httpx

from .api import ApiClient
from .errors import ApiError, CaptchaTimeoutError, NetworkError
from .models import Balance, CaptchaResult, ExtendedResponse
from .params import check_hint_img, rename_params

DEFAULT_SOFT_ID = 4580
DEFAULT_TIMEOUT = 120.0
DEFAULT_RECAPTCHA_TIMEOUT = 600.0
DEFAULT_POLLING_INTERVAL = 10.0
MAX_FILES = 9

_NOT_READY = "CAPCHA_NOT_READY"


@dataclass(frozen=True)
class TwoCaptchaConfig:
    """Options for a solver; durations are in seconds, unset values take defaults."""

    soft_id: int | None = None
    callback: str | None = None
    default_timeout: float | None = None
    recaptcha_timeout: float | None = None
    polling_interval: float | None = None
    server: str | None = None
    extended_response: bool = False


def _pick(value: float | None, default: float) -> float:
    return default if value is None else value


class BaseSolver:
    """Submits captchas to the service, waits for answers and manages the account."""

    def __init__(
        self,
        api_key: str,
        config: TwoCaptchaConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        config = config if config is not None else TwoCaptchaConfig()
        self.api_key = api_key
        self.soft_id = config.soft_id if config.soft_id is not None else DEFAULT_SOFT_ID
        self.callback = config.callback
        self.default_timeout = _pick(config.default_timeout, DEFAULT_TIMEOUT)
        self.recaptcha_timeout = _pick(config.recaptcha_timeout, DEFAULT_RECAPTCHA_TIMEOUT)
        self.polling_interval = _pick(config.polling_interval, DEFAULT_POLLING_INTERVAL)
        self.extended_response = config.extended_response
        self.max_files = MAX_FILES
        self.api = ApiClient(config.server, client)

    async def solve(
        self,
        params: Mapping[str, str],
        timeout: float | None = None,
        polling_interval: float | None = None,
    ) -> CaptchaResult:
        """Send a captcha and, unless a callback is configured, wait for its answer."""
        captcha_id = await self._send(params)
        result = CaptchaResult(captcha_id=captcha_id)

        if self.callback is not None:
            return result

        code = await self._wait_result(
            captcha_id,
            _pick(timeout, self.default_timeout),
            _pick(polling_interval, self.polling_interval),
        )

        if self.extended_response:
            try:
                extended = ExtendedResponse.from_json(code)
            except ValueError:
                result.code = code
            else:
                result.extended = self._flatten_extended(extended)
        else:
            result.code = code
        return result

    @staticmethod
    def _flatten_extended(extended: ExtendedResponse) -> dict[str, Any]:
        flat: dict[str, Any] = {"status": extended.status}
        if extended.request is not None:
            flat["code"] = extended.request
        if extended.cookies is not None:
            flat["cookies"] = dict(extended.cookies)
        flat.update(extended.additional)
        return flat

    async def _wait_result(
        self, captcha_id: str, timeout: float, polling_interval: float
    ) -> str:
        start = time.monotonic()
        while time.monotonic() - start < timeout:
            try:
                return await self._get_result(captcha_id)
            except NetworkError:
                await asyncio.sleep(polling_interval)
        raise CaptchaTimeoutError(f"timeout {int(timeout)} exceeded")

    async def _send(self, params: Mapping[str, str]) -> str:
        prepared = rename_params(self._default_params(params))
        prepared, files = check_hint_img(prepared, {})

        if files:
            contents = {
                key: await asyncio.to_thread(Path(path).read_bytes)
                for key, path in files.items()
            }
            response = await self.api.submit(prepared, contents)
        else:
            response = await self.api.submit(prepared)

        if not response.startswith("OK|"):
            raise ApiError(f"cannot recognize response {response}")
        return response[3:]

    async def _get_result(self, captcha_id: str) -> str:
        params = {"key": self.api_key, "action": "get", "id": captcha_id}
        if self.extended_response:
            params["json"] = "1"

        response = await self.api.query(params)

        if self.extended_response:
            try:
                data = json.loads(response)
            except ValueError as exc:
                raise ApiError(f"invalid JSON response: {response}") from exc
            status = data.get("status") if isinstance(data, dict) else None
            if isinstance(status, bool) or not isinstance(status, int):
                status = None
            if status == 0:
                raise NetworkError("CAPTCHA_NOT_READY")
            if status != 1:
                raise ApiError(f"Unexpected status in response: {response}")
            return response

        if response == _NOT_READY:
            raise NetworkError("CAPTCHA_NOT_READY")
        if not response.startswith("OK|"):
            raise ApiError(f"cannot recognize response {response}")
        return response[3:]

    async def balance(self) -> Balance:
        """Return the account balance."""
        response = await self.api.query({"key": self.api_key, "action": "getbalance"})
        try:
            amount = float(response)
        except ValueError as exc:
            raise ApiError(f"Invalid balance response: {response}") from exc
        return Balance(amount)

    async def report(self, captcha_id: str, correct: bool) -> None:
        """Report whether the answer to a captcha was correct."""
        await self.api.query(
            {
                "key": self.api_key,
                "action": "reportgood" if correct else "reportbad",
                "id": captcha_id,
            }
        )

    def _default_params(self, params: Mapping[str, str]) -> dict[str, str]:
        merged = dict(params)
        merged["key"] = self.api_key
        if self.callback is not None:
            merged["callback"] = self.callback
        if self.soft_id is not None:
            merged["softId"] = str(self.soft_id)
        return merged

    async def aclose(self) -> None:
        """Release the HTTP resources held by the solver."""
        await self.api.aclose()

    async def __aenter__(self) -> BaseSolver:
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()