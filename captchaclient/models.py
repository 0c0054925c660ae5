"""Value types exchanged with the captcha service."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


@dataclass(frozen=True)
class Proxy:
    """Proxy the service should use while solving."""

    proxy_type: str
    uri: str

    def to_json(self) -> str:
        """Serialise as the compact JSON object the parameter renaming expects."""
        return json.dumps(
            {"type": self.proxy_type, "uri": self.uri},
            separators=(",", ":"),
            ensure_ascii=False,
        )


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise ValueError(f"field {key!r} must be a string")
    return value


@dataclass
class ExtendedResponse:
    """Answer of the result endpoint when JSON output is requested."""

    status: int
    request: str | None = None
    code: str | None = None
    cookies: dict[str, str] | None = None
    additional: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, text: str) -> ExtendedResponse:
        """Parse a JSON answer; raise ValueError if it does not fit the shape."""
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("extended response must be a JSON object")
        if "status" not in data:
            raise ValueError("missing field 'status'")
        status = data["status"]
        if isinstance(status, bool) or not isinstance(status, int):
            raise ValueError("field 'status' must be an integer")
        if not _I32_MIN <= status <= _I32_MAX:
            raise ValueError("field 'status' is out of range")

        cookies = data.get("cookies")
        if cookies is not None:
            if not isinstance(cookies, dict) or not all(
                isinstance(value, str) for value in cookies.values()
            ):
                raise ValueError("field 'cookies' must map strings to strings")

        known = {"status", "request", "code", "cookies"}
        return cls(
            status=status,
            request=_optional_str(data, "request"),
            code=_optional_str(data, "code"),
            cookies=dict(cookies) if cookies is not None else None,
            additional={key: value for key, value in data.items() if key not in known},
        )


@dataclass
class CaptchaResult:
    """Result of a solve request."""

    captcha_id: str
    code: str | None = None
    extended: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Flatten into a plain mapping, extended fields merged in."""
        result: dict[str, Any] = {"captchaId": self.captcha_id, "code": self.code}
        if self.extended is not None:
            result.update(self.extended)
        return result


@dataclass(frozen=True)
class Balance:
    """Account balance."""

    amount: float

    def __float__(self) -> float:
        return self.amount


class AudioLanguage(Enum):
    """Languages supported by audio captchas."""

    ENGLISH = "en"
    RUSSIAN = "ru"
    GERMAN = "de"
    GREEK = "el"
    PORTUGUESE = "pt"
    FRENCH = "fr"


class RecaptchaVersion(Enum):
    """reCAPTCHA versions."""

    V2 = "v2"
    V3 = "v3"