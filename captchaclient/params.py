"""Preparation of request parameters and file inputs."""

from __future__ import annotations

import base64
import json
from collections.abc import Mapping, Sequence
from pathlib import Path

import httpx

from .errors import RequestError, ValidationError

_RENAMES = (
    ("caseSensitive", "regsense"),
    ("minLen", "min_len"),
    ("maxLen", "max_len"),
    ("minLength", "min_len"),
    ("maxLength", "max_len"),
    ("hintText", "textinstructions"),
    ("hintImg", "imginstructions"),
    ("url", "pageurl"),
    ("score", "min_score"),
    ("text", "textcaptcha"),
    ("rows", "recaptcharows"),
    ("cols", "recaptchacols"),
    ("previousId", "previousID"),
    ("canSkip", "can_no_answer"),
    ("apiServer", "api_server"),
    ("softId", "soft_id"),
    ("callback", "pingback"),
    ("datas", "data-s"),
)


def is_base64_payload(value: str) -> bool:
    """Tell whether a value is an inline base64 payload rather than a path or URL."""
    return "." not in value and len(value.encode("utf-8")) > 50


async def _download(url: str) -> bytes:
    try:
        async with httpx.AsyncClient(follow_redirects=True) as client:
            response = await client.get(url)
            if response.status_code != 200:
                raise ValidationError(f"File could not be downloaded from url: {url}")
            return response.content
    except httpx.HTTPError as exc:
        raise RequestError(str(exc)) from exc


async def get_method(file: str) -> dict[str, str]:
    """Work out how an image should be sent: inline base64, downloaded, or as a file."""
    if not file:
        raise ValidationError("File required")

    if is_base64_payload(file):
        return {"method": "base64", "body": file}

    if file.startswith("http"):
        content = await _download(file)
        return {"method": "base64", "body": base64.b64encode(content).decode("ascii")}

    if not Path(file).exists():
        raise ValidationError(f"File not found: {file}")

    return {"method": "post", "file": file}


def extract_files(files: Sequence[str], max_files: int) -> dict[str, str]:
    """Number several file paths as file_1, file_2, ... after checking them."""
    if len(files) > max_files:
        raise ValidationError(f"Too many files (max: {max_files})")

    missing = [name for name in files if not Path(name).exists()]
    if missing:
        raise ValidationError(f"File not found: {json.dumps(missing)}")

    return {f"file_{number}": name for number, name in enumerate(files, start=1)}


def check_hint_img(
    params: Mapping[str, str], files: Mapping[str, str]
) -> tuple[dict[str, str], dict[str, str]]:
    """Move an instruction image given as a path from the parameters to the files."""
    params = dict(params)
    files = dict(files)

    hint = params.pop("imginstructions", None)
    if hint is None:
        return params, files

    if is_base64_payload(hint):
        params["imginstructions"] = hint
        return params, files

    if not Path(hint).exists():
        raise ValidationError(f"File not found: {hint}")

    if not files and "file" in params:
        files["file"] = params.pop("file")

    files["imginstructions"] = hint
    return params, files


def rename_params(params: Mapping[str, str]) -> dict[str, str]:
    """Rename friendly parameter names to the names the service expects."""
    remaining = dict(params)
    renamed: dict[str, str] = {}

    for old_key, new_key in _RENAMES:
        if old_key in remaining:
            renamed[new_key] = remaining.pop(old_key)

    proxy = remaining.pop("proxy", None)
    if proxy is not None:
        try:
            proxy_data = json.loads(proxy)
        except ValueError:
            proxy_data = None
        if isinstance(proxy_data, dict):
            uri = proxy_data.get("uri")
            proxy_type = proxy_data.get("type")
            if isinstance(uri, str) and isinstance(proxy_type, str):
                renamed["proxy"] = uri
                renamed["proxytype"] = proxy_type

    renamed.update(remaining)
    return renamed