"""Solver with one method for each captcha type the service supports."""

from __future__ import annotations

import asyncio
import base64
from collections.abc import Mapping, Sequence
from pathlib import Path

import httpx

from .errors import RequestError, ValidationError
from .models import AudioLanguage, CaptchaResult, Proxy, RecaptchaVersion
from .params import extract_files, get_method, is_base64_payload
from .solver import BaseSolver


def _merge(fixed: Mapping[str, str], params: Mapping[str, str] | None) -> dict[str, str]:
    merged = dict(fixed)
    if params:
        merged.update(params)
    return merged


async def _download(url: str) -> bytes:
    try:
        async with httpx.AsyncClient(follow_redirects=True) as client:
            response = await client.get(url)
    except httpx.HTTPError as exc:
        raise RequestError(str(exc)) from exc
    if response.status_code != 200:
        raise ValidationError(f"File could not be downloaded from url: {url}")
    return response.content


class TwoCaptcha(BaseSolver):
    """Client that solves every captcha type offered by the service."""

    async def normal(
        self, file: str, params: Mapping[str, str] | None = None
    ) -> CaptchaResult:
        """Solve an image captcha given as a path, URL or base64 string."""
        return await self.solve(_merge(await get_method(file), params))

    async def audio(
        self,
        file: str,
        lang: AudioLanguage | str,
        params: Mapping[str, str] | None = None,
    ) -> CaptchaResult:
        """Solve an audio captcha given as an .mp3 path, .mp3 URL or base64 string."""
        try:
            language = AudioLanguage(lang)
        except ValueError as exc:
            raise ValidationError(f"Unsupported audio language: {lang}") from exc

        if is_base64_payload(file):
            body = file
        elif file.endswith(".mp3") and file.startswith("http"):
            body = base64.b64encode(await _download(file)).decode("ascii")
        elif file.endswith(".mp3"):
            content = await asyncio.to_thread(Path(file).read_bytes)
            body = base64.b64encode(content).decode("ascii")
        else:
            raise ValidationError(
                "File extension is not .mp3 or it is not a base64 string."
            )

        fixed = {"body": body, "method": "audio", "lang": language.value}
        return await self.solve(_merge(fixed, params))

    async def text(
        self, text: str, params: Mapping[str, str] | None = None
    ) -> CaptchaResult:
        """Solve a text question captcha."""
        return await self.solve(_merge({"text": text, "method": "post"}, params))

    async def recaptcha(
        self,
        sitekey: str,
        url: str,
        version: RecaptchaVersion | str | None = None,
        enterprise: bool | None = None,
        params: Mapping[str, str] | None = None,
    ) -> CaptchaResult:
        """Solve reCAPTCHA v2 or v3, waiting up to the reCAPTCHA timeout."""
        try:
            chosen = RecaptchaVersion(version) if version is not None else RecaptchaVersion.V2
        except ValueError as exc:
            raise ValidationError(f"Unsupported reCAPTCHA version: {version}") from exc
        fixed = {
            "googlekey": sitekey,
            "url": url,
            "method": "userrecaptcha",
            "version": chosen.value,
            "enterprise": "1" if enterprise else "0",
        }
        return await self.solve(_merge(fixed, params), timeout=self.recaptcha_timeout)

    async def funcaptcha(
        self, sitekey: str, url: str, params: Mapping[str, str] | None = None
    ) -> CaptchaResult:
        """Solve FunCaptcha."""
        fixed = {"publickey": sitekey, "url": url, "method": "funcaptcha"}
        return await self.solve(_merge(fixed, params))

    async def geetest(
        self,
        gt: str,
        challenge: str,
        url: str,
        params: Mapping[str, str] | None = None,
    ) -> CaptchaResult:
        """Solve a GeeTest captcha."""
        fixed = {"gt": gt, "challenge": challenge, "url": url, "method": "geetest"}
        return await self.solve(_merge(fixed, params))

    async def hcaptcha(
        self, sitekey: str, url: str, params: Mapping[str, str] | None = None
    ) -> CaptchaResult:
        """Solve hCaptcha."""
        fixed = {"sitekey": sitekey, "url": url, "method": "hcaptcha"}
        return await self.solve(_merge(fixed, params))

    async def keycaptcha(
        self,
        s_s_c_user_id: str,
        s_s_c_session_id: str,
        s_s_c_web_server_sign: str,
        s_s_c_web_server_sign2: str,
        url: str,
        params: Mapping[str, str] | None = None,
    ) -> CaptchaResult:
        """Solve KeyCaptcha."""
        fixed = {
            "s_s_c_user_id": s_s_c_user_id,
            "s_s_c_session_id": s_s_c_session_id,
            "s_s_c_web_server_sign": s_s_c_web_server_sign,
            "s_s_c_web_server_sign2": s_s_c_web_server_sign2,
            "url": url,
            "method": "keycaptcha",
        }
        return await self.solve(_merge(fixed, params))

    async def capy(
        self, sitekey: str, url: str, params: Mapping[str, str] | None = None
    ) -> CaptchaResult:
        """Solve a Capy captcha."""
        fixed = {"captchakey": sitekey, "url": url, "method": "capy"}
        return await self.solve(_merge(fixed, params))

    async def grid(
        self, file: str, params: Mapping[str, str] | None = None
    ) -> CaptchaResult:
        """Solve a grid image captcha."""
        fixed = await get_method(file)
        fixed["recaptcha"] = "1"
        return await self.solve(_merge(fixed, params))

    async def canvas(
        self, file: str, params: Mapping[str, str] | None = None
    ) -> CaptchaResult:
        """Solve a canvas image captcha; needs hintText and/or hintImg."""
        given = params or {}
        if "hintText" not in given and "hintImg" not in given:
            raise ValidationError("parameters required: hintText and/or hintImg")
        fixed = await get_method(file)
        fixed["recaptcha"] = "1"
        fixed["canvas"] = "1"
        return await self.solve(_merge(fixed, params))

    async def coordinates(
        self, file: str, params: Mapping[str, str] | None = None
    ) -> CaptchaResult:
        """Solve a click-coordinates image captcha."""
        fixed = await get_method(file)
        fixed["coordinatescaptcha"] = "1"
        return await self.solve(_merge(fixed, params))

    async def rotate(
        self, file: str, params: Mapping[str, str] | None = None
    ) -> CaptchaResult:
        """Solve a rotate captcha from a single image file."""
        method = await get_method(file)
        fixed: dict[str, str] = {}
        if "file" in method:
            fixed["file"] = method["file"]
        fixed["method"] = "rotatecaptcha"
        return await self.solve(_merge(fixed, params))

    async def rotate_multiple(
        self, files: Sequence[str], params: Mapping[str, str] | None = None
    ) -> CaptchaResult:
        """Solve a rotate captcha made of several image files."""
        numbered = extract_files(files, self.max_files)
        fixed = {"method": "rotatecaptcha", **numbered}
        return await self.solve(_merge(fixed, params))

    async def geetest_v4(
        self, captcha_id: str, url: str, params: Mapping[str, str] | None = None
    ) -> CaptchaResult:
        """Solve a GeeTest v4 captcha."""
        fixed = {"captcha_id": captcha_id, "url": url, "method": "geetest_v4"}
        return await self.solve(_merge(fixed, params))

    async def lemin(
        self,
        captcha_id: str,
        div_id: str,
        url: str,
        params: Mapping[str, str] | None = None,
    ) -> CaptchaResult:
        """Solve a Lemin cropped captcha."""
        fixed = {
            "captcha_id": captcha_id,
            "div_id": div_id,
            "url": url,
            "method": "lemin",
        }
        return await self.solve(_merge(fixed, params))

    async def atb_captcha(
        self,
        app_id: str,
        api_server: str,
        url: str,
        params: Mapping[str, str] | None = None,
    ) -> CaptchaResult:
        """Solve atbCAPTCHA."""
        fixed = {
            "app_id": app_id,
            "api_server": api_server,
            "url": url,
            "method": "atb_captcha",
        }
        return await self.solve(_merge(fixed, params))

    async def turnstile(
        self, sitekey: str, url: str, params: Mapping[str, str] | None = None
    ) -> CaptchaResult:
        """Solve Cloudflare Turnstile."""
        fixed = {"sitekey": sitekey, "url": url, "method": "turnstile"}
        return await self.solve(_merge(fixed, params))

    async def amazon_waf(
        self,
        sitekey: str,
        iv: str,
        context: str,
        url: str,
        params: Mapping[str, str] | None = None,
    ) -> CaptchaResult:
        """Solve an Amazon WAF captcha."""
        fixed = {
            "sitekey": sitekey,
            "iv": iv,
            "context": context,
            "url": url,
            "method": "amazon_waf",
        }
        return await self.solve(_merge(fixed, params))

    async def mtcaptcha(
        self, sitekey: str, url: str, params: Mapping[str, str] | None = None
    ) -> CaptchaResult:
        """Solve MTCaptcha."""
        fixed = {"sitekey": sitekey, "url": url, "method": "mt_captcha"}
        return await self.solve(_merge(fixed, params))

    async def friendly_captcha(
        self, sitekey: str, url: str, params: Mapping[str, str] | None = None
    ) -> CaptchaResult:
        """Solve Friendly Captcha."""
        fixed = {"sitekey": sitekey, "url": url, "method": "friendly_captcha"}
        return await self.solve(_merge(fixed, params))

    async def tencent(
        self, app_id: str, url: str, params: Mapping[str, str] | None = None
    ) -> CaptchaResult:
        """Solve a Tencent captcha."""
        fixed = {"app_id": app_id, "url": url, "method": "tencent"}
        return await self.solve(_merge(fixed, params))

    async def cutcaptcha(
        self,
        misery_key: str,
        apikey: str,
        url: str,
        params: Mapping[str, str] | None = None,
    ) -> CaptchaResult:
        """Solve CutCaptcha."""
        fixed = {
            "misery_key": misery_key,
            "api_key": apikey,
            "url": url,
            "method": "cutcaptcha",
        }
        return await self.solve(_merge(fixed, params))

    async def datadome(
        self,
        captcha_url: str,
        pageurl: str,
        user_agent: str,
        proxy: Proxy,
        params: Mapping[str, str] | None = None,
    ) -> CaptchaResult:
        """Solve a DataDome captcha through the given proxy."""
        fixed = {
            "method": "datadome",
            "captcha_url": captcha_url,
            "pageurl": pageurl,
            "userAgent": user_agent,
            "proxy": proxy.to_json(),
        }
        return await self.solve(_merge(fixed, params))

    async def cybersiara(
        self,
        master_url_id: str,
        pageurl: str,
        user_agent: str,
        params: Mapping[str, str] | None = None,
    ) -> CaptchaResult:
        """Solve a CyberSiARA captcha."""
        fixed = {
            "method": "cybersiara",
            "master_url_id": master_url_id,
            "pageurl": pageurl,
            "userAgent": user_agent,
        }
        return await self.solve(_merge(fixed, params))

    async def yandex_smart(
        self, sitekey: str, url: str, params: Mapping[str, str] | None = None
    ) -> CaptchaResult:
        """Solve a Yandex Smart captcha."""
        fixed = {"sitekey": sitekey, "url": url, "method": "yandex"}
        return await self.solve(_merge(fixed, params))