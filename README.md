# captchaclient

An asynchronous client for the 2Captcha captcha solving service, built on
`httpx`. It submits captchas, polls until they are solved and returns the
answer. Supported types include images, audio, text questions, reCAPTCHA v2/v3,
FunCaptcha, GeeTest (v3 and v4), hCaptcha, KeyCaptcha, Capy, grid, canvas,
coordinates and rotate captchas, Lemin, atbCAPTCHA, Cloudflare Turnstile,
Amazon WAF, MTCaptcha, Friendly Captcha, Tencent, CutCaptcha, DataDome,
CyberSiARA and Yandex Smart Captcha.

## Installation

```
pip install captchaclient
```

## Usage

```python
import asyncio

from captchaclient.captchas import TwoCaptcha
from captchaclient.models import RecaptchaVersion
from captchaclient.solver import TwoCaptchaConfig


async def main():
    async with TwoCaptcha("placeholder", TwoCaptchaConfig()) as solver:
        result = await solver.recaptcha(
            "site-key",
            "https://example.com",
            RecaptchaVersion.V2,
            False,
            None,
        )
        print(result.captcha_id, result.code)

        balance = await solver.balance()
        print(balance.amount)


asyncio.run(main())
```

`TwoCaptcha(api_key, config=None, client=None)` also accepts an existing
`httpx.AsyncClient`; a client passed in this way is not closed by `aclose()`.

### Inputs

- Image-based methods (`normal`, `grid`, `canvas`, `coordinates`, `rotate`)
  accept a local file path, an `http...` URL (downloaded and sent as base64),
  or a base64 string (any value without a dot and longer than 50 bytes).
- `audio` takes an `.mp3` path, an `.mp3` URL or a base64 string, and a
  language given as an `AudioLanguage` member or its code (`"en"`, `"ru"`,
  `"de"`, `"el"`, `"pt"`, `"fr"`).
- `recaptcha` takes a `RecaptchaVersion` or `"v2"`/`"v3"` (default v2) and
  waits up to the reCAPTCHA timeout.
- `canvas` requires `hintText` and/or `hintImg` in `params`.
- `rotate_multiple` takes up to 9 existing file paths.
- `datadome` takes a `captchaclient.models.Proxy(proxy_type, uri)`.

Additional API parameters go in the `params` dictionary; they override the
fixed ones. Common camel-case names such as `caseSensitive`, `minLen`,
`hintText`, `hintImg` or `url` are renamed to the names the service expects
(see `captchaclient.params.rename_params`). A `hintImg` given as a file path is
uploaded as a file.

Any parameter set can also be sent directly with `solver.solve(params,
timeout=None, polling_interval=None)`.

### Configuration

`TwoCaptchaConfig` sets (durations in seconds):

- `soft_id` (default 4580)
- `callback`: a pingback URL; with it set, solving returns a `CaptchaResult`
  holding only the captcha id and does not poll
- `default_timeout` (120) and `recaptcha_timeout` (600)
- `polling_interval` (10)
- `server` (default `2captcha.com`)
- `extended_response`: ask for JSON results; a parsed answer is returned in
  `CaptchaResult.extended`, otherwise the raw text is in `CaptchaResult.code`

`CaptchaResult.to_dict()` returns `captchaId`, `code` and any extended fields
as one mapping.

### Reporting answers

```python
await solver.report(result.captcha_id, True)   # answer was correct
await solver.report(result.captcha_id, False)  # answer was wrong
```

### Errors

Everything raised derives from `captchaclient.errors.TwoCaptchaError`:

- `ValidationError`: bad input (missing file, too many files, unsupported
  language or version, a file URL that could not be downloaded)
- `NetworkError`: the service answered with an HTTP status other than 200
- `ApiError`: the service reported an error or gave an unrecognised answer
- `CaptchaTimeoutError`: no answer came within the timeout
- `RequestError`: the HTTP request itself failed

## Limitations

The package is an asynchronous library only: it has no synchronous interface
and no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```