import json

import pytest

from captchaclient.models import (
    AudioLanguage,
    Balance,
    CaptchaResult,
    ExtendedResponse,
    Proxy,
    RecaptchaVersion,
)


def test_proxy_to_json_compact_form():
    proxy = Proxy("HTTPS", "user:password@localhost:3128")
    assert proxy.to_json() == '{"type":"HTTPS","uri":"user:password@localhost:3128"}'


def test_proxy_to_json_round_trip():
    proxy = Proxy("SOCKS5", "localhost:1080")
    assert json.loads(proxy.to_json()) == {"type": "SOCKS5", "uri": "localhost:1080"}


def test_extended_response_fields_and_additional():
    text = json.dumps(
        {"status": 1, "request": "abc", "cookies": {"sid": "value"}, "useragent": "agent"}
    )
    parsed = ExtendedResponse.from_json(text)
    assert parsed.status == 1
    assert parsed.request == "abc"
    assert parsed.code is None
    assert parsed.cookies == {"sid": "value"}
    assert parsed.additional == {"useragent": "agent"}


def test_extended_response_null_optionals():
    parsed = ExtendedResponse.from_json('{"status": 0, "request": null, "cookies": null}')
    assert parsed.status == 0
    assert parsed.request is None
    assert parsed.cookies is None
    assert parsed.additional == {}


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[1, 2]",
        '{"request": "abc"}',
        '{"status": "1"}',
        '{"status": true}',
        '{"status": 1, "request": 5}',
        '{"status": 1, "cookies": {"a": 1}}',
        '{"status": 1, "cookies": []}',
        '{"status": 99999999999}',
    ],
)
def test_extended_response_rejects_bad_input(text):
    with pytest.raises(ValueError):
        ExtendedResponse.from_json(text)


def test_captcha_result_to_dict_plain():
    result = CaptchaResult(captcha_id="42", code="solved")
    assert result.to_dict() == {"captchaId": "42", "code": "solved"}


def test_captcha_result_to_dict_merges_extended():
    result = CaptchaResult(captcha_id="42", extended={"status": 1, "code": "abc"})
    flat = result.to_dict()
    assert flat["captchaId"] == "42"
    assert flat["status"] == 1
    assert flat["code"] == "abc"


def test_audio_language_from_code():
    assert AudioLanguage("en") is AudioLanguage.ENGLISH
    assert AudioLanguage("el") is AudioLanguage.GREEK
    assert [lang.value for lang in AudioLanguage] == ["en", "ru", "de", "el", "pt", "fr"]


def test_audio_language_unknown_code():
    with pytest.raises(ValueError):
        AudioLanguage("xx")


def test_recaptcha_version_values():
    assert RecaptchaVersion.V2.value == "v2"
    assert RecaptchaVersion("v3") is RecaptchaVersion.V3


def test_balance_float():
    assert float(Balance(3.5)) == 3.5
    assert Balance(3.5) == Balance(3.5)