from urllib.parse import parse_qs

import httpx
import pytest
import respx

from captchaclient.api import ApiClient
from captchaclient.errors import ApiError, NetworkError, RequestError


def _capturing(captured, text="OK|123"):
    def handler(request):
        captured["request"] = request
        captured["body"] = request.read()
        return httpx.Response(200, text=text)

    return handler


def test_api_client_creation():
    assert ApiClient().post_url == "2captcha.com"
    assert ApiClient("custom.domain.com").post_url == "custom.domain.com"


@pytest.mark.asyncio
async def test_submit_form_data():
    captured = {}
    async with respx.mock() as mock:
        mock.post(host="2captcha.com", path="/in.php").mock(side_effect=_capturing(captured))
        async with ApiClient() as api:
            answer = await api.submit({"method": "post", "key": "placeholder"})
    assert answer == "OK|123"
    assert parse_qs(captured["body"].decode()) == {"method": ["post"], "key": ["placeholder"]}


@pytest.mark.asyncio
async def test_submit_custom_server():
    captured = {}
    async with respx.mock() as mock:
        mock.post(host="custom.domain.com", path="/in.php").mock(side_effect=_capturing(captured))
        async with ApiClient("custom.domain.com") as api:
            assert await api.submit({"method": "post"}) == "OK|123"
    assert str(captured["request"].url) == "https://custom.domain.com/in.php"


@pytest.mark.asyncio
async def test_submit_with_files_is_multipart():
    captured = {}
    async with respx.mock() as mock:
        mock.post(host="2captcha.com", path="/in.php").mock(
            side_effect=_capturing(captured, "OK|456")
        )
        async with ApiClient() as api:
            answer = await api.submit({"method": "post"}, {"imginstructions": b"HINTBYTES"})
    assert answer == "OK|456"
    request = captured["request"]
    assert request.headers["content-type"].startswith("multipart/form-data")
    body = captured["body"]
    assert b'name="imginstructions"; filename="file"' in body
    assert b"HINTBYTES" in body
    assert b'name="method"' in body


@pytest.mark.asyncio
async def test_submit_reads_file_param(tmp_path):
    image = tmp_path / "captcha.png"
    image.write_bytes(b"IMAGEBYTES")
    captured = {}
    async with respx.mock() as mock:
        mock.post(host="2captcha.com", path="/in.php").mock(
            side_effect=_capturing(captured, "OK|789")
        )
        async with ApiClient() as api:
            answer = await api.submit({"method": "post", "file": str(image)})
    assert answer == "OK|789"
    body = captured["body"]
    assert b'name="file"; filename="file"' in body
    assert b"IMAGEBYTES" in body
    assert str(image).encode() not in body


@pytest.mark.asyncio
async def test_submit_missing_file_param(tmp_path):
    async with ApiClient() as api:
        with pytest.raises(FileNotFoundError):
            await api.submit({"file": str(tmp_path / "missing.png")})


@pytest.mark.asyncio
async def test_query_sends_params():
    captured = {}
    async with respx.mock() as mock:
        mock.get(host="2captcha.com", path="/res.php").mock(
            side_effect=_capturing(captured, "12.5")
        )
        async with ApiClient() as api:
            answer = await api.query({"action": "getbalance", "key": "placeholder"})
    assert answer == "12.5"
    assert captured["request"].url.params["action"] == "getbalance"
    assert captured["request"].url.params["key"] == "placeholder"


@pytest.mark.asyncio
async def test_bad_status_is_network_error():
    async with respx.mock() as mock:
        mock.get(host="2captcha.com", path="/res.php").mock(return_value=httpx.Response(500))
        async with ApiClient() as api:
            with pytest.raises(NetworkError) as info:
                await api.query({"action": "get"})
    assert info.value.message == "bad response: 500 Internal Server Error"


@pytest.mark.asyncio
async def test_error_text_is_api_error():
    async with respx.mock() as mock:
        mock.post(host="2captcha.com", path="/in.php").mock(
            return_value=httpx.Response(200, text="ERROR_WRONG_USER_KEY")
        )
        async with ApiClient() as api:
            with pytest.raises(ApiError) as info:
                await api.submit({"method": "post"})
    assert info.value.message == "ERROR_WRONG_USER_KEY"


@pytest.mark.asyncio
async def test_connection_failure_is_request_error():
    async with respx.mock() as mock:
        mock.get(host="2captcha.com", path="/res.php").mock(
            side_effect=httpx.ConnectError("refused")
        )
        async with ApiClient() as api:
            with pytest.raises(RequestError):
                await api.query({"action": "get"})


@pytest.mark.asyncio
async def test_external_client_left_open():
    http = httpx.AsyncClient()
    api = ApiClient(client=http)
    await api.aclose()
    assert http.is_closed is False
    await http.aclose()
    owned = ApiClient()
    await owned.aclose()
    assert owned._client.is_closed is True