"""Тесты задержки между запросами и нормализации ошибок"""

import asyncio
import logging
import time

import aiohttp
import pytest

from wfmapi import (
    Config,
    WFMApi,
    WFMApiError,
    HTTPResponseError,
    AuthorizationError,
    NotFoundError,
    RateLimitError,
    ServerError,
    NoResponseError,
    UnknownError,
)
from wfmapi.session import SessionManager
from wfmapi.utils import Cooldown

from .conftest import make_response

# Погрешность таймера цикла событий
TOLERANCE = 0.01


@pytest.fixture
def manager(fake_http):
    session = SessionManager(Config(cooldown=351))
    session._session = fake_http.session
    return session


class TestCooldown:

    @pytest.mark.asyncio
    async def test_first_request_does_not_wait(self):
        cooldown = Cooldown(lambda: 500)
        start = time.monotonic()
        await cooldown.wait()
        assert time.monotonic() - start < 0.1
        assert cooldown.last_request is not None

    @pytest.mark.asyncio
    async def test_sequential_waits_respect_delay(self):
        cooldown = Cooldown(lambda: 400)
        stamps = []
        for _ in range(3):
            await cooldown.wait()
            stamps.append(cooldown.last_request)

        assert stamps[1] - stamps[0] >= 0.4 - TOLERANCE
        assert stamps[2] - stamps[1] >= 0.4 - TOLERANCE

    @pytest.mark.asyncio
    async def test_no_wait_after_delay_elapsed(self):
        cooldown = Cooldown(lambda: 351)
        await cooldown.wait()
        await asyncio.sleep(0.4)

        start = time.monotonic()
        await cooldown.wait()
        assert time.monotonic() - start < 0.05

    @pytest.mark.asyncio
    async def test_concurrent_waits_are_serialized(self):
        cooldown = Cooldown(lambda: 351)
        stamps = []

        async def worker():
            await cooldown.wait()
            stamps.append(cooldown.last_request)

        await asyncio.gather(worker(), worker(), worker())

        stamps.sort()
        assert stamps[1] - stamps[0] >= 0.351 - TOLERANCE
        assert stamps[2] - stamps[1] >= 0.351 - TOLERANCE

    @pytest.mark.asyncio
    async def test_delay_is_read_on_every_wait(self):
        config = Config(cooldown=5000)
        cooldown = Cooldown(lambda: config.cooldown)
        await cooldown.wait()

        config.cooldown = 351
        start = time.monotonic()
        await cooldown.wait()
        assert time.monotonic() - start < 1

    def test_reset(self):
        cooldown = Cooldown(lambda: 500)
        cooldown._last_request = 1.0
        cooldown.reset()
        assert cooldown.last_request is None


class TestRequestGate:

    @pytest.mark.asyncio
    async def test_two_requests_are_spaced_and_unwrapped(self, fake_http):
        api = WFMApi(config=Config(cooldown=500))
        api.session._session = fake_http.session
        fake_http.queue(
            make_response(body={"apiVersion": "0.1", "data": [{"slug": "a"}]}),
            make_response(body={"apiVersion": "0.1", "data": {"id": "b"}}),
        )

        first = await api.get_all_items()
        second = await api.get_item_info("b")

        assert first == [{"slug": "a"}]
        assert second == {"id": "b"}
        gap = fake_http.calls[1]["time"] - fake_http.calls[0]["time"]
        assert gap >= 0.5 - TOLERANCE

    @pytest.mark.asyncio
    async def test_failed_request_still_counts_for_cooldown(self, manager, fake_http):
        fake_http.queue(
            make_response(500, {"error": "boom"}, "Internal Server Error"),
            make_response(body={"data": 1}),
        )

        with pytest.raises(ServerError):
            await manager.request("GET", "https://x/a")
        assert await manager.request("GET", "https://x/b") == 1

        gap = fake_http.calls[1]["time"] - fake_http.calls[0]["time"]
        assert gap >= 0.351 - TOLERANCE

    @pytest.mark.asyncio
    async def test_missing_data_field(self, manager, fake_http):
        fake_http.queue(make_response(body={"error": None}), make_response(body=[1, 2]))
        assert await manager.request("GET", "https://x") is None
        assert await manager.request("GET", "https://x") is None

    @pytest.mark.asyncio
    async def test_body_sent_as_json(self, manager, fake_http):
        fake_http.queue(make_response(body={"data": {}}), make_response(body={"data": {}}))

        await manager.request("POST", "https://x", data={"quantity": 1})
        assert fake_http.last["json"] == {"quantity": 1}

        await manager.request("GET", "https://x")
        assert fake_http.last["json"] is None

    @pytest.mark.asyncio
    async def test_session_started_lazily(self):
        manager = SessionManager(Config())
        assert manager._session is None
        await manager.start()
        try:
            assert isinstance(manager._session, aiohttp.ClientSession)
            assert manager._session.timeout.total == Config.DEFAULT_TIMEOUT
        finally:
            await manager.close()
        assert manager._session is None


class TestHeaders:

    def test_default_headers(self):
        headers = SessionManager(Config())._get_headers()
        assert headers == {
            "language": "en",
            "crossplay": "true",
            "platform": "pc",
            "Content-Type": "application/json",
        }

    def test_headers_follow_config(self):
        config = Config(jwt="tok", language="ru", platform="ps4", crossplay=False)
        headers = SessionManager(config)._get_headers()
        assert headers["language"] == "ru"
        assert headers["platform"] == "ps4"
        assert headers["crossplay"] == "false"
        assert headers["Cookie"] == "JWT=tok"

    @pytest.mark.asyncio
    async def test_headers_sent_with_request(self, manager, fake_http):
        manager.config.jwt = "tok"
        fake_http.queue(make_response(body={"data": None}))
        await manager.request("GET", "https://x")
        assert fake_http.last["headers"]["Cookie"] == "JWT=tok"


class TestErrorNormalization:

    @pytest.mark.asyncio
    async def test_unauthorized(self, manager, fake_http):
        fake_http.queue(make_response(401, {"error": "bad token"}, "Unauthorized"))

        with pytest.raises(AuthorizationError) as exc:
            await manager.request("GET", "https://x/me", context="get_my_profile")

        error = exc.value
        assert error.status == 401
        assert error.code == "UNAUTHORIZED"
        assert "JWT cookie is probably incorrect" in error.message

    @pytest.mark.asyncio
    async def test_other_4xx_is_not_authorization_error(self, manager, fake_http):
        fake_http.queue(make_response(400, {"error": {"inputs": ["invalid"]}}, "Bad Request"))

        with pytest.raises(HTTPResponseError) as exc:
            await manager.request("POST", "https://x/order")

        error = exc.value
        assert not isinstance(error, AuthorizationError)
        assert error.to_dict() == {
            "isError": True,
            "message": "{'inputs': ['invalid']}",
            "code": "ERR_BAD_REQUEST",
            "status": 400,
            "statusText": "Bad Request",
        }

    @pytest.mark.asyncio
    async def test_message_from_error_field(self, manager, fake_http):
        fake_http.queue(make_response(404, {"error": "app.item.notFound"}, "Not Found"))

        with pytest.raises(NotFoundError) as exc:
            await manager.request("GET", "https://x/item/nope")

        assert exc.value.message == "app.item.notFound"
        assert exc.value.status_text == "Not Found"

    @pytest.mark.asyncio
    async def test_message_without_body(self, manager, fake_http):
        resp = make_response(429, None, "Too Many Requests")
        resp.json.side_effect = ValueError("not json")
        fake_http.queue(resp)

        with pytest.raises(RateLimitError) as exc:
            await manager.request("GET", "https://x")

        assert exc.value.message == "Request failed with status code 429"

    @pytest.mark.asyncio
    async def test_server_error(self, manager, fake_http):
        fake_http.queue(make_response(503, {}, "Service Unavailable"))

        with pytest.raises(ServerError) as exc:
            await manager.request("GET", "https://x")

        assert exc.value.code == "ERR_BAD_RESPONSE"
        assert exc.value.status == 503

    @pytest.mark.asyncio
    async def test_connection_failure(self, manager, fake_http):
        fake_http.queue(aiohttp.ClientConnectionError("connection refused"))

        with pytest.raises(NoResponseError) as exc:
            await manager.request("GET", "https://x")

        assert exc.value.code == "NO_RESPONSE"
        assert exc.value.message == "No response from server"
        assert exc.value.status is None

    @pytest.mark.asyncio
    async def test_timeout(self, manager, fake_http):
        resp = make_response()
        resp.__aenter__.side_effect = asyncio.TimeoutError()
        fake_http.queue(resp)

        with pytest.raises(NoResponseError):
            await manager.request("GET", "https://x")

    @pytest.mark.asyncio
    async def test_unknown_client_error(self, manager, fake_http):
        fake_http.queue(aiohttp.InvalidURL("not a url"))

        with pytest.raises(UnknownError) as exc:
            await manager.request("GET", "not a url")

        assert exc.value.code == "UNKNOWN"
        assert isinstance(exc.value, WFMApiError)

    @pytest.mark.asyncio
    async def test_success_with_invalid_json(self, manager, fake_http):
        resp = make_response(200)
        resp.json.side_effect = ValueError("Expecting value")
        fake_http.queue(resp)

        with pytest.raises(UnknownError, match="Expecting value"):
            await manager.request("GET", "https://x")

    @pytest.mark.asyncio
    async def test_failure_logged_once(self, manager, fake_http, caplog):
        fake_http.queue(make_response(404, {"error": "app.order.notFound"}, "Not Found"))

        with caplog.at_level(logging.ERROR, logger="WFM"):
            with pytest.raises(NotFoundError):
                await manager.request("GET", "https://x", context="get_order_info")

        records = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(records) == 1
        assert records[0].getMessage() == (
            "Request failed in get_order_info method. app.order.notFound (404)"
        )

    @pytest.mark.asyncio
    async def test_no_retry(self, manager, fake_http):
        fake_http.queue(make_response(500, {}, "Internal Server Error"))

        with pytest.raises(ServerError):
            await manager.request("GET", "https://x")

        assert len(fake_http.calls) == 1
