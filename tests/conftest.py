"""Общие фикстуры: клиент с подменённой aiohttp сессией"""

import time
from unittest.mock import AsyncMock, MagicMock

import pytest

from wfmapi import WFMApi, Config


def make_response(status=200, body=None, reason="OK"):
    """Ответ aiohttp, пригодный для `async with session.request(...)`"""
    resp = AsyncMock()
    resp.status = status
    resp.reason = reason
    resp.json = AsyncMock(return_value=body)
    resp.__aenter__ = AsyncMock(return_value=resp)
    resp.__aexit__ = AsyncMock(return_value=None)
    return resp


class FakeHTTP:
    """Подмена aiohttp.ClientSession с журналом запросов"""

    def __init__(self):
        self.session = MagicMock()
        self.session.closed = False
        self.session.close = AsyncMock()
        self.session.request = MagicMock(side_effect=self._request)
        self.calls = []
        self._responses = []

    def queue(self, *responses):
        self._responses.extend(responses)

    def _request(self, method, url, headers=None, json=None):
        self.calls.append({
            "method": method,
            "url": url,
            "headers": headers,
            "json": json,
            "time": time.monotonic(),
        })
        response = self._responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def fake_http():
    return FakeHTTP()


@pytest.fixture
def api(fake_http):
    """Клиент без задержки между запросами и без настоящей сети"""
    client = WFMApi(config=Config())
    client.session._session = fake_http.session
    client.session.cooldown.wait = AsyncMock()
    return client


@pytest.fixture
def auth_api(api):
    api.jwt = "test-jwt-token"
    return api
