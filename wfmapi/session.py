"""Управление HTTP сессиями"""

import asyncio
import logging
from typing import Optional, Dict, Any

import aiohttp
from aiohttp import ClientTimeout

from .config import Config
from .utils import Cooldown
from .exceptions import (
    WFMApiError,
    HTTPResponseError,
    AuthorizationError,
    NotFoundError,
    RateLimitError,
    ServerError,
    NoResponseError,
    UnknownError,
)

logger = logging.getLogger("WFM")


class SessionManager:
    """Менеджер HTTP сессий с задержкой между запросами"""

    def __init__(self, config: Config):
        self.config = config
        self.cooldown = Cooldown(lambda: self.config.cooldown)
        self._session: Optional[aiohttp.ClientSession] = None

    async def __aenter__(self):
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def start(self):
        """Создать сессию"""
        if self._session is None or self._session.closed:
            timeout = ClientTimeout(total=self.config.timeout)
            self._session = aiohttp.ClientSession(timeout=timeout)

    async def close(self):
        """Закрыть сессию"""
        if self._session and not self._session.closed:
            await self._session.close()
            self._session = None

    def _get_headers(self) -> Dict[str, str]:
        """Получить заголовки для запроса"""
        headers = {
            "language": self.config.language,
            "crossplay": "true" if self.config.crossplay else "false",
            "platform": self.config.platform,
            "Content-Type": "application/json",
        }

        if self.config.jwt:
            headers["Cookie"] = f"JWT={self.config.jwt}"

        return headers

    async def request(
        self,
        method: str,
        url: str,
        data: Any = None,
        context: str = "",
    ) -> Any:
        """
        Выполнить запрос с учётом задержки и вернуть поле data из ответа

        Args:
            method: HTTP метод
            url: Полный URL
            data: Тело запроса (JSON), если есть
            context: Имя вызывающего метода для логов

        Returns:
            Содержимое поля "data" ответа

        Raises:
            WFMApiError: Нормализованная ошибка запроса
        """
        await self.cooldown.wait()

        if self._session is None or self._session.closed:
            await self.start()

        logger.debug(f"➡️ {method} {url}")

        try:
            async with self._session.request(
                method,
                url,
                headers=self._get_headers(),
                json=data,
            ) as resp:
                if resp.status >= 400:
                    raise await self._response_error(resp)

                body = await resp.json(content_type=None)

        except WFMApiError as e:
            self._log_failure(e, context)
            raise
        except (aiohttp.ClientConnectionError, asyncio.TimeoutError) as e:
            error = NoResponseError()
            self._log_failure(error, context)
            raise error from e
        except (aiohttp.ClientError, ValueError) as e:
            error = UnknownError(str(e) or type(e).__name__)
            self._log_failure(error, context)
            raise error from e

        if isinstance(body, dict):
            return body.get("data")
        return None

    async def _response_error(self, resp: aiohttp.ClientResponse) -> HTTPResponseError:
        """Построить ошибку из ответа со статусом 4xx/5xx"""
        status = resp.status
        status_text = resp.reason

        if status_text == "Unauthorized":
            return AuthorizationError(status=status, status_text=status_text)

        message = f"Request failed with status code {status}"
        try:
            body = await resp.json(content_type=None)
        except (aiohttp.ClientError, ValueError):
            body = None

        if isinstance(body, dict) and body.get("error"):
            error = body["error"]
            message = error if isinstance(error, str) else str(error)

        if status == 404:
            return NotFoundError(message, status, status_text)
        elif status == 429:
            return RateLimitError(message, status, status_text)
        elif status >= 500:
            return ServerError(message, status, status_text)
        return HTTPResponseError(message, status, status_text)

    @staticmethod
    def _log_failure(error: WFMApiError, context: str):
        logger.error(
            f"Request failed in {context} method. {error.message} ({error.status or error.code})"
        )
