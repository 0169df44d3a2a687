"""Утилиты для работы с API"""

import time
import asyncio
import logging
from typing import Any, Callable, Optional

from .exceptions import ValidationError

logger = logging.getLogger("WFM")


class Cooldown:
    """Минимальная задержка между началом последовательных запросов"""

    def __init__(self, get_delay: Callable[[], int]):
        # Задержка читается при каждом ожидании, чтобы изменения конфига применялись сразу
        self._get_delay = get_delay
        self._last_request: Optional[float] = None
        self._lock = asyncio.Lock()

    @property
    def last_request(self) -> Optional[float]:
        """Время (time.monotonic) отправки последнего запроса"""
        return self._last_request

    async def wait(self):
        """Дождаться окончания задержки и отметить время нового запроса"""
        async with self._lock:
            if self._last_request is not None:
                delay = self._get_delay() / 1000
                elapsed = time.monotonic() - self._last_request
                if elapsed < delay:
                    remaining = delay - elapsed
                    logger.debug(f"⏳ Ожидание перед запросом: {remaining * 1000:.0f} мс")
                    await asyncio.sleep(remaining)

            self._last_request = time.monotonic()

    def reset(self):
        """Сбросить время последнего запроса"""
        self._last_request = None


def is_int(value: Any) -> bool:
    """bool - подкласс int, но числом здесь не считается"""
    return isinstance(value, int) and not isinstance(value, bool)


def require_positive_int(value: Any, name: str) -> int:
    if not is_int(value) or value <= 0:
        raise ValidationError(f"{name} must be number and >0")
    return value


def require_bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(f"{name} must be boolean")
    return value


def require_rank(rank: Any) -> Optional[int]:
    if rank is not None and not is_int(rank):
        raise ValidationError("Rank must be number")
    return rank


def require_string(value: Any, name: str) -> str:
    """Проверить обязательный строковый параметр (ID или slug)"""
    if not isinstance(value, str) or not value:
        raise ValidationError(f"{name} is required")
    return value
