"""Исключения для WFMApi"""

from typing import Any, Dict, Optional


class WFMApiError(Exception):
    """Базовое исключение для всех ошибок API"""

    is_error = True
    default_code = "UNKNOWN"

    def __init__(
        self,
        message: str = "Unknown error",
        code: Optional[str] = None,
        status: Optional[int] = None,
        status_text: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.status = status
        self.status_text = status_text

    def to_dict(self) -> Dict[str, Any]:
        """Плоская запись ошибки в формате {isError, message, code, status, statusText}"""
        info: Dict[str, Any] = {
            "isError": True,
            "message": self.message,
            "code": self.code,
        }
        if self.status is not None:
            info["status"] = self.status
        if self.status_text is not None:
            info["statusText"] = self.status_text
        return info


class ValidationError(WFMApiError, ValueError):
    """Ошибка валидации входных данных (до отправки запроса)"""
    default_code = "VALIDATION_ERROR"


class MissingAuthError(WFMApiError):
    """Метод требует JWT cookie, но он не установлен"""
    default_code = "AUTH_REQUIRED"


class HTTPResponseError(WFMApiError):
    """Сервер ответил статусом 4xx или 5xx"""

    def __init__(
        self,
        message: str,
        status: int,
        status_text: Optional[str] = None,
        code: Optional[str] = None,
    ):
        if code is None:
            code = "ERR_BAD_RESPONSE" if status >= 500 else "ERR_BAD_REQUEST"
        super().__init__(message, code=code, status=status, status_text=status_text)


class AuthorizationError(HTTPResponseError):
    """Ошибка авторизации (неверный JWT cookie)"""

    def __init__(
        self,
        message: str = "Authorization error. JWT cookie is probably incorrect",
        status: int = 401,
        status_text: Optional[str] = "Unauthorized",
    ):
        super().__init__(message, status, status_text, code="UNAUTHORIZED")


class NotFoundError(HTTPResponseError):
    """Ресурс не найден (404)"""
    pass


class RateLimitError(HTTPResponseError):
    """Превышен лимит запросов (429)"""
    pass


class ServerError(HTTPResponseError):
    """Ошибка сервера (5xx)"""
    pass


class NoResponseError(WFMApiError):
    """Запрос отправлен, но ответа нет (сетевая ошибка, таймаут)"""
    default_code = "NO_RESPONSE"

    def __init__(self, message: str = "No response from server"):
        super().__init__(message)


class UnknownError(WFMApiError):
    """Любая другая ошибка при выполнении запроса"""
    pass
