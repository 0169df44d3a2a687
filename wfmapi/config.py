"""Конфигурация клиента"""

import configparser
from pathlib import Path
from typing import Optional, Union

from .exceptions import ValidationError


class Config:
    """Настройки сессии WFMApi клиента"""

    API_URL = "https://api.warframe.market/v2"

    LANGUAGES = ("ko", "ru", "de", "fr", "pt", "zh-hans", "zh-hant", "es", "it", "pl", "uk", "en")
    PLATFORMS = ("pc", "ps4", "xbox", "switch", "mobile")

    DEFAULT_LANGUAGE = "en"
    DEFAULT_PLATFORM = "pc"
    DEFAULT_CROSSPLAY = True

    # Задержка между запросами, мс. Лимит API - 3 запроса в секунду
    DEFAULT_COOLDOWN = 500
    MIN_COOLDOWN = 351

    # Таймауты
    DEFAULT_TIMEOUT = 20

    def __init__(
        self,
        jwt: Optional[str] = None,
        language: str = DEFAULT_LANGUAGE,
        platform: str = DEFAULT_PLATFORM,
        crossplay: bool = DEFAULT_CROSSPLAY,
        cooldown: int = DEFAULT_COOLDOWN,
        timeout: Optional[int] = None,
    ):
        self._jwt: Optional[str] = None
        if jwt is not None:
            self.jwt = jwt
        self.language = language
        self.platform = platform
        self.crossplay = crossplay
        self.cooldown = cooldown
        self.timeout = timeout or self.DEFAULT_TIMEOUT

    @classmethod
    def from_file(cls, path: Union[str, Path], section: str = "WFM") -> "Config":
        """
        Загрузить настройки из CFG файла

        Args:
            path: Путь к файлу (например, configs/_main.cfg)
            section: Имя секции с настройками

        Returns:
            Config: Конфигурация, недостающие ключи берутся по умолчанию
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Файл конфигурации не найден: {path}")

        parser = configparser.ConfigParser()
        parser.read(path, encoding="utf-8")

        config = cls()
        if not parser.has_section(section):
            return config

        cfg = parser[section]

        jwt = cfg.get("jwt", "").strip()
        if jwt:
            config.jwt = jwt
        if "language" in cfg:
            config.language = cfg.get("language").strip()
        if "platform" in cfg:
            config.platform = cfg.get("platform").strip()
        try:
            if "crossplay" in cfg:
                config.crossplay = cfg.getboolean("crossplay")
            if "cooldown" in cfg:
                config.cooldown = cfg.getint("cooldown")
            if "timeout" in cfg:
                config.timeout = cfg.getint("timeout")
        except ValueError as e:
            raise ValidationError(f"Invalid value in [{section}]: {e}") from e

        return config

    # ==================== Свойства ====================

    @property
    def jwt(self) -> Optional[str]:
        return self._jwt

    @jwt.setter
    def jwt(self, cookie: str):
        if not isinstance(cookie, str):
            raise ValidationError("JWT cookie must be string")
        if len(cookie) == 0:
            raise ValidationError("JWT cookie must not be empty")
        self._jwt = cookie

    @property
    def language(self) -> str:
        return self._language

    @language.setter
    def language(self, language: str):
        if not isinstance(language, str):
            raise ValidationError("Language must be string")
        if language not in self.LANGUAGES:
            raise ValidationError(f"Language must be one of: {', '.join(self.LANGUAGES)}")
        self._language = language

    @property
    def platform(self) -> str:
        return self._platform

    @platform.setter
    def platform(self, platform: str):
        if not isinstance(platform, str):
            raise ValidationError("Platform must be string")
        if platform not in self.PLATFORMS:
            raise ValidationError(f"Platform must be one of: {', '.join(self.PLATFORMS)}")
        self._platform = platform

    @property
    def crossplay(self) -> bool:
        return self._crossplay

    @crossplay.setter
    def crossplay(self, crossplay: bool):
        if not isinstance(crossplay, bool):
            raise ValidationError("Crossplay must be boolean")
        self._crossplay = crossplay

    @property
    def cooldown(self) -> int:
        """Задержка между запросами в миллисекундах"""
        return self._cooldown

    @cooldown.setter
    def cooldown(self, time_ms: int):
        if isinstance(time_ms, bool) or not isinstance(time_ms, int) or time_ms <= 0:
            raise ValidationError("Cooldown must be number and >350")
        if time_ms < self.MIN_COOLDOWN:
            raise ValidationError("3 requests per second is the limit, cooldown must be >350ms")
        self._cooldown = time_ms

    @property
    def timeout(self) -> int:
        """Таймаут HTTP запроса в секундах"""
        return self._timeout

    @timeout.setter
    def timeout(self, seconds: int):
        if isinstance(seconds, bool) or not isinstance(seconds, int) or seconds <= 0:
            raise ValidationError("Timeout must be number and >0")
        self._timeout = seconds
