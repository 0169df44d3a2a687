"""Основной клиент API"""

import logging
from typing import Optional, List, Dict, Any

from .config import Config
from .session import SessionManager
from .exceptions import MissingAuthError, ValidationError
from .utils import (
    is_int,
    require_bool,
    require_positive_int,
    require_rank,
    require_string,
)

logger = logging.getLogger("WFM")


class WFMApi:
    """
    Клиент для Warframe.Market v2 API

    Пример использования:
        async with WFMApi(jwt="your_jwt_cookie") as api:
            top = await api.get_top_item_orders("banshee_prime_set")
            item = await api.get_item_info("banshee_prime_set")
            order = await api.add_order(item["id"], "sell", top["sell"][0]["platinum"])
    """

    def __init__(
        self,
        jwt: Optional[str] = None,
        config: Optional[Config] = None,
    ):
        """
        Инициализация клиента

        Args:
            jwt: JWT cookie пользователя (нужен только для работы со своими заказами)
            config: Готовая конфигурация (опционально)
        """
        self.config = config or Config()
        if jwt is not None:
            self.config.jwt = jwt
        self.session = SessionManager(self.config)

    async def __aenter__(self):
        await self.session.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.session.close()

    async def close(self):
        """Закрыть сессию"""
        await self.session.close()

    # ==================== Настройки ====================

    @property
    def jwt(self) -> Optional[str]:
        return self.config.jwt

    @jwt.setter
    def jwt(self, cookie: str):
        self.config.jwt = cookie

    @property
    def language(self) -> str:
        return self.config.language

    @language.setter
    def language(self, language: str):
        self.config.language = language

    @property
    def platform(self) -> str:
        return self.config.platform

    @platform.setter
    def platform(self, platform: str):
        self.config.platform = platform

    @property
    def crossplay(self) -> bool:
        return self.config.crossplay

    @crossplay.setter
    def crossplay(self, crossplay: bool):
        self.config.crossplay = crossplay

    @property
    def cooldown(self) -> int:
        return self.config.cooldown

    @cooldown.setter
    def cooldown(self, time_ms: int):
        self.config.cooldown = time_ms

    # ==================== Внутренние методы ====================

    def _check_auth(self, context: str):
        """Проверить, что JWT cookie установлен"""
        if not self.config.jwt:
            raise MissingAuthError(
                f"JWT cookie is required for WFMApi.{context}. "
                f"Set it with WFMApi.jwt = 'YOUR_JWT_COOKIE'"
            )

    def _url(self, path: str) -> str:
        return f"{self.config.API_URL}{path}"

    # ==================== Заказы ====================

    async def add_order(
        self,
        item_id: str,
        order_type: str,
        platinum: int,
        quantity: int = 1,
        visible: bool = True,
        rank: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Разместить новый заказ

        Args:
            item_id: ID предмета
            order_type: Тип заказа ('sell' или 'buy')
            platinum: Цена в платине
            quantity: Количество
            visible: Виден ли заказ
            rank: Ранг мода или арканы (опционально)

        Returns:
            dict: Созданный заказ
        """
        self._check_auth("add_order")

        require_string(item_id, "Item ID")
        if order_type not in ("sell", "buy"):
            raise ValidationError('Order type must be "sell" or "buy"')
        require_positive_int(platinum, "Platinum")
        require_positive_int(quantity, "Quantity")
        require_bool(visible, "Visible")
        require_rank(rank)

        data = {
            "itemId": item_id,
            "type": order_type,
            "visible": visible,
            "platinum": platinum,
            "quantity": quantity,
        }

        if rank is not None:
            data["rank"] = rank

        return await self.session.request("POST", self._url("/order"), data=data, context="add_order")

    async def modify_order(
        self,
        order_id: str,
        platinum: int,
        quantity: int = 1,
        visible: bool = True,
        rank: Optional[int] = None,
    ) -> Dict[str, Any]:
        """
        Изменить существующий заказ

        Args:
            order_id: ID заказа
            platinum: Цена в платине
            quantity: Количество
            visible: Виден ли заказ
            rank: Ранг мода или арканы (опционально)

        Returns:
            dict: Обновлённый заказ
        """
        self._check_auth("modify_order")

        require_string(order_id, "Order ID")
        require_positive_int(platinum, "Platinum")
        require_positive_int(quantity, "Quantity")
        require_bool(visible, "Visible")
        require_rank(rank)

        data = {
            "platinum": platinum,
            "quantity": quantity,
            "visible": visible,
        }

        if rank is not None:
            data["rank"] = rank

        return await self.session.request(
            "PATCH",
            self._url(f"/order/{order_id}"),
            data=data,
            context="modify_order",
        )

    async def delete_order(self, order_id: str) -> Dict[str, Any]:
        """Удалить заказ"""
        self._check_auth("delete_order")
        require_string(order_id, "Order ID")

        return await self.session.request(
            "DELETE",
            self._url(f"/order/{order_id}"),
            context="delete_order",
        )

    async def close_order(self, order_id: str, quantity: int = 1) -> Dict[str, Any]:
        """
        Закрыть заказ (попадает в историю сделок)

        Args:
            order_id: ID заказа
            quantity: Сколько штук закрыть
        """
        self._check_auth("close_order")
        require_string(order_id, "Order ID")
        require_positive_int(quantity, "Quantity")

        return await self.session.request(
            "POST",
            self._url(f"/order/{order_id}/close"),
            data={"quantity": quantity},
            context="close_order",
        )

    async def get_order_info(self, order_id: str) -> Dict[str, Any]:
        """Получить информацию о заказе по ID"""
        require_string(order_id, "Order ID")

        return await self.session.request(
            "GET",
            self._url(f"/order/{order_id}"),
            context="get_order_info",
        )

    async def get_my_orders(self) -> List[Dict[str, Any]]:
        """Получить все заказы авторизованного пользователя"""
        self._check_auth("get_my_orders")

        return await self.session.request("GET", self._url("/orders/my"), context="get_my_orders")

    # ==================== Профиль ====================

    async def get_my_profile(self) -> Dict[str, Any]:
        """Получить профиль авторизованного пользователя"""
        self._check_auth("get_my_profile")

        return await self.session.request("GET", self._url("/me"), context="get_my_profile")

    # ==================== Предметы ====================

    async def get_item_orders(self, item_slug: str) -> List[Dict[str, Any]]:
        """
        Получить все заказы на предмет

        Args:
            item_slug: Slug предмета (например, banshee_prime_set)
        """
        require_string(item_slug, "Item Slug")

        return await self.session.request(
            "GET",
            self._url(f"/orders/item/{item_slug}"),
            context="get_item_orders",
        )

    async def get_top_item_orders(self, item_slug: str, max_rank: bool = False) -> Dict[str, Any]:
        """
        Получить топ-5 заказов на продажу и покупку предмета

        Args:
            item_slug: Slug предмета
            max_rank: Только заказы с максимальным рангом (для модов и аркан)

        Returns:
            dict: {"sell": [...], "buy": [...]}
        """
        require_string(item_slug, "Item Slug")
        require_bool(max_rank, "Max rank")

        url = self._url(f"/orders/item/{item_slug}/top")

        if max_rank:
            item = await self.get_item_info(item_slug) or {}
            item_max_rank = item.get("maxRank")
            if is_int(item_max_rank):
                url += f"?rank={item_max_rank}"
            else:
                logger.warning(
                    f"⚠️ Предмет \"{item_slug}\" не имеет рангов. "
                    f"Используйте max_rank только для модов и аркан"
                )

        return await self.session.request("GET", url, context="get_top_item_orders")

    async def get_all_items(self) -> List[Dict[str, Any]]:
        """Получить список всех предметов, доступных для торговли"""
        return await self.session.request("GET", self._url("/items"), context="get_all_items")

    async def get_item_info(self, item_slug: str) -> Dict[str, Any]:
        """Получить информацию о предмете (ID, maxRank, переводы и т.д.)"""
        require_string(item_slug, "Item Slug")

        return await self.session.request(
            "GET",
            self._url(f"/item/{item_slug}"),
            context="get_item_info",
        )

    async def get_item_info_with_set(self, item_slug: str) -> Dict[str, Any]:
        """Получить информацию о предмете вместе с частями сета"""
        require_string(item_slug, "Item Slug")

        return await self.session.request(
            "GET",
            self._url(f"/item/{item_slug}/set"),
            context="get_item_info_with_set",
        )

    # ==================== Пользователи ====================

    async def get_user_public_info(self, slug: str) -> Dict[str, Any]:
        """Получить публичную информацию о пользователе"""
        require_string(slug, "Slug")

        return await self.session.request(
            "GET",
            self._url(f"/user/{slug}"),
            context="get_user_public_info",
        )

    async def get_user_public_orders(self, slug: str) -> List[Dict[str, Any]]:
        """Получить публичные заказы пользователя"""
        require_string(slug, "Slug")

        return await self.session.request(
            "GET",
            self._url(f"/orders/user/{slug}"),
            context="get_user_public_orders",
        )
