"""
WFMApi - пример использования клиента
Выставляет предмет на продажу по текущей лучшей цене
"""

import sys
import logging
import asyncio
import argparse
import configparser
from pathlib import Path

from wfmapi import WFMApi, Config, WFMApiError, __version__


# Цветной форматтер для логов
class ColoredFormatter(logging.Formatter):
    """Цветной форматтер для логов с минималистичным оформлением"""

    # ANSI коды цветов
    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'
    BOLD = '\033[1m'

    # Сокращения уровней
    LEVEL_ABBR = {
        'DEBUG': 'D',
        'INFO': 'I',
        'WARNING': 'W',
        'ERROR': 'E',
        'CRITICAL': 'C'
    }

    def format(self, record):
        levelname_color = self.COLORS.get(record.levelname, self.RESET)
        time_str = self.formatTime(record, '%H:%M:%S')
        level_abbr = self.LEVEL_ABBR.get(record.levelname, '?')
        level_str = f"{levelname_color}{self.BOLD}[{level_abbr}]{self.RESET}"

        return f"{time_str} {level_str} {record.getMessage()}"


CONFIG_PATH = Path("configs/_main.cfg")

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False):
    """Настроить консольный и файловый вывод логов"""
    Path("logs").mkdir(exist_ok=True)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(ColoredFormatter())

    file_handler = logging.FileHandler('logs/wfm.log', encoding='utf-8')
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    ))

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        handlers=[console_handler, file_handler]
    )


def create_default_config(path: Path):
    """Создать конфигурацию по умолчанию"""
    config = configparser.ConfigParser()
    config['WFM'] = {
        'jwt': '',
        'language': Config.DEFAULT_LANGUAGE,
        'platform': Config.DEFAULT_PLATFORM,
        'crossplay': 'true',
        'cooldown': str(Config.DEFAULT_COOLDOWN),
        'timeout': str(Config.DEFAULT_TIMEOUT),
    }

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        config.write(f)


async def sell_at_top_price(api: WFMApi, item_slug: str):
    """Выставить предмет на продажу по цене лучшего предложения"""
    top_orders = await api.get_top_item_orders(item_slug)
    sell_orders = top_orders.get("sell") or []
    if not sell_orders:
        logger.warning(f"Нет заказов на продажу для {item_slug}")
        return None

    price = sell_orders[0]["platinum"]
    item = await api.get_item_info(item_slug)
    order = await api.add_order(item["id"], "sell", price)
    profile = await api.get_my_profile()

    name = item.get("i18n", {}).get(api.language, {}).get("name", item_slug)
    logger.info(f"{profile['slug']} теперь продаёт {name} за {price} платины. ID заказа: {order['id']}")
    return order


async def main(argv=None):
    """Главная функция"""
    parser = argparse.ArgumentParser(description=f"WFMApi v{__version__}")
    parser.add_argument("item", nargs="?", default="banshee_prime_set", help="Slug предмета")
    parser.add_argument("--config", default=str(CONFIG_PATH), help="Путь к файлу конфигурации")
    parser.add_argument("--debug", action="store_true", help="Подробные логи")
    args = parser.parse_args(argv)

    setup_logging(args.debug)

    config_path = Path(args.config)
    if not config_path.exists():
        create_default_config(config_path)
        logger.info(f"Создан файл конфигурации {config_path}. Укажите в нём jwt и запустите снова")
        return 1

    try:
        config = Config.from_file(config_path)
    except WFMApiError as e:
        logger.error(f"Ошибка в файле конфигурации: {e.message}")
        return 1

    async with WFMApi(config=config) as api:
        try:
            await sell_at_top_price(api, args.item)
        except WFMApiError as e:
            logger.error(f"Не удалось выставить заказ: {e.to_dict()}")
            return 1

    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        logger.info("Завершение работы...")
