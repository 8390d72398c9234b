"""Руководство к файлу (VIDEOBOT/BOT/confg.py)
Назначение:
- Хранит и инициализирует настройки бота-загрузчика.
- Считывает токен, каталог загрузок и таймаут из переменных окружения VIDEOBOT_* (и .env, если он есть).
- Используется в run_bot.py.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv


DEFAULT_DOWNLOAD_DIR = "./downloads"
DEFAULT_TIMEOUT_SEC = 30 * 60.0


@dataclass
class BotConfig:
    """Простая обёртка над настройками бота.

    Поля:
    - bot_token: токен бота MAX (обязателен для запуска).
    - download_dir: каталог для временного хранения скачанных файлов.
    - timeout_sec: общий таймаут одного HTTP-запроса к удалённому серверу.
    - debug: флаг детализированного логирования.
    """

    bot_token: str
    download_dir: Path
    timeout_sec: float = DEFAULT_TIMEOUT_SEC
    debug: bool = False


def _parse_timeout(raw: str | None) -> float:
    if not raw:
        return DEFAULT_TIMEOUT_SEC
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_TIMEOUT_SEC
    return value if value > 0 else DEFAULT_TIMEOUT_SEC


def load_config() -> BotConfig:
    """Считывает настройки бота из переменных окружения VIDEOBOT_*.

    Переменные окружения:
    - VIDEOBOT_BOT_TOKEN — токен бота MAX.
    - VIDEOBOT_DOWNLOAD_DIR — каталог загрузок (по умолчанию ./downloads).
    - VIDEOBOT_TIMEOUT_SEC — таймаут запроса в секундах (по умолчанию 1800).
    - VIDEOBOT_BOT_DEBUG — включает debug‑режим ("1", "true", "yes").
    """

    # .env ищется от текущего каталога; значения из окружения имеют приоритет
    load_dotenv(find_dotenv(usecwd=True), override=False)

    bot_token = os.getenv("VIDEOBOT_BOT_TOKEN", "")
    download_dir = Path(os.getenv("VIDEOBOT_DOWNLOAD_DIR") or DEFAULT_DOWNLOAD_DIR)
    timeout_sec = _parse_timeout(os.getenv("VIDEOBOT_TIMEOUT_SEC"))
    debug = os.getenv("VIDEOBOT_BOT_DEBUG", "false").lower() in {"1", "true", "yes"}

    return BotConfig(
        bot_token=bot_token,
        download_dir=download_dir,
        timeout_sec=timeout_sec,
        debug=debug,
    )


# Глобальный экземпляр конфигурации, который можно импортировать из других модулей.
config = load_config()
