"""Руководство к файлу (VIDEOBOT/BOT/logging_config.py)
Назначение:
- Конфигурирует стандартное логирование для бота-загрузчика.
- Используется из run_bot.py перед запуском aiomax.Bot.
- В debug-режиме (VIDEOBOT_BOT_DEBUG) видны классификация сообщений в
  VIDEOBOT.DOWNLOADER.dispatcher, ответы HEAD-проб в retriever и строки запросов httpx.
"""

from __future__ import annotations

import logging


# Логгеры httpx пишут строку на каждый запрос, включая каждый HEAD/GET к видео.
_HTTP_LOGGERS = ("httpx", "httpcore")


def setup_logging(debug: bool = False) -> None:
    """Инициализирует логирование бота.

    Параметры:
    - debug: если True, уровень DEBUG для бота и httpx; иначе INFO для бота,
      а httpx/httpcore приглушены до WARNING.
    """

    level = logging.DEBUG if debug else logging.INFO

    for name in _HTTP_LOGGERS:
        logging.getLogger(name).setLevel(level if debug else logging.WARNING)

    # Если логирование уже настроено, не переопределяем формат хендлеров.
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
        return

    logging.basicConfig(
        level=level,
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )


logger = logging.getLogger("videobot.bot")
