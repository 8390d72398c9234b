"""Руководство к файлу (VIDEOBOT/BOT/run_bot.py)
Назначение:
- Точка входа для запуска бота-загрузчика на платформе MAX.
- Создаёт Retriever и Dispatcher, экземпляр aiomax.Bot, подключает роутер и настраивает логирование.
- Вызывается командой `python -m VIDEOBOT.BOT.run_bot` или консольным скриптом `videobot`.
"""

from __future__ import annotations

import sys

import aiomax

from ..DOWNLOADER.dispatcher import Dispatcher
from ..DOWNLOADER.retriever import Retriever, RetrieverConfig
from .confg import BotConfig, config
from .logging_config import logger, setup_logging
from .ROUTERS.download import create_router
from .SERVICES.max_api import MaxChatEndpoint


def create_bot(cfg: BotConfig | None = None) -> aiomax.Bot:
    """Создаёт и настраивает экземпляр бота aiomax.Bot.

    Ожидает, что токен бота передан через VIDEOBOT_BOT_TOKEN в окружении.
    """

    cfg = cfg or config
    if not cfg.bot_token:
        raise RuntimeError("Переменная окружения VIDEOBOT_BOT_TOKEN не задана")

    bot = aiomax.Bot(cfg.bot_token)

    retriever = Retriever(
        RetrieverConfig(download_dir=cfg.download_dir, timeout=cfg.timeout_sec),
    )
    dispatcher = Dispatcher(retriever, MaxChatEndpoint(bot))
    bot.add_router(create_router(dispatcher))

    return bot


def main() -> None:
    """Точка входа: настраивает логирование и запускает long polling бота."""

    setup_logging(debug=config.debug)

    try:
        bot = create_bot()
    except RuntimeError as exc:  # нет токена бота
        logger.error("Не удалось запустить бота: %s", exc)
        sys.exit(1)

    logger.info(
        "Запуск бота-загрузчика (download_dir=%s, timeout=%ss, debug=%s)",
        config.download_dir,
        config.timeout_sec,
        config.debug,
    )
    bot.run()


if __name__ == "__main__":
    main()
