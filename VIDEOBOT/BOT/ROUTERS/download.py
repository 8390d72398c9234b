"""Руководство к файлу (VIDEOBOT/BOT/ROUTERS/download.py)
Назначение:
- Роутер бота для сценария скачивания: все входящие сообщения (команды, ссылки, текст)
  передаются в Dispatcher из DOWNLOADER.
- Кнопка «Начать» в ЛС с ботом показывает приветствие.
"""

from __future__ import annotations

import logging
from typing import Optional

import aiomax

from ...DOWNLOADER.commands import START_TEXT
from ...DOWNLOADER.dispatcher import Dispatcher, Outcome


logger = logging.getLogger(__name__)


def _sender_label(message: aiomax.Message) -> str:
    sender = message.sender
    if sender is None:
        return "?"
    return sender.username or sender.name or str(sender.user_id)


async def greet(payload: aiomax.BotStartPayload) -> None:
    """Хендлер нажатия кнопки «Начать» в ЛС с ботом."""

    await payload.send(START_TEXT)


async def relay_message(dispatcher: Dispatcher, message: aiomax.Message) -> Optional[Outcome]:
    """Передать текст сообщения и chat_id в *dispatcher*.

    Непредвиденная ошибка логируется и не пробрасывается, чтобы long polling продолжился;
    в этом случае возвращается None.
    """

    text = message.body.text or ""
    chat_id = message.recipient.chat_id
    logger.info("[%s] %s", _sender_label(message), text)

    try:
        outcome = await dispatcher.handle(chat_id, text)
    except Exception:  # noqa: WPS430
        logger.exception("Unhandled error while processing message in chat %s", chat_id)
        return None

    logger.info("chat=%s outcome=%s", chat_id, outcome.value)
    return outcome


def create_router(dispatcher: Dispatcher) -> aiomax.Router:
    """Создаёт aiomax.Router, который передаёт каждое сообщение в *dispatcher*.

    Команды разбирает сам Dispatcher, поэтому хендлер ловит и сообщения‑команды.
    """

    router = aiomax.Router()

    @router.on_bot_start()
    async def on_bot_start(payload: aiomax.BotStartPayload):
        await greet(payload)

    @router.on_message(detect_commands=True)
    async def on_message(message: aiomax.Message):
        await relay_message(dispatcher, message)

    return router
