"""Руководство к файлу (VIDEOBOT/BOT/SERVICES/max_api.py)
Назначение:
- Реализация ChatEndpoint поверх aiomax.Bot (MAX Bot API).
- Отправляет текстовые сообщения и видеофайлы в чат; любые ошибки aiomax оборачиваются в SendError.
"""

from __future__ import annotations

import logging
from pathlib import Path

import aiomax

from ...DOWNLOADER.dispatcher import ChatId
from ...DOWNLOADER.errors import SendError


logger = logging.getLogger(__name__)


class MaxChatEndpoint:
    """Отправка ответов Dispatcher'а в чат MAX через экземпляр aiomax.Bot."""

    def __init__(self, bot: aiomax.Bot) -> None:
        self._bot = bot

    async def send(self, chat_id: ChatId, text: str) -> None:
        try:
            await self._bot.send_message(text, chat_id=chat_id)
        except Exception as exc:  # noqa: WPS430
            raise SendError(str(exc) or exc.__class__.__name__) from exc

    async def send_file(self, chat_id: ChatId, path: Path, caption: str) -> None:
        """Загрузить видео на сервер MAX и отправить его сообщением с подписью."""

        try:
            with open(path, "rb") as fh:
                attachment = await self._bot.upload_video(fh)
            await self._bot.send_message(caption, chat_id=chat_id, attachments=attachment)
        except Exception as exc:  # noqa: WPS430
            raise SendError(str(exc) or exc.__class__.__name__) from exc

        logger.debug("[MaxChatEndpoint.send_file] chat=%s file=%s", chat_id, path)
