# Руководство к файлу (DOWNLOADER/dispatcher.py)
# Назначение:
# - Разбор входящего сообщения (команда / ссылка / обычный текст) и сценарий скачивания:
#   проба → сводка → скачивание → загрузка в чат либо отказ по размеру.
# - Dispatcher не хранит состояние между сообщениями; каждое сообщение обрабатывается до конца.
# - Отправка в чат идёт через ChatEndpoint, который реализует слой бота (BOT/SERVICES).

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Protocol, Union

from .artifact import format_size
from .commands import (
    CMD_INFO,
    INFO_USAGE_TEXT,
    PROCESSING_TEXT,
    STATIC_REPLIES,
    UNKNOWN_COMMAND_TEXT,
    UPLOADING_TEXT,
    USAGE_TEXT,
    format_caption,
    format_error,
    format_info,
    format_summary,
    format_too_large,
    parse_command,
    require_argument,
)
from .errors import DownloaderError, SendError, ValidationError
from .retriever import Retriever, is_candidate_url


logger = logging.getLogger(__name__)


MAX_UPLOAD_BYTES = 50 * 1024 * 1024

ChatId = Union[int, str]


class ChatEndpoint(Protocol):
    """Примитивы отправки в чат. При ошибке доставки реализации поднимают SendError."""

    async def send(self, chat_id: ChatId, text: str) -> None:
        ...

    async def send_file(self, chat_id: ChatId, path: Path, caption: str) -> None:
        ...


class MessageKind(Enum):
    COMMAND = "command"
    URL_CANDIDATE = "url_candidate"
    PLAIN = "plain"


class Outcome(Enum):
    """Конечное состояние обработки одного сообщения."""

    HANDLED = "handled"
    PROBE_FAILED = "probe_failed"
    FETCH_FAILED = "fetch_failed"
    UPLOADED = "uploaded"
    UPLOAD_FAILED = "upload_failed"
    TOO_LARGE = "too_large"
    PROMPTED = "prompted"


def classify(text: str) -> MessageKind:
    if text.startswith("/"):
        return MessageKind.COMMAND
    if is_candidate_url(text):
        return MessageKind.URL_CANDIDATE
    return MessageKind.PLAIN


class Dispatcher:
    """Обработчик входящих сообщений чата.

    Параметры:
    - retriever: загрузчик (HEAD-проба и скачивание);
    - endpoint: реализация ChatEndpoint для ответа в чат;
    - upload_limit: максимальный размер файла для загрузки в чат, в байтах.
    """

    def __init__(
        self,
        retriever: Retriever,
        endpoint: ChatEndpoint,
        upload_limit: int = MAX_UPLOAD_BYTES,
    ) -> None:
        self._retriever = retriever
        self._endpoint = endpoint
        self._upload_limit = upload_limit

    async def handle(self, chat_id: ChatId, text: str) -> Outcome:
        """Обработать одно сообщение и вернуть конечное состояние.

        Ошибки сети, диска и отправки сообщаются в чат и логируются, но не пробрасываются.
        """

        text = (text or "").strip()
        kind = classify(text)
        logger.debug("[Dispatcher.handle] chat=%s kind=%s", chat_id, kind.value)

        if kind is MessageKind.COMMAND:
            return await self._handle_command(chat_id, text)
        if kind is MessageKind.URL_CANDIDATE:
            return await self._handle_download(chat_id, text)

        await self._say(chat_id, USAGE_TEXT)
        return Outcome.PROMPTED

    # ------------------------------------------------------------------
    # Команды
    # ------------------------------------------------------------------

    async def _handle_command(self, chat_id: ChatId, text: str) -> Outcome:
        command, args = parse_command(text)

        reply = STATIC_REPLIES.get(command)
        if reply is not None:
            await self._say(chat_id, reply)
            return Outcome.HANDLED

        if command == CMD_INFO:
            try:
                url = require_argument(args, INFO_USAGE_TEXT)
            except ValidationError as exc:
                await self._say(chat_id, str(exc))
                return Outcome.HANDLED
            return await self._handle_info(chat_id, url)

        await self._say(chat_id, UNKNOWN_COMMAND_TEXT)
        return Outcome.HANDLED

    async def _handle_info(self, chat_id: ChatId, url: str) -> Outcome:
        """/info <url>: только HEAD-проба, файл не скачивается."""

        try:
            descriptor = await self._retriever.probe(url)
        except DownloaderError as exc:
            logger.warning("Probe failed for %s: %s", url, exc)
            await self._say(chat_id, format_error("Error getting video info", exc))
            return Outcome.PROBE_FAILED

        await self._say(chat_id, format_info(descriptor))
        return Outcome.HANDLED

    # ------------------------------------------------------------------
    # Скачивание
    # ------------------------------------------------------------------

    async def _handle_download(self, chat_id: ChatId, url: str) -> Outcome:
        await self._say(chat_id, PROCESSING_TEXT)

        try:
            descriptor = await self._retriever.probe(url)
        except DownloaderError as exc:
            logger.warning("Probe failed for %s: %s", url, exc)
            await self._say(chat_id, format_error("Error getting video info", exc))
            return Outcome.PROBE_FAILED

        await self._say(chat_id, format_summary(descriptor))

        try:
            path = await self._retriever.fetch(url)
        except DownloaderError as exc:
            logger.warning("Download failed for %s: %s", url, exc)
            await self._say(chat_id, format_error("Error downloading video", exc))
            return Outcome.FETCH_FAILED

        return await self._relay(chat_id, path)

    async def _relay(self, chat_id: ChatId, path: Path) -> Outcome:
        """Загрузить файл в чат или оставить его на диске, если он больше лимита."""

        try:
            size = path.stat().st_size
        except OSError as exc:
            logger.error("Error getting file info for %s: %s", path, exc)
            await self._say(chat_id, format_error("Error accessing downloaded file", exc))
            return Outcome.FETCH_FAILED

        human_size = format_size(size)
        if size > self._upload_limit:
            logger.warning("File too large for upload: %d bytes (max: %d bytes)", size, self._upload_limit)
            await self._say(chat_id, format_too_large(human_size, str(path)))
            return Outcome.TOO_LARGE

        await self._say(chat_id, UPLOADING_TEXT)

        try:
            await self._endpoint.send_file(chat_id, path, format_caption(path.name, human_size))
        except SendError as exc:
            logger.error("Error uploading %s: %s", path, exc)
            await self._say(
                chat_id,
                f"{format_error('Error uploading video', exc)}\n\n📁 Video saved locally to: {path}",
            )
            return Outcome.UPLOAD_FAILED

        logger.info("Video uploaded: %s", path)
        try:
            path.unlink()
        except OSError as exc:
            logger.warning("Could not delete local file %s: %s", path, exc)
        else:
            logger.info("Local file deleted: %s", path)

        return Outcome.UPLOADED

    async def _say(self, chat_id: ChatId, text: str) -> None:
        """Отправить текст в чат; ошибка доставки только логируется."""

        try:
            await self._endpoint.send(chat_id, text)
        except SendError as exc:
            logger.error("Error sending message to chat %s: %s", chat_id, exc)
