# Руководство к файлу (DOWNLOADER/retriever.py)
# Назначение:
# - HTTP-загрузчик на httpx.AsyncClient: HEAD-проба метаданных и потоковое скачивание в download_dir.
# - Выбор имени локального файла по URL и Content-Type, проверка кандидата-URL.
# Ограничение: при обрыве посреди скачивания частично записанный файл остаётся на диске.

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

import httpx

from .artifact import UNKNOWN_SIZE, ArtifactDescriptor
from .errors import NetworkError, RemoteStatusError, StorageError


logger = logging.getLogger(__name__)


DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
DEFAULT_EXTENSION = ".mp4"

# Порядок важен: сопоставление идёт по вхождению подстроки в Content-Type.
CONTENT_TYPE_EXTENSIONS = (
    ("video/mp4", ".mp4"),
    ("video/webm", ".webm"),
    ("video/avi", ".avi"),
    ("video/mov", ".mov"),
    ("video/wmv", ".wmv"),
    ("video/flv", ".flv"),
    ("video/mkv", ".mkv"),
)


@dataclass(frozen=True)
class RetrieverConfig:
    """Неизменяемые настройки загрузчика.

    Поля:
    - download_dir: каталог для скачанных файлов;
    - timeout: общий бюджет на один запрос в секундах (по умолчанию 30 минут);
    - user_agent: заголовок User-Agent, снижает шанс блокировки сервером;
    - chunk_size: размер порции при записи тела ответа на диск.
    """

    download_dir: Path
    timeout: float = 30 * 60
    user_agent: str = DEFAULT_USER_AGENT
    chunk_size: int = 64 * 1024


def extension_for(media_type: str) -> str:
    """Расширение по Content-Type или пустая строка, если тип не из таблицы."""

    for needle, ext in CONTENT_TYPE_EXTENSIONS:
        if needle in media_type:
            return ext
    return ""


def derive_filename(url: str, media_type: str, now: Optional[datetime] = None) -> str:
    """Имя локального файла для *url*.

    Берётся последний сегмент пути без query-строки; если в нём нет точки,
    добавляется расширение по Content-Type (по умолчанию ``.mp4``). Пустое имя
    заменяется на ``video_<YYYYMMDD_HHMMSS>.mp4``.
    """

    name = url.split("/")[-1]
    name = name.split("?", 1)[0]

    if "." not in name:
        name += extension_for(media_type) or DEFAULT_EXTENSION

    if name in ("", DEFAULT_EXTENSION):
        stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
        name = f"video_{stamp}{DEFAULT_EXTENSION}"

    return name


def is_candidate_url(text: str) -> bool:
    """Текст считается ссылкой на скачивание, если начинается с http:// или https://."""

    return text.startswith(("http://", "https://"))


def _describe(exc: BaseException) -> str:
    # у части исключений httpx (например, таймаутов) пустой текст
    return str(exc) or exc.__class__.__name__


def _status_text(resp: httpx.Response) -> str:
    return f"{resp.status_code} {resp.reason_phrase}".strip()


def _content_length(resp: httpx.Response) -> int:
    raw = resp.headers.get("Content-Length")
    if raw is None:
        return UNKNOWN_SIZE
    try:
        size = int(raw)
    except ValueError:
        return UNKNOWN_SIZE
    return size if size >= 0 else UNKNOWN_SIZE


class Retriever:
    """Async-загрузчик удалённых файлов поверх httpx.AsyncClient.

    Клиент создаётся один раз из RetrieverConfig и не меняется во время работы.
    Для тестов можно передать ``transport`` (например, ``httpx.MockTransport``).
    """

    def __init__(self, config: RetrieverConfig, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
        self._config = config
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(config.timeout),
            headers={"User-Agent": config.user_agent},
            follow_redirects=True,
            transport=transport,
        )
        try:
            config.download_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.warning("Could not create download directory %s: %s", config.download_dir, exc)

    @property
    def config(self) -> RetrieverConfig:
        return self._config

    async def __aenter__(self) -> "Retriever":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Публичные методы
    # ------------------------------------------------------------------

    async def probe(self, url: str) -> ArtifactDescriptor:
        """HEAD-запрос: тип, размер и будущее имя файла без скачивания тела."""

        try:
            resp = await self._client.head(url)
        except httpx.InvalidURL as exc:
            raise NetworkError(f"failed to create request: {_describe(exc)}") from exc
        except httpx.HTTPError as exc:
            raise NetworkError(f"failed to get video info: {_describe(exc)}") from exc

        if resp.status_code != httpx.codes.OK:
            raise RemoteStatusError(resp.status_code, _status_text(resp))

        media_type = resp.headers.get("Content-Type", "")
        descriptor = ArtifactDescriptor(
            origin=url,
            media_type=media_type,
            byte_size=_content_length(resp),
            derived_name=derive_filename(url, media_type),
        )
        logger.debug("[Retriever.probe] %s -> %s", url, descriptor)
        return descriptor

    async def fetch(self, url: str) -> Path:
        """Скачать тело ответа в новый файл внутри download_dir и вернуть путь к нему.

        Таймаут из конфигурации действует на весь запрос целиком, а не на отдельные порции.
        """

        try:
            return await asyncio.wait_for(self._download(url), timeout=self._config.timeout)
        except asyncio.TimeoutError as exc:
            raise NetworkError(
                f"failed to download video: timed out after {self._config.timeout:g}s"
            ) from exc

    # ------------------------------------------------------------------
    # Внутренняя реализация
    # ------------------------------------------------------------------

    async def _download(self, url: str) -> Path:
        try:
            async with self._client.stream("GET", url) as resp:
                if resp.status_code != httpx.codes.OK:
                    raise RemoteStatusError(resp.status_code, _status_text(resp))

                name = derive_filename(url, resp.headers.get("Content-Type", ""))
                path = self._reserve_path(name)
                try:
                    fh = open(path, "wb")
                except OSError as exc:
                    raise StorageError(f"failed to create file: {exc}") from exc

                with fh:
                    async for chunk in resp.aiter_bytes(self._config.chunk_size):
                        try:
                            fh.write(chunk)
                        except OSError as exc:
                            raise StorageError(f"failed to save video: {exc}") from exc
        except httpx.InvalidURL as exc:
            raise NetworkError(f"failed to create request: {_describe(exc)}") from exc
        except httpx.HTTPError as exc:
            raise NetworkError(f"failed to download video: {_describe(exc)}") from exc

        logger.info("[Retriever.fetch] saved %s -> %s", url, path)
        return path

    def _reserve_path(self, name: str) -> Path:
        """Путь для нового файла; уже существующие файлы не перезаписываются."""

        directory = self._config.download_dir
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"failed to create download directory: {exc}") from exc

        path = directory / name
        stem, suffix = path.stem, path.suffix
        n = 1
        try:
            # до 3.12 exists() поднимает OSError на ENAMETOOLONG/EACCES
            while path.exists():
                path = directory / f"{stem}_{n}{suffix}"
                n += 1
        except OSError as exc:
            raise StorageError(f"failed to create file: {exc}") from exc
        return path
