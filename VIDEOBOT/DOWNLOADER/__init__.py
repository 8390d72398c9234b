"""Руководство к пакету (VIDEOBOT/DOWNLOADER)
Назначение:
- Ядро бота-загрузчика, не зависящее от мессенджера:
  - artifact — описание удалённого файла и форматирование размера;
  - retriever — HEAD-проба и скачивание по HTTP (httpx);
  - dispatcher — разбор сообщений и сценарий скачивания/загрузки в чат;
  - commands — тексты ответов и разбор команд;
  - errors — иерархия исключений.
"""

from .artifact import ArtifactDescriptor, format_size
from .dispatcher import ChatEndpoint, Dispatcher, MAX_UPLOAD_BYTES, MessageKind, Outcome, classify
from .errors import (
    DownloaderError,
    NetworkError,
    RemoteStatusError,
    SendError,
    StorageError,
    ValidationError,
)
from .retriever import Retriever, RetrieverConfig, derive_filename, is_candidate_url

__all__ = [
    "ArtifactDescriptor",
    "ChatEndpoint",
    "Dispatcher",
    "DownloaderError",
    "MAX_UPLOAD_BYTES",
    "MessageKind",
    "NetworkError",
    "Outcome",
    "RemoteStatusError",
    "Retriever",
    "RetrieverConfig",
    "SendError",
    "StorageError",
    "ValidationError",
    "classify",
    "derive_filename",
    "format_size",
    "is_candidate_url",
]
