# Руководство к файлу (DOWNLOADER/errors.py)
# Назначение:
# - Иерархия исключений сценария скачивания: сеть, HTTP-статус, диск, отправка в чат, аргументы команд.
# - Текст исключения (str(exc)) показывается пользователю как есть.

from __future__ import annotations


class DownloaderError(Exception):
    """Базовая ошибка сценария скачивания."""


class NetworkError(DownloaderError):
    """Не удалось достучаться до удалённого сервера (DNS, таймаут, обрыв соединения)."""


class RemoteStatusError(DownloaderError):
    """Сервер ответил статусом, отличным от 200 OK."""

    def __init__(self, status_code: int, status: str) -> None:
        super().__init__(f"server returned status: {status}")
        self.status_code = status_code
        self.status = status


class StorageError(DownloaderError):
    """Ошибка создания или записи локального файла."""


class SendError(DownloaderError):
    """Не удалось доставить сообщение или файл в чат."""


class ValidationError(DownloaderError):
    """У команды не хватает обязательного аргумента."""
