"""Руководство к пакету (VIDEOBOT/BOT/SERVICES)
Назначение:
- Содержит вспомогательные сервисы для бота:
  - max_api — реализация ChatEndpoint поверх aiomax.Bot (отправка текста и видео в чат MAX).
"""

from . import max_api

__all__ = [
    "max_api",
]
