"""Руководство к пакету (VIDEOBOT/BOT/ROUTERS)
Назначение:
- Содержит aiomax.Router‑модули бота.
- download — единственный роутер: передаёт входящие сообщения в Dispatcher.
"""

from . import download

__all__ = [
    "download",
]
