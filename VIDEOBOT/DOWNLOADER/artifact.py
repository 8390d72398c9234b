"""Руководство к файлу (VIDEOBOT/DOWNLOADER/artifact.py)
Назначение:
- Описание удалённого файла до скачивания (ArtifactDescriptor).
- Форматирование размера в человекочитаемый вид (двоичные единицы, база 1024).
"""

from __future__ import annotations

from dataclasses import dataclass


UNKNOWN_SIZE = -1

_UNIT = 1024
_PREFIXES = "KMGTPE"


def format_size(size: int) -> str:
    """Вернуть размер в виде ``"1.5 MB"``.

    - ``-1`` — сервер не прислал Content-Length → ``"Unknown size"``;
    - меньше 1 КиБ — целое число байт (``"1023 B"``);
    - иначе одна цифра после точки и префикс из ``KMGTPE``.
    """

    if size == UNKNOWN_SIZE:
        return "Unknown size"
    if size == 0:
        return "0 B"
    if size < _UNIT:
        return f"{size} B"

    div, exp = _UNIT, 0
    n = size // _UNIT
    while n >= _UNIT:
        div *= _UNIT
        exp += 1
        n //= _UNIT

    return f"{size / div:.1f} {_PREFIXES[exp]}B"


@dataclass(frozen=True)
class ArtifactDescriptor:
    """Метаданные удалённого ресурса, полученные HEAD-запросом.

    Поля:
    - origin: исходный URL;
    - media_type: Content-Type от сервера (может быть пустой строкой);
    - byte_size: размер в байтах, ``-1`` если неизвестен;
    - derived_name: имя файла для локального сохранения (всегда с расширением).
    """

    origin: str
    media_type: str
    byte_size: int
    derived_name: str

    def format_size(self) -> str:
        return format_size(self.byte_size)
