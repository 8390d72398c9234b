"""Руководство к файлу (VIDEOBOT/DOWNLOADER/commands.py)
Назначение:
- Фиксированные тексты ответов бота (/start, /help, неизвестная команда, подсказка).
- Разбор команды на токены и сборка текстов для сценария скачивания.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from .artifact import ArtifactDescriptor
from .errors import ValidationError


CMD_START = "/start"
CMD_HELP = "/help"
CMD_INFO = "/info"

START_TEXT = (
    "🎬 Welcome to Video Downloader Bot!\n\n"
    "I can help you download videos from direct URLs.\n\n"
    "Just send me a video URL and I'll download it for you!\n\n"
    "Use /help for more information."
)

HELP_TEXT = (
    "🎬 Video Downloader Bot Commands:\n\n"
    "/start - Start the bot\n"
    "/help - Show this help message\n"
    "/info <url> - Get video information without downloading\n\n"
    "📝 Usage:\n"
    "• Send a direct video URL to download\n"
    "• Supported formats: MP4, WebM, AVI, MOV, WMV, FLV, MKV\n"
    "• Files are saved to the downloads directory\n\n"
    "⚠️ Note: Only direct video URLs are supported. "
    "YouTube and other streaming platforms may not work."
)

UNKNOWN_COMMAND_TEXT = "Unknown command. Use /help to see available commands."

USAGE_TEXT = (
    "Send me a video URL to download!\n\n"
    "Usage:\n"
    "- Just send a direct video URL\n"
    "- Use /info <url> to get video information\n"
    "- Use /help for more commands"
)

INFO_USAGE_TEXT = "Please provide a URL. Usage: /info <url>"

PROCESSING_TEXT = "🔄 Processing your request..."
UPLOADING_TEXT = "📤 Uploading video..."

UPLOAD_LIMIT_TEXT = "50MB"

# Команды без аргументов: ответ не зависит от текста сообщения.
STATIC_REPLIES = {
    CMD_START: START_TEXT,
    CMD_HELP: HELP_TEXT,
}


def parse_command(text: str) -> Tuple[str, List[str]]:
    """Разбить текст по пробелам: первый токен — команда, остальные — аргументы."""

    parts = text.split()
    if not parts:
        return "", []
    return parts[0], parts[1:]


def require_argument(args: Sequence[str], usage: str) -> str:
    """Вернуть первый аргумент команды или поднять ValidationError с текстом *usage*."""

    if not args:
        raise ValidationError(usage)
    return args[0]


def format_info(descriptor: ArtifactDescriptor) -> str:
    return (
        "📹 Video Information:\n\n"
        f"URL: {descriptor.origin}\n"
        f"Filename: {descriptor.derived_name}\n"
        f"Size: {descriptor.format_size()}\n"
        f"Content Type: {descriptor.media_type}"
    )


def format_summary(descriptor: ArtifactDescriptor) -> str:
    return (
        "📹 Downloading video...\n\n"
        f"Filename: {descriptor.derived_name}\n"
        f"Size: {descriptor.format_size()}\n"
        f"Type: {descriptor.media_type}"
    )


def format_caption(filename: str, size: str) -> str:
    return f"✅ Video uploaded successfully!\n\n📁 Filename: {filename}\n💾 Size: {size}"


def format_too_large(size: str, path: str) -> str:
    return (
        "❌ File too large to upload!\n\n"
        f"📊 File size: {size}\n"
        f"📏 Upload limit: {UPLOAD_LIMIT_TEXT}\n\n"
        f"📁 Video saved locally to: {path}"
    )


def format_error(prefix: str, exc: BaseException) -> str:
    return f"❌ {prefix}: {exc}"
