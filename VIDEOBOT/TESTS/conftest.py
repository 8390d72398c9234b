# Руководство к файлу (TESTS/conftest.py)
# Назначение:
# - Общие фикстуры для pytest-тестов бота-загрузчика.
# - Подменяет сеть через httpx.MockTransport и чат через FakeEndpoint, каталог загрузок — tmp_path.

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, List, Tuple

import httpx
import pytest
import pytest_asyncio

from VIDEOBOT.DOWNLOADER.dispatcher import Dispatcher
from VIDEOBOT.DOWNLOADER.errors import SendError
from VIDEOBOT.DOWNLOADER.retriever import Retriever, RetrieverConfig


class FakeVideoServer:
    """Обработчик для httpx.MockTransport: отдаёт один и тот же файл на HEAD и GET."""

    def __init__(
        self,
        body: bytes = b"\x00\x00\x00\x18ftypmp42" + b"x" * 2048,
        content_type: str = "video/mp4",
        status: int = 200,
        send_length: bool = True,
    ) -> None:
        self.body = body
        self.content_type = content_type
        self.status = status
        self.get_status = None
        self.send_length = send_length
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        status = self.status
        if request.method == "GET" and self.get_status is not None:
            status = self.get_status
        if status != 200:
            return httpx.Response(status)

        headers = {"Content-Type": self.content_type}
        if request.method == "HEAD":
            if self.send_length:
                headers["Content-Length"] = str(len(self.body))
            return httpx.Response(200, headers=headers)
        return httpx.Response(200, headers=headers, content=self.body)

    @property
    def methods(self) -> List[str]:
        return [r.method for r in self.requests]


class FakeEndpoint:
    """ChatEndpoint в памяти: запоминает отправленные тексты и файлы."""

    def __init__(self) -> None:
        self.messages: List[Tuple[Any, str]] = []
        self.files: List[Tuple[Any, Path, str, bytes]] = []
        self.fail_send = False
        self.fail_upload = False

    async def send(self, chat_id: Any, text: str) -> None:
        if self.fail_send:
            raise SendError("chat is unavailable")
        self.messages.append((chat_id, text))

    async def send_file(self, chat_id: Any, path: Path, caption: str) -> None:
        if self.fail_upload:
            raise SendError("upload rejected")
        self.files.append((chat_id, path, caption, path.read_bytes()))

    @property
    def texts(self) -> List[str]:
        return [text for _, text in self.messages]


@pytest.fixture
def download_dir(tmp_path: Path) -> Path:
    return tmp_path / "downloads"


@pytest.fixture
def server() -> FakeVideoServer:
    return FakeVideoServer()


@pytest.fixture
def endpoint() -> FakeEndpoint:
    return FakeEndpoint()


@pytest_asyncio.fixture
async def make_retriever(download_dir: Path):
    """Фабрика Retriever'ов поверх MockTransport; клиенты закрываются после теста."""

    created: List[Retriever] = []

    def _make(handler: Callable, **kwargs: Any) -> Retriever:
        cfg = RetrieverConfig(download_dir=download_dir, **kwargs)
        retriever = Retriever(cfg, transport=httpx.MockTransport(handler))
        created.append(retriever)
        return retriever

    yield _make

    for retriever in created:
        await retriever.aclose()


@pytest.fixture
def dispatcher(make_retriever, server: FakeVideoServer, endpoint: FakeEndpoint) -> Dispatcher:
    return Dispatcher(make_retriever(server), endpoint)
