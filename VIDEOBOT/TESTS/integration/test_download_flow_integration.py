# Руководство к файлу (TESTS/integration/test_download_flow_integration.py)
# Назначение:
# - Интеграционные тесты сценария «ссылка → проба → скачивание → загрузка в чат».
# - Retriever работает поверх httpx.MockTransport, чат — FakeEndpoint из conftest.

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from VIDEOBOT.DOWNLOADER.commands import PROCESSING_TEXT, UPLOADING_TEXT
from VIDEOBOT.DOWNLOADER.dispatcher import Dispatcher, Outcome


pytestmark = pytest.mark.asyncio


CHAT_ID = 777
URL = "https://cdn.example.com/media/clip.mp4?token=abc"


async def test_download_uploads_and_deletes_local_file(dispatcher, endpoint, server, download_dir):
    """Поток: processing → сводка → uploading → файл в чате → локальная копия удалена."""

    outcome = await dispatcher.handle(CHAT_ID, URL)

    assert outcome is Outcome.UPLOADED
    assert server.methods == ["HEAD", "GET"]

    texts = endpoint.texts
    assert texts[0] == PROCESSING_TEXT
    assert "Filename: clip.mp4" in texts[1]
    assert "Type: video/mp4" in texts[1]
    assert texts[2] == UPLOADING_TEXT
    assert len(texts) == 3

    ((chat_id, path, caption, data),) = endpoint.files
    assert chat_id == CHAT_ID
    assert data == server.body
    assert "clip.mp4" in caption
    assert "2.0 KB" in caption

    # После успешной загрузки файл удаляется
    assert not path.exists()
    assert list(download_dir.iterdir()) == []


async def test_download_too_large_keeps_file_and_skips_upload(make_retriever, endpoint, server, download_dir):
    server.body = b"v" * 4096
    dispatcher = Dispatcher(make_retriever(server), endpoint, upload_limit=4095)

    outcome = await dispatcher.handle(CHAT_ID, URL)

    assert outcome is Outcome.TOO_LARGE
    assert endpoint.files == []

    kept = download_dir / "clip.mp4"
    assert kept.read_bytes() == server.body

    report = endpoint.texts[-1]
    assert "4.0 KB" in report
    assert "50MB" in report
    assert str(kept) in report
    assert UPLOADING_TEXT not in endpoint.texts


async def test_download_at_limit_is_uploaded(make_retriever, endpoint, server, download_dir):
    dispatcher = Dispatcher(make_retriever(server), endpoint, upload_limit=len(server.body))

    outcome = await dispatcher.handle(CHAT_ID, URL)

    assert outcome is Outcome.UPLOADED
    assert len(endpoint.files) == 1
    assert list(download_dir.iterdir()) == []


async def test_upload_failure_keeps_file_and_reports_path(dispatcher, endpoint, download_dir):
    endpoint.fail_upload = True

    outcome = await dispatcher.handle(CHAT_ID, URL)

    assert outcome is Outcome.UPLOAD_FAILED
    kept = download_dir / "clip.mp4"
    assert kept.exists()

    report = endpoint.texts[-1]
    assert "Error uploading video" in report
    assert "upload rejected" in report
    assert str(kept) in report


async def test_probe_failure_stops_before_download(dispatcher, endpoint, server, download_dir):
    server.status = 404

    outcome = await dispatcher.handle(CHAT_ID, URL)

    assert outcome is Outcome.PROBE_FAILED
    assert server.methods == ["HEAD"]
    assert endpoint.texts[0] == PROCESSING_TEXT
    assert "Error getting video info" in endpoint.texts[1]
    assert "404 Not Found" in endpoint.texts[1]
    assert len(endpoint.texts) == 2
    assert list(download_dir.iterdir()) == []


async def test_fetch_failure_is_reported_once(dispatcher, endpoint, server, download_dir):
    server.get_status = 502

    outcome = await dispatcher.handle(CHAT_ID, URL)

    assert outcome is Outcome.FETCH_FAILED
    assert server.methods == ["HEAD", "GET"]
    assert "Error downloading video" in endpoint.texts[-1]
    assert "502 Bad Gateway" in endpoint.texts[-1]
    assert endpoint.files == []
    assert list(download_dir.iterdir()) == []


async def test_unknown_size_is_shown_in_summary(dispatcher, endpoint, server):
    server.send_length = False

    outcome = await dispatcher.handle(CHAT_ID, URL)

    assert outcome is Outcome.UPLOADED
    assert "Size: Unknown size" in endpoint.texts[1]


async def test_status_messages_failing_do_not_stop_workflow(dispatcher, endpoint, download_dir):
    endpoint.fail_send = True

    outcome = await dispatcher.handle(CHAT_ID, URL)

    assert outcome is Outcome.UPLOADED
    assert len(endpoint.files) == 1
    assert list(download_dir.iterdir()) == []


async def test_delete_failure_after_upload_is_only_logged(dispatcher, endpoint, monkeypatch, caplog):
    def fail_unlink(self, missing_ok=False):
        raise PermissionError("read-only filesystem")

    monkeypatch.setattr(Path, "unlink", fail_unlink)

    with caplog.at_level(logging.WARNING, logger="VIDEOBOT.DOWNLOADER.dispatcher"):
        outcome = await dispatcher.handle(CHAT_ID, URL)

    assert outcome is Outcome.UPLOADED
    assert "Could not delete local file" in caplog.text
    assert all("read-only" not in text for text in endpoint.texts)


async def test_messages_are_handled_independently(dispatcher, endpoint, server, download_dir):
    first = await dispatcher.handle(CHAT_ID, URL)
    second = await dispatcher.handle(CHAT_ID + 1, "https://cdn.example.com/other")

    assert first is second is Outcome.UPLOADED
    assert [chat for chat, *_ in endpoint.files] == [CHAT_ID, CHAT_ID + 1]
    assert "other.mp4" in endpoint.files[1][2]
    assert list(download_dir.iterdir()) == []


async def test_storage_failure_is_reported_as_download_error(dispatcher, endpoint, server, download_dir):
    """Имя длиннее NAME_MAX: файл не создаётся, пользователь получает ошибку скачивания."""

    outcome = await dispatcher.handle(CHAT_ID, "https://cdn.example.com/" + "a" * 300 + ".mp4")

    assert outcome is Outcome.FETCH_FAILED
    assert server.methods == ["HEAD", "GET"]
    assert "Error downloading video" in endpoint.texts[-1]
    assert "failed to create file" in endpoint.texts[-1]
    assert endpoint.files == []
    assert list(download_dir.iterdir()) == []


async def test_caption_names_the_uploaded_file(dispatcher, endpoint, download_dir):
    download_dir.mkdir(parents=True, exist_ok=True)
    (download_dir / "clip.mp4").write_bytes(b"retained from an earlier request")

    outcome = await dispatcher.handle(CHAT_ID, URL)

    assert outcome is Outcome.UPLOADED
    ((_, path, caption, _),) = endpoint.files
    assert path.name == "clip_1.mp4"
    assert "clip_1.mp4" in caption
    assert (download_dir / "clip.mp4").exists()
