"""
Unit tests for LocalUploadStore adapter.

Uploads are written under a random name, checked against the policy
while streaming, and removed when rejected.
"""

import asyncio
import io
import threading
from pathlib import Path

import pytest
from starlette.datastructures import Headers, UploadFile

from src.adapters.storage import LocalUploadStore, UploadPolicy
from src.domain.exceptions import PayloadTooLargeError, UnsupportedFormatError

POLICY = UploadPolicy(
    allowed_types=frozenset({"application/pdf", "image/png"}),
    max_bytes=1024,
    format_hint="PDF o imagen (PNG/JPG)",
)


def make_upload(data: bytes, filename: str = "pago.pdf", content_type: str = "application/pdf"):
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


@pytest.fixture
def store(upload_dir: Path) -> LocalUploadStore:
    return LocalUploadStore(upload_dir)


class TestSave:
    def test_saves_accepted_file(self, store: LocalUploadStore, upload_dir: Path) -> None:
        attachment = asyncio.run(store.save(make_upload(b"%PDF data"), POLICY))

        assert attachment.path.parent == upload_dir
        assert attachment.path.read_bytes() == b"%PDF data"
        assert attachment.filename == "pago.pdf"
        assert attachment.content_type == "application/pdf"

    def test_stored_name_is_not_client_filename(self, store: LocalUploadStore) -> None:
        attachment = asyncio.run(store.save(make_upload(b"x", filename="../../etc/pago.pdf"), POLICY))

        assert attachment.path.name != "pago.pdf"
        assert attachment.filename == "pago.pdf"

    def test_file_at_limit_is_accepted(self, store: LocalUploadStore) -> None:
        attachment = asyncio.run(store.save(make_upload(b"x" * 1024), POLICY))

        assert attachment.path.stat().st_size == 1024

    def test_file_is_written_off_the_event_loop(
        self, store: LocalUploadStore, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        opened_in: list[int] = []
        real_open = Path.open

        def recording_open(self: Path, *args, **kwargs):
            opened_in.append(threading.get_ident())
            return real_open(self, *args, **kwargs)

        monkeypatch.setattr(Path, "open", recording_open)

        asyncio.run(store.save(make_upload(b"%PDF"), POLICY))

        assert opened_in
        assert threading.get_ident() not in opened_in

    def test_too_large_is_removed(self, store: LocalUploadStore, upload_dir: Path) -> None:
        with pytest.raises(PayloadTooLargeError):
            asyncio.run(store.save(make_upload(b"x" * 1025), POLICY))

        assert list(upload_dir.iterdir()) == []

    def test_unsupported_type(self, store: LocalUploadStore, upload_dir: Path) -> None:
        with pytest.raises(UnsupportedFormatError) as exc_info:
            asyncio.run(store.save(make_upload(b"hola", "a.txt", "text/plain"), POLICY))

        assert exc_info.value.message == "Formato no permitido. Sube PDF o imagen (PNG/JPG)."
        assert not upload_dir.exists() or list(upload_dir.iterdir()) == []


class TestDiscard:
    def test_removes_file(self, store: LocalUploadStore) -> None:
        attachment = asyncio.run(store.save(make_upload(b"x"), POLICY))

        store.discard(attachment.path)

        assert not attachment.path.exists()

    def test_missing_file_is_ignored(self, store: LocalUploadStore, upload_dir: Path) -> None:
        store.discard(upload_dir / "never-written")
