"""Unit tests for ReceiptStorage against a temporary directory."""

import io
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from fastapi import UploadFile

from src.cf_common.id_generator import id_timestamp
from src.cf_cow_purchase.infrastructure.receipt_storage import ReceiptStorage


def _upload(name: str, content: bytes = b"\xff\xd8jpeg") -> UploadFile:
    return UploadFile(file=io.BytesIO(content), filename=name)


@pytest.fixture
def storage(tmp_path: Path) -> ReceiptStorage:
    return ReceiptStorage(upload_dir=tmp_path / "uploads", url_prefix="/uploads")


async def test_save_returns_public_path_and_writes_file(storage, tmp_path) -> None:
    path = await storage.save(_upload("Receipt.JPG", b"abc"))

    assert path.startswith("/uploads/cow_purchase_")
    assert path.endswith(".jpg")
    assert storage.path_for(path).read_bytes() == b"abc"


async def test_filename_encodes_upload_time(storage) -> None:
    before = datetime.now(UTC) - timedelta(seconds=1)
    path = await storage.save(_upload("r.png"))
    after = datetime.now(UTC) + timedelta(seconds=1)

    stem = path.rsplit("/", 1)[1].removeprefix("cow_purchase_").removesuffix(".png")
    assert before <= id_timestamp(stem) <= after


async def test_unsafe_suffix_dropped(storage) -> None:
    path = await storage.save(_upload("evil.p h p"))
    assert "." not in path.rsplit("/", 1)[1]


async def test_two_saves_never_collide(storage) -> None:
    first = await storage.save(_upload("a.png"))
    second = await storage.save(_upload("a.png"))
    assert first != second


async def test_delete_removes_file(storage) -> None:
    path = await storage.save(_upload("r.png"))
    assert await storage.delete(path) is True
    assert not storage.path_for(path).exists()


async def test_delete_missing_file_is_fine(storage) -> None:
    assert await storage.delete("/uploads/never_existed.png") is True


async def test_delete_only_honours_basename(storage, tmp_path) -> None:
    outside = tmp_path / "keep.txt"
    outside.write_text("x")
    await storage.delete("/uploads/../keep.txt")
    assert outside.exists()


async def test_delete_failure_is_reported_not_raised(tmp_path) -> None:
    upload_dir = tmp_path / "uploads"
    storage = ReceiptStorage(upload_dir=upload_dir, url_prefix="/uploads")
    # A directory in place of the file makes unlink fail with an OSError.
    (upload_dir / "stuck.png").mkdir(parents=True)
    assert await storage.delete("/uploads/stuck.png") is False
