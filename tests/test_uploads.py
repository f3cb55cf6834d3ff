import logging
import os
import shutil
from io import BytesIO

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from domain.errors import ExtractionFailed, InvalidFileType
from domain.services.ingestion import ingest
from infra.storage.uploads import UploadSession, safe_filename

from conftest import TXT, stored_files


def upload(name: str, data: bytes, content_type: str) -> UploadFile:
    return UploadFile(file=BytesIO(data), filename=name, headers=Headers({"content-type": content_type}))


@pytest.mark.anyio
async def test_zip_rejected_before_anything_is_stored(tmp_path):
    root = tmp_path / "uploads"
    session = UploadSession(str(root))
    with pytest.raises(InvalidFileType):
        await session.accept([upload("cv.txt", b"Jane", TXT), upload("cvs.zip", b"PK\x03\x04", "application/zip")])
    assert not root.exists()
    assert session.files == []


@pytest.mark.anyio
async def test_files_get_unique_names_in_request_directory(tmp_path):
    root = tmp_path / "uploads"
    async with UploadSession(str(root)) as session:
        records = await session.accept([upload("my cv.txt", b"one", TXT), upload("my cv.txt", b"two", TXT)])
        paths = {r.storage_path for r in records}
        assert len(paths) == 2
        for r in records:
            assert r.original_name == "my cv.txt"
            assert r.declared_media_type == TXT
            assert r.size_bytes == 3
            assert r.storage_path.startswith(session.directory)
            assert r.storage_path.endswith("my_cv.txt")
    assert stored_files(root) == []


@pytest.mark.anyio
async def test_session_removes_files_when_request_fails(tmp_path):
    root = tmp_path / "uploads"
    with pytest.raises(RuntimeError):
        async with UploadSession(str(root)) as session:
            await session.accept([upload("cv.txt", b"Jane", TXT)])
            assert len(stored_files(root)) == 2  # directory + file
            raise RuntimeError("downstream failure")
    assert stored_files(root) == []


@pytest.mark.anyio
async def test_ingest_extracts_in_order_and_releases_files(tmp_path):
    root = tmp_path / "uploads"
    async with UploadSession(str(root)) as session:
        docs = await ingest(session, [upload("a.txt", b"first", TXT), upload("b.txt", b"second", TXT)])
        assert session.files == []
    assert [(d.source_filename, d.text) for d in docs] == [("a.txt", "first"), ("b.txt", "second")]
    assert stored_files(root) == []


@pytest.mark.anyio
async def test_ingest_failure_names_file_and_cleans_up(tmp_path):
    root = tmp_path / "uploads"
    with pytest.raises(ExtractionFailed) as info:
        async with UploadSession(str(root)) as session:
            await ingest(session, [upload("broken.pdf", b"garbage", "application/pdf")])
    assert info.value.filename == "broken.pdf"
    assert stored_files(root) == []


def test_safe_filename_strips_directories():
    assert safe_filename("../../etc/passwd") == "passwd"
    assert safe_filename("C:\\Users\\me\\My CV.pdf") == "My_CV.pdf"
    assert safe_filename("") == "upload"


@pytest.mark.anyio
async def test_deletion_failures_are_logged_not_raised(tmp_path, monkeypatch, caplog):
    def refuse(path, *args, **kwargs):
        raise PermissionError(13, "Permission denied", str(path))

    caplog.set_level(logging.WARNING, logger="infra.storage.uploads")
    async with UploadSession(str(tmp_path / "uploads")) as session:
        await session.accept([upload("cv.txt", b"Jane", TXT)])
        monkeypatch.setattr(os, "remove", refuse)
        monkeypatch.setattr(shutil, "rmtree", refuse)

    messages = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert any(m.startswith("Could not delete upload ") and "directory" not in m for m in messages)
    assert any(m.startswith("Could not delete upload directory") for m in messages)
    assert session.files == []
    assert session.directory is None
