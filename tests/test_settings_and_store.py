import asyncio
from pathlib import Path

import pytest

from photo_origin.services import file_store
from photo_origin.settings import DEFAULT_HEADER_WINDOW, load_settings


def test_defaults():
	s = load_settings({})
	assert s.storage_root == Path("storage")
	assert s.header_window_bytes == DEFAULT_HEADER_WINDOW == 65536
	assert s.cors_origins == ["*"]
	assert s.log_level == "INFO"


def test_env_overrides():
	s = load_settings({
		"PHOTO_ORIGIN_STORAGE_ROOT": "/data/photos",
		"PHOTO_ORIGIN_HEADER_WINDOW": "131072",
		"PHOTO_ORIGIN_CORS_ORIGINS": "http://a.test, http://b.test",
		"PHOTO_ORIGIN_LOG_LEVEL": "debug",
	})
	assert s.storage_root == Path("/data/photos")
	assert s.header_window_bytes == 131072
	assert s.cors_origins == ["http://a.test", "http://b.test"]
	assert s.log_level == "DEBUG"


@pytest.mark.parametrize("raw", ["abc", "0", "-5"])
def test_bad_header_window_falls_back(raw):
	assert load_settings({"PHOTO_ORIGIN_HEADER_WINDOW": raw}).header_window_bytes == DEFAULT_HEADER_WINDOW


def test_resolve_keeps_basename(tmp_path):
	assert file_store.resolve("../../etc/passwd", tmp_path) == tmp_path / "passwd"


def test_storage_root_from_env(monkeypatch, tmp_path):
	monkeypatch.setenv("PHOTO_ORIGIN_STORAGE_ROOT", str(tmp_path))
	assert file_store.resolve("a.jpg") == tmp_path / "a.jpg"


def test_write_then_read(tmp_path):
	path = asyncio.run(file_store.write_binary("a.jpg", b"\xff\xd8data", tmp_path / "sub"))
	assert Path(path) == tmp_path / "sub" / "a.jpg"
	assert asyncio.run(file_store.read_binary("a.jpg", tmp_path / "sub")) == b"\xff\xd8data"


def test_read_missing(tmp_path):
	with pytest.raises(FileNotFoundError):
		asyncio.run(file_store.read_binary("missing.jpg", tmp_path))


def test_list_jpegs(tmp_path):
	for name in ("b.jpg", "a.JPEG", "c.png", "d.txt"):
		(tmp_path / name).write_bytes(b"x")
	(tmp_path / "dir.jpg").mkdir()
	assert [p.name for p in file_store.list_jpegs(tmp_path)] == ["a.JPEG", "b.jpg"]
