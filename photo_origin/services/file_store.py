from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional

from photo_origin.settings import load_settings

JPEG_EXTS = {".jpg", ".jpeg"}


def storage_root() -> Path:
	return load_settings().storage_root


def resolve(name: str, root: Optional[Path] = None) -> Path:
	base = root if root is not None else storage_root()
	return base / Path(name).name


async def read_binary(name: str, root: Optional[Path] = None) -> bytes:
	path = resolve(name, root)
	return await asyncio.to_thread(path.read_bytes)


def _write(path: Path, data: bytes) -> None:
	path.parent.mkdir(parents=True, exist_ok=True)
	with path.open("wb") as f:
		f.write(data)


async def write_binary(name: str, data: bytes, root: Optional[Path] = None) -> str:
	path = resolve(name, root)
	await asyncio.to_thread(_write, path, data)
	return str(path)


def list_jpegs(folder: Path) -> List[Path]:
	return sorted([p for p in folder.iterdir() if p.is_file() and p.suffix.lower() in JPEG_EXTS])
