from __future__ import annotations

from io import BytesIO
from typing import Any, Dict, Optional, Tuple

import piexif
import pytest
from PIL import Image

DATE_TAKEN = b"2021:07:04 10:00:00"


def build_jpeg(exif: Optional[Dict[str, Any]] = None, size: Tuple[int, int] = (16, 16), noise: bool = False) -> bytes:
	if noise:
		img = Image.effect_noise(size, 64).convert("RGB")
	else:
		img = Image.new("RGB", size, (120, 80, 40))
	buf = BytesIO()
	if exif is not None:
		img.save(buf, format="JPEG", quality=95, exif=piexif.dump(exif))
	else:
		img.save(buf, format="JPEG", quality=95)
	return buf.getvalue()


def exif_dict(date_taken: Optional[bytes] = DATE_TAKEN, comment: Optional[bytes] = None) -> Dict[str, Any]:
	exif: Dict[int, Any] = {}
	if date_taken is not None:
		exif[piexif.ExifIFD.DateTimeOriginal] = date_taken
	if comment is not None:
		exif[piexif.ExifIFD.UserComment] = comment
	return {"0th": {piexif.ImageIFD.Make: b"Canon"}, "Exif": exif}


@pytest.fixture
def dated_jpeg() -> bytes:
	return build_jpeg(exif_dict())


@pytest.fixture
def undated_jpeg() -> bytes:
	return build_jpeg(exif_dict(date_taken=None))


@pytest.fixture
def annotated_jpeg() -> bytes:
	return build_jpeg(exif_dict(comment=b"ASCII\x00\x00\x00Camera: Canon\nOriginalFilename: old.jpg"))


@pytest.fixture
def plain_jpeg() -> bytes:
	return build_jpeg()


@pytest.fixture
def png_bytes() -> bytes:
	buf = BytesIO()
	Image.new("RGB", (8, 8)).save(buf, format="PNG")
	return buf.getvalue()
