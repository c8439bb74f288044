from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from photo_origin.services.comment_codec import decode_comment, find_original_filename
from photo_origin.services.exif_codec import (
	DATE_TAKEN_TAG,
	PIEXIF_CODEC,
	PRIMARY_SECTION,
	USER_COMMENT_TAG,
	MetadataCodec,
	to_data_uri,
)

logger = logging.getLogger(__name__)

# EXIF lives in the JPEG header; no need to transcode the whole file
HEADER_WINDOW_BYTES = 64 * 1024

H = TypeVar("H")


@dataclass
class ReadOutcome:
	date_taken: str = ""
	original_filename: str = ""
	error: Optional[str] = None

	@property
	def ok(self) -> bool:
		return self.error is None

	def as_dict(self) -> Dict[str, str]:
		return {"date_taken": self.date_taken, "original_filename": self.original_filename}


def _bytes_to_str(v: Any) -> Optional[str]:
	if v is None:
		return None
	if isinstance(v, bytes):
		return v.decode("utf-8", errors="replace")
	if isinstance(v, str):
		return v
	return str(v)


def format_date_taken(raw: Any) -> str:
	"""
	"2021:07:04 10:00:00" -> "2021-07-04". Missing or empty values give "".
	"""
	text = _bytes_to_str(raw)
	if not text:
		return ""
	return text.split(" ", 1)[0].replace(":", "-")


def read_exif_fields(
	file_bytes: bytes,
	codec: MetadataCodec = PIEXIF_CODEC,
	header_window: int = HEADER_WINDOW_BYTES,
) -> ReadOutcome:
	try:
		window = bytes(file_bytes[:header_window])
		container = codec.parse(to_data_uri(window))
		exif = container.get(PRIMARY_SECTION) or {}
		date_taken = format_date_taken(exif.get(DATE_TAKEN_TAG))
		comment = decode_comment(exif.get(USER_COMMENT_TAG))
		return ReadOutcome(date_taken=date_taken, original_filename=find_original_filename(comment))
	except Exception as e:
		logger.warning("Could not extract EXIF date or original filename: %s", e)
		return ReadOutcome(error=f"{type(e).__name__}: {e}")


def extract(
	file_bytes: bytes,
	codec: MetadataCodec = PIEXIF_CODEC,
	header_window: int = HEADER_WINDOW_BYTES,
) -> Dict[str, str]:
	return read_exif_fields(file_bytes, codec=codec, header_window=header_window).as_dict()


async def extract_from_source(
	read_binary: Callable[[H], Awaitable[bytes]],
	handle: H,
	codec: MetadataCodec = PIEXIF_CODEC,
	header_window: int = HEADER_WINDOW_BYTES,
) -> Dict[str, str]:
	try:
		data = await read_binary(handle)
	except Exception as e:
		logger.warning("Could not read %s for EXIF extraction: %s", handle, e)
		return ReadOutcome(error=f"{type(e).__name__}: {e}").as_dict()
	return extract(data, codec=codec, header_window=header_window)
