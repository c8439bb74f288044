from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any, Callable, Dict

import piexif

# section name -> tag id -> value, as produced by piexif.load
Container = Dict[str, Any]

PRIMARY_SECTION = "Exif"
DATE_TAKEN_TAG = piexif.ExifIFD.DateTimeOriginal
USER_COMMENT_TAG = piexif.ExifIFD.UserComment

_DATA_URI_PREFIX = "data:image/jpeg;base64,"


@dataclass(frozen=True)
class MetadataCodec:
	parse: Callable[[str], Container]
	dump: Callable[[Container], bytes]


def to_data_uri(data: bytes) -> str:
	return _DATA_URI_PREFIX + base64.b64encode(data).decode("ascii")


def from_data_uri(uri: str) -> bytes:
	head, sep, payload = uri.partition(",")
	if not sep or not head.startswith("data:") or not head.endswith(";base64"):
		raise ValueError("Not a base64 data URI")
	try:
		return base64.b64decode(payload, validate=True)
	except binascii.Error as e:
		raise ValueError(f"Invalid base64 payload: {e}") from e


def piexif_parse(uri: str) -> Container:
	data = from_data_uri(uri)
	# piexif.load treats anything without an image signature as a file path
	if not data.startswith(b"\xff\xd8"):
		raise ValueError("Not JPEG data")
	return piexif.load(data)


def _encode_text_values(section: Dict[Any, Any]) -> Dict[Any, Any]:
	# piexif only accepts bytes for UNDEFINED-typed tags such as UserComment
	return {tag: (v.encode("utf-8") if isinstance(v, str) else v) for tag, v in section.items()}


def piexif_dump(container: Container) -> bytes:
	prepared: Container = {}
	for name, section in container.items():
		prepared[name] = _encode_text_values(section) if isinstance(section, dict) else section
	return piexif.dump(prepared)


PIEXIF_CODEC = MetadataCodec(parse=piexif_parse, dump=piexif_dump)
