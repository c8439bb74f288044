"""
UserComment text handling.

The EXIF UserComment tag starts with an 8-byte character-set marker. Only the
ASCII marker is written here; values without it are read as plain text.
"""
from __future__ import annotations

import re
from typing import Any, List

CHARSET_PREFIX = "ASCII\x00\x00\x00"
ANNOTATION_LABEL = "OriginalFilename"

_LINE_BREAK = re.compile(r"\r?\n")


def decode_comment(raw: Any) -> str:
	if raw is None:
		return ""
	if isinstance(raw, bytes):
		raw = raw.decode("utf-8", errors="replace")
	if not isinstance(raw, str):
		return ""
	if raw.startswith(CHARSET_PREFIX):
		return raw[len(CHARSET_PREFIX):]
	return raw


def encode_comment(text: str) -> str:
	return CHARSET_PREFIX + text


def split_lines(text: str) -> List[str]:
	return _LINE_BREAK.split(text)


def has_annotation(text: str) -> bool:
	return any(line.strip().startswith(ANNOTATION_LABEL) for line in split_lines(text))


def find_original_filename(text: str) -> str:
	"""
	Return the value of the first `OriginalFilename: <value>` line, stripped.
	Lines with an empty value are skipped.
	"""
	label = ANNOTATION_LABEL + ":"
	for line in split_lines(text):
		stripped = line.strip()
		if not stripped.startswith(label):
			continue
		value = stripped[len(label):].strip()
		if value:
			return value
	return ""


def append_annotation(text: str, file_name: str) -> str:
	line = f"{ANNOTATION_LABEL}: {file_name}"
	return f"{text}\n{line}" if text else line
