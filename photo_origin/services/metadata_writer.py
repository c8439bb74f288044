from __future__ import annotations

import logging

from photo_origin.services.comment_codec import (
	append_annotation,
	decode_comment,
	encode_comment,
	has_annotation,
)
from photo_origin.services.exif_codec import DATE_TAKEN_TAG, PRIMARY_SECTION, USER_COMMENT_TAG, Container

logger = logging.getLogger(__name__)


def encode_original_filename(file_name: str, container: Container) -> None:
	"""
	Record `file_name` as an `OriginalFilename: ...` line in the UserComment tag.

	Mutates `container` in place. Nothing is written when the name is empty,
	when DateTimeOriginal is missing (the capture metadata was probably
	stripped, so the current name is unlikely to be the original one), or
	when the comment already carries an OriginalFilename line.
	"""
	if not file_name:
		return
	exif = container.get(PRIMARY_SECTION)
	if not isinstance(exif, dict):
		exif = {}
	if not exif.get(DATE_TAKEN_TAG):
		logger.debug("No DateTimeOriginal, not recording %s", file_name)
		return

	text = decode_comment(exif.get(USER_COMMENT_TAG))
	if has_annotation(text):
		logger.debug("OriginalFilename already present, keeping it")
		return

	exif[USER_COMMENT_TAG] = encode_comment(append_annotation(text, file_name))
	container[PRIMARY_SECTION] = exif
	logger.debug("Recorded OriginalFilename: %s", file_name)
