from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, List

import piexif
from PIL import Image, UnidentifiedImageError

from photo_origin.services.exif_codec import (
	PIEXIF_CODEC,
	PRIMARY_SECTION,
	USER_COMMENT_TAG,
	MetadataCodec,
	to_data_uri,
)
from photo_origin.services.file_store import list_jpegs
from photo_origin.services.metadata_reader import HEADER_WINDOW_BYTES, read_exif_fields
from photo_origin.services.metadata_writer import encode_original_filename

logger = logging.getLogger(__name__)


class NotJpegError(ValueError):
	pass


class AnnotationError(RuntimeError):
	pass


@dataclass
class AnnotateResult:
	data: bytes
	changed: bool
	original_filename: str


def is_jpeg(data: bytes) -> bool:
	try:
		with Image.open(BytesIO(data)) as img:
			return img.format == "JPEG"
	except (UnidentifiedImageError, OSError, ValueError):
		return False


def _comment_of(container: Dict[str, Any]) -> Any:
	exif = container.get(PRIMARY_SECTION)
	return exif.get(USER_COMMENT_TAG) if isinstance(exif, dict) else None


def annotate_bytes(data: bytes, file_name: str, codec: MetadataCodec = PIEXIF_CODEC) -> AnnotateResult:
	if not is_jpeg(data):
		raise NotJpegError(f"{file_name or 'input'} is not a JPEG image")
	try:
		container = codec.parse(to_data_uri(data))
	except Exception as e:
		raise AnnotationError(f"Could not read EXIF from {file_name}: {e}") from e

	before = _comment_of(container)
	encode_original_filename(file_name, container)
	if _comment_of(container) == before:
		outcome = read_exif_fields(data, codec=codec, header_window=len(data))
		return AnnotateResult(data=data, changed=False, original_filename=outcome.original_filename)

	try:
		exif_bytes = codec.dump(container)
		out = BytesIO()
		piexif.insert(exif_bytes, data, out)
	except Exception as e:
		raise AnnotationError(f"Could not write EXIF for {file_name}: {e}") from e
	return AnnotateResult(data=out.getvalue(), changed=True, original_filename=file_name)


def annotate_folder(folder: Path, dry_run: bool = False, codec: MetadataCodec = PIEXIF_CODEC) -> Dict[str, Any]:
	records: List[Dict[str, Any]] = []
	for p in list_jpegs(folder):
		info: Dict[str, Any] = {"filename": p.name}
		try:
			result = annotate_bytes(p.read_bytes(), p.name, codec=codec)
			if result.changed and not dry_run:
				with p.open("wb") as f:
					f.write(result.data)
			info.update(read_exif_fields(result.data, codec=codec).as_dict())
			info["status"] = "annotated" if result.changed else "unchanged"
			info["written"] = result.changed and not dry_run
		except (NotJpegError, AnnotationError, OSError) as e:
			logger.warning("Skipping %s: %s", p, e)
			info.update({"status": "error", "error": str(e), "date_taken": "", "original_filename": ""})
		records.append(info)
	return {"folder": str(folder), "dry_run": dry_run, "images": records}


def extract_folder(folder: Path, codec: MetadataCodec = PIEXIF_CODEC, header_window: int = HEADER_WINDOW_BYTES) -> Dict[str, Any]:
	records: List[Dict[str, Any]] = []
	for p in list_jpegs(folder):
		info: Dict[str, Any] = {"filename": p.name}
		info.update(read_exif_fields(p.read_bytes(), codec=codec, header_window=header_window).as_dict())
		records.append(info)
	return {"images": records}


def write_report(report: Dict[str, Any], out_path: Path) -> str:
	out_path.parent.mkdir(parents=True, exist_ok=True)
	with out_path.open("w", encoding="utf-8") as f:
		json.dump(report, f, indent=2)
	return str(out_path)
