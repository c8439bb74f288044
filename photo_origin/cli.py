from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from photo_origin.services.annotate_pipeline import annotate_folder, extract_folder, write_report
from photo_origin.settings import load_settings


def _folder(arg: str) -> Path:
	folder = Path(arg).resolve()
	if not folder.is_dir():
		raise SystemExit(f"Not a folder: {folder}")
	return folder


def _run_extract(args: argparse.Namespace) -> int:
	report = extract_folder(_folder(args.folder), header_window=load_settings().header_window_bytes)
	for r in report["images"]:
		print(f"{r['filename']}\t{r['date_taken'] or '-'}\t{r['original_filename'] or '-'}")
	if args.output:
		print(f"Saved: {write_report(report, Path(args.output))}")
	return 0


def _run_annotate(args: argparse.Namespace) -> int:
	report = annotate_folder(_folder(args.folder), dry_run=args.dry_run)
	failed = 0
	for r in report["images"]:
		if r["status"] == "error":
			failed += 1
			print(f"{r['filename']}\terror\t{r['error']}")
		else:
			print(f"{r['filename']}\t{r['status']}\t{r['original_filename'] or '-'}")
	if args.output:
		print(f"Saved: {write_report(report, Path(args.output))}")
	return 1 if failed else 0


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="photo-origin", description="Record and read original filenames in JPEG EXIF UserComment")
	parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ...)")
	sub = parser.add_subparsers(dest="command", required=True)

	p_extract = sub.add_parser("extract", help="Print capture date and recorded original filename for each JPEG")
	p_extract.add_argument("folder", help="Folder containing JPEG files")
	p_extract.add_argument("--output", help="Write a JSON report to this path")
	p_extract.set_defaults(func=_run_extract)

	p_annotate = sub.add_parser("annotate", help="Record each JPEG's current name as its original filename")
	p_annotate.add_argument("folder", help="Folder containing JPEG files")
	p_annotate.add_argument("--dry-run", action="store_true", help="Report what would change without writing files")
	p_annotate.add_argument("--output", help="Write a JSON report to this path")
	p_annotate.set_defaults(func=_run_annotate)
	return parser


def main(argv: Optional[List[str]] = None) -> int:
	args = build_parser().parse_args(argv)
	logging.basicConfig(level=args.log_level.upper())
	return args.func(args)


if __name__ == "__main__":
	raise SystemExit(main())
