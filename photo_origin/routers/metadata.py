from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, Request, Response, UploadFile

from photo_origin.services import file_store
from photo_origin.services.annotate_pipeline import AnnotationError, NotJpegError, annotate_bytes
from photo_origin.services.metadata_reader import extract, extract_from_source


router = APIRouter(prefix="/metadata", tags=["metadata"])


def _storage_root(request: Request) -> Path:
	return request.app.state.settings.storage_root


def _header_window(request: Request) -> int:
	return request.app.state.settings.header_window_bytes


@router.post("/extract", summary="Read capture date and recorded original filename from an upload")
async def extract_upload(request: Request, file: UploadFile = File(...)):
	data = await file.read()
	fields = extract(data, header_window=_header_window(request))
	return {"filename": file.filename, **fields}


@router.post("/annotate", summary="Record the original filename in an uploaded JPEG")
async def annotate_upload(file: UploadFile = File(...), file_name: Optional[str] = Form(None)):
	data = await file.read()
	name = file_name if file_name is not None else Path(file.filename or "").name
	try:
		result = annotate_bytes(data, name)
	except NotJpegError as e:
		raise HTTPException(status_code=400, detail=str(e))
	except AnnotationError as e:
		raise HTTPException(status_code=422, detail=str(e))
	return Response(
		content=result.data,
		media_type="image/jpeg",
		headers={"X-Photo-Origin-Changed": "true" if result.changed else "false"},
	)


@router.get("/files/{name}", summary="Read metadata of a stored file")
async def stored_file_metadata(request: Request, name: str):
	root = _storage_root(request)
	if not file_store.resolve(name, root).is_file():
		raise HTTPException(status_code=404, detail=f"{name} not found")

	async def _read(n: str) -> bytes:
		return await file_store.read_binary(n, root)

	fields = await extract_from_source(_read, name, header_window=_header_window(request))
	return {"filename": Path(name).name, **fields}


@router.post("/files/{name}/annotate", summary="Record the original filename in a stored JPEG")
async def annotate_stored_file(request: Request, name: str):
	root = _storage_root(request)
	if not file_store.resolve(name, root).is_file():
		raise HTTPException(status_code=404, detail=f"{name} not found")
	data = await file_store.read_binary(name, root)
	filename = Path(name).name
	try:
		result = annotate_bytes(data, filename)
	except NotJpegError as e:
		raise HTTPException(status_code=400, detail=str(e))
	except AnnotationError as e:
		raise HTTPException(status_code=422, detail=str(e))
	if result.changed:
		await file_store.write_binary(filename, result.data, root)
	return {"filename": filename, "changed": result.changed, "original_filename": result.original_filename}
