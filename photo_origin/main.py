from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from photo_origin.routers.metadata import router as metadata_router
from photo_origin.settings import Settings, load_settings


def create_app(settings: Optional[Settings] = None) -> FastAPI:
	settings = settings or load_settings()
	app = FastAPI(title="Photo Origin - EXIF filename API", version="0.1.0")
	app.state.settings = settings
	logging.getLogger("photo_origin").setLevel(settings.log_level)

	app.add_middleware(
		CORSMiddleware,
		allow_origins=settings.cors_origins,
		allow_credentials=False,
		allow_methods=["*"],
		allow_headers=["*"],
	)

	app.include_router(metadata_router)

	return app


app = create_app()


if __name__ == "__main__":
	# Local dev server: uvicorn photo_origin.main:app --reload
	import uvicorn

	logging.basicConfig(level=load_settings().log_level)
	uvicorn.run("photo_origin.main:app", host="0.0.0.0", port=8000, reload=True)
