from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_ROOT = Path("storage")
DEFAULT_HEADER_WINDOW = 64 * 1024
DEFAULT_LOG_LEVEL = "INFO"


@dataclass
class Settings:
	storage_root: Path = DEFAULT_STORAGE_ROOT
	header_window_bytes: int = DEFAULT_HEADER_WINDOW
	cors_origins: List[str] = field(default_factory=lambda: ["*"])
	log_level: str = DEFAULT_LOG_LEVEL


def _int_env(env: dict, key: str, default: int) -> int:
	raw = env.get(key)
	if raw is None or raw == "":
		return default
	try:
		value = int(raw)
	except ValueError:
		logger.warning("Ignoring %s=%r: not an integer", key, raw)
		return default
	if value <= 0:
		logger.warning("Ignoring %s=%r: must be positive", key, raw)
		return default
	return value


def load_settings(env: Optional[dict] = None) -> Settings:
	env = os.environ if env is None else env
	origins = [o.strip() for o in env.get("PHOTO_ORIGIN_CORS_ORIGINS", "*").split(",") if o.strip()]
	return Settings(
		storage_root=Path(env.get("PHOTO_ORIGIN_STORAGE_ROOT") or DEFAULT_STORAGE_ROOT),
		header_window_bytes=_int_env(env, "PHOTO_ORIGIN_HEADER_WINDOW", DEFAULT_HEADER_WINDOW),
		cors_origins=origins or ["*"],
		log_level=(env.get("PHOTO_ORIGIN_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
	)
