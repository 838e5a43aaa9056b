from __future__ import annotations

"""Photo storage naming and stored-path to public URL resolution."""

import logging
import random
import shutil
import threading
import time
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Optional

from orgchart.core.config import get_settings

logger = logging.getLogger(__name__)

PHOTO_FIELD = "newPhoto"
_MAX_NAME_ATTEMPTS = 5

_clock_lock = threading.Lock()
_last_millis = 0


def _next_millis() -> int:
    """Wall-clock milliseconds that never go backwards within the process."""
    global _last_millis
    with _clock_lock:
        _last_millis = max(_last_millis, int(time.time() * 1000))
        return _last_millis


def _managed_marker(upload_dir: Path) -> str:
    return f"{upload_dir.name}/"


def is_managed_reference(stored_path: Optional[str], upload_dir: Optional[Path] = None) -> bool:
    if not stored_path or not isinstance(stored_path, str):
        return False
    upload_dir = upload_dir or get_settings().upload_dir
    return _managed_marker(upload_dir) in stored_path.replace("\\", "/")


def resolve_photo_url(
    stored_path: Optional[str],
    base_url: Optional[str] = None,
    upload_dir: Optional[Path] = None,
) -> Optional[str]:
    """Map a managed-storage path to `<base_url>/<file name>`.

    Anything else (empty values, inline Base64 images, URLs already
    resolved) comes back unchanged.
    """
    if not is_managed_reference(stored_path, upload_dir):
        return stored_path
    base_url = (base_url or get_settings().public_base_url).rstrip("/")
    file_name = PurePosixPath(stored_path.replace("\\", "/")).name
    return f"{base_url}/{file_name}"


def generate_photo_filename(original_filename: Optional[str], field_name: str = PHOTO_FIELD) -> str:
    """Collision-resistant name keeping the original extension."""
    suffix = Path(original_filename or "").suffix
    unique = f"{_next_millis()}-{random.randint(0, 10**9)}"
    return f"{field_name}-{unique}{suffix}"


def store_uploaded_file(
    fileobj: BinaryIO,
    original_filename: Optional[str],
    upload_dir: Optional[Path] = None,
) -> str:
    """Write an uploaded payload into managed storage and return its reference."""
    upload_dir = Path(upload_dir or get_settings().upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)
    for _ in range(_MAX_NAME_ATTEMPTS):
        target = upload_dir / generate_photo_filename(original_filename)
        try:
            out = target.open("xb")
        except FileExistsError:
            continue
        try:
            with out:
                shutil.copyfileobj(fileobj, out)
        except OSError:
            target.unlink(missing_ok=True)
            raise
        logger.info("Stored uploaded photo %s as %s", original_filename, target.name)
        return target.as_posix()
    raise FileExistsError(f"Could not find a free file name in {upload_dir}")


def discard_stored_file(stored_path: str) -> None:
    """Remove a stored upload that will never be referenced."""
    try:
        Path(stored_path).unlink()
    except FileNotFoundError:
        return
    logger.info("Discarded orphaned upload %s", stored_path)
