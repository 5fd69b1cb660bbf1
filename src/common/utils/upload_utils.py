# File: common/utils/upload_utils.py
from pathlib import Path
from typing import Optional, Union
from uuid import uuid4

from fastapi import UploadFile

from common.config.settings import settings
from common.logging.logger import log_info


async def stage_upload(upload: Optional[UploadFile], staging_dir: Optional[Path] = None) -> Optional[Path]:
    """Write a multipart upload to the local staging directory for the media uploader."""
    if upload is None or not upload.filename:
        return None
    directory = Path(staging_dir or settings.UPLOAD_STAGING_DIR)
    directory.mkdir(parents=True, exist_ok=True)
    target = directory / f"{uuid4().hex}_{Path(upload.filename).name}"
    target.write_bytes(await upload.read())
    log_info("Upload staged", extra={"file": target.name, "content_type": upload.content_type})
    return target


def discard_staged(*paths: Optional[Union[str, Path]]) -> None:
    """Remove staged files that were never handed to (or were left behind by) the uploader."""
    for path in paths:
        if path and Path(path).exists():
            Path(path).unlink(missing_ok=True)
            log_info("Staged upload discarded", extra={"file": Path(path).name})
