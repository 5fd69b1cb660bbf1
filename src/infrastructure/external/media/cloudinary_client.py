# File: infrastructure/external/media/cloudinary_client.py
import asyncio
import hashlib
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

import aiohttp
from pydantic import BaseModel

from common.config.settings import Settings
from common.exceptions.base_exception import MediaUploadException
from common.logging.logger import log_info, log_error

CLOUDINARY_API_BASE = "https://api.cloudinary.com/v1_1"


class MediaUploadResult(BaseModel):
    url: str
    duration: Optional[float] = None
    public_id: Optional[str] = None


class MediaUploader(ABC):
    """Moves a staged local file to public object storage."""

    @abstractmethod
    async def upload(self, local_path: Union[str, Path]) -> MediaUploadResult:
        ...


class CloudinaryUploader(MediaUploader):
    def __init__(self, cloud_name: str, api_key: str, api_secret: str, timeout: int = 300, api_base: str = CLOUDINARY_API_BASE):
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.timeout = timeout
        self.api_base = api_base

    @classmethod
    def from_settings(cls, settings: Settings) -> "CloudinaryUploader":
        return cls(
            cloud_name=settings.CLOUDINARY_CLOUD_NAME,
            api_key=settings.CLOUDINARY_API_KEY,
            api_secret=settings.CLOUDINARY_API_SECRET,
            timeout=settings.MEDIA_UPLOAD_TIMEOUT,
        )

    @property
    def upload_url(self) -> str:
        return f"{self.api_base}/{self.cloud_name}/auto/upload"

    def sign(self, params: Dict[str, str]) -> str:
        """Cloudinary request signature: sha1 of the sorted params followed by the API secret."""
        to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
        return hashlib.sha1(f"{to_sign}{self.api_secret}".encode()).hexdigest()

    async def upload(self, local_path: Union[str, Path]) -> MediaUploadResult:
        path = Path(local_path)
        params = {"timestamp": str(int(time.time()))}
        try:
            if not (self.cloud_name and self.api_key and self.api_secret):
                raise MediaUploadException(detail="Media storage is not configured.")
            if not path.is_file():
                raise MediaUploadException(detail=f"Staged file {path.name} not found.")

            with path.open("rb") as file_handle:
                form = aiohttp.FormData()
                form.add_field("api_key", self.api_key)
                form.add_field("timestamp", params["timestamp"])
                form.add_field("signature", self.sign(params))
                form.add_field("file", file_handle, filename=path.name)

                async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=self.timeout)) as session:
                    async with session.post(self.upload_url, data=form) as response:
                        payload = await response.json(content_type=None) or {}
                        if response.status != 200:
                            message = payload.get("error", {}).get("message", "unknown error")
                            log_error("Cloudinary rejected upload", extra={"file": path.name, "status": response.status, "error": message})
                            raise MediaUploadException(detail=f"Media upload rejected: {message}")
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            log_error("Cloudinary upload failed", extra={"file": path.name, "error": str(e)}, exc_info=True)
            raise MediaUploadException(detail="Media upload failed.") from e
        finally:
            # staged files never outlive the attempt
            path.unlink(missing_ok=True)

        url = payload.get("secure_url") or payload.get("url")
        if not url:
            raise MediaUploadException(detail="Media store returned no URL.")

        log_info("File uploaded to Cloudinary", extra={"file": path.name, "url": url})
        return MediaUploadResult(url=url, duration=payload.get("duration"), public_id=payload.get("public_id"))
