from __future__ import annotations

import datetime as dt
import logging
import re
import uuid
from typing import Optional

import boto3
from botocore.config import Config

from ..core.config import settings

logger = logging.getLogger(__name__)


class StorageNotConfigured(RuntimeError):
    pass


class R2Config:
    def __init__(self) -> None:
        self.account_id = settings.R2_ACCOUNT_ID.strip()
        self.access_key_id = settings.R2_ACCESS_KEY_ID.strip()
        self.secret_access_key = settings.R2_SECRET_ACCESS_KEY.strip()
        self.bucket = settings.R2_BUCKET.strip()
        # Example: https://9bd...d91c.r2.cloudflarestorage.com (or EU endpoint)
        self.endpoint_url = settings.R2_S3_ENDPOINT.strip() or (
            f"https://{self.account_id}.r2.cloudflarestorage.com" if self.account_id else ""
        )
        # Public custom domain used to reference objects. If not provided, fall
        # back to the path-style base using the S3 endpoint plus the bucket.
        public = settings.R2_PUBLIC_BASE_URL.strip().rstrip("/")
        if not public and self.endpoint_url and self.bucket:
            public = f"{self.endpoint_url.rstrip('/')}/{self.bucket}"
        self.public_base_url = public

    def is_configured(self) -> bool:
        return bool(self.bucket and self.endpoint_url and self.access_key_id and self.secret_access_key)


def _client(cfg: R2Config):
    """Create an S3 client configured for Cloudflare R2.

    - region "auto" (R2 requirement)
    - path-style addressing
    """
    return boto3.client(
        "s3",
        aws_access_key_id=cfg.access_key_id,
        aws_secret_access_key=cfg.secret_access_key,
        endpoint_url=cfg.endpoint_url,
        region_name="auto",
        config=Config(
            signature_version="s3v4",
            s3={"addressing_style": "path"},
        ),
    )


_IMAGE_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "image/avif": ".avif",
    "image/heic": ".heic",
}


def guess_extension(filename: Optional[str], content_type: Optional[str]) -> str:
    if filename and "." in filename:
        ext = filename.rsplit(".", 1)[-1].strip().lower()
        if ext:
            return "." + ext
    return _IMAGE_EXTENSIONS.get((content_type or "").lower(), "")


def build_key(folder: str, owner: str, filename: Optional[str], content_type: Optional[str]) -> str:
    # owner is usually an email; keep keys URL friendly
    slug = re.sub(r"[^a-z0-9]+", "-", (owner or "anonymous").lower()).strip("-") or "anonymous"
    now = dt.datetime.utcnow()
    uid = uuid.uuid4().hex
    ext = guess_extension(filename, content_type)
    return f"{folder.strip('/')}/{slug}/{now:%Y}/{now:%m}/{uid}{ext}"


def upload_bytes(
    data: bytes,
    folder: str,
    owner: str,
    filename: Optional[str] = None,
    content_type: Optional[str] = None,
) -> str:
    """Store ``data`` under ``folder`` and return its public URL."""
    cfg = R2Config()
    if not cfg.is_configured():
        raise StorageNotConfigured("R2 is not configured")
    key = build_key(folder, owner, filename, content_type)
    params = {"Bucket": cfg.bucket, "Key": key, "Body": data}
    if content_type:
        params["ContentType"] = content_type
    _client(cfg).put_object(**params)
    logger.info("Uploaded %d bytes to %s", len(data), key)
    return f"{cfg.public_base_url}/{key}"
