# prep_admin/services/storage_service.py
import logging
import re
import time
from typing import BinaryIO, Optional, Tuple

import boto3
from botocore.exceptions import ClientError

from prep_admin.core.config import settings

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"NoSuchKey", "404", "NotFound"}

_s3_client = None


class StorageError(Exception):
    pass


def get_s3_client():
    global _s3_client
    if _s3_client is None:
        _s3_client = boto3.client(
            "s3",
            region_name=settings.AWS_REGION,
            endpoint_url=settings.S3_ENDPOINT_URL,
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
        )
    return _s3_client


def build_object_key(filename: str, path: Optional[str] = None) -> str:
    """``<path>/<epoch-ms>-<filename>`` with whitespace runs turned into ``_``."""
    safe_name = re.sub(r"\s+", "_", filename)
    name = f"{int(time.time() * 1000)}-{safe_name}"
    if path:
        return f"{path.strip('/')}/{name}"
    return name


def public_url(bucket: str, key: str) -> str:
    return f"{settings.STORAGE_PUBLIC_BASE_URL.rstrip('/')}/{bucket}/{key}"


def parse_public_url(url: str) -> Optional[Tuple[str, str]]:
    """
    Inverse of ``public_url``: returns (bucket, key), or None when the URL
    does not point into our storage.
    """
    prefix = settings.STORAGE_PUBLIC_BASE_URL.rstrip("/") + "/"
    if not url or not url.startswith(prefix):
        return None
    bucket, _, key = url[len(prefix):].partition("/")
    if not bucket or not key:
        return None
    return bucket, key


def upload_file(
    fileobj: BinaryIO,
    filename: str,
    *,
    bucket: str,
    path: Optional[str] = None,
    content_type: Optional[str] = None,
) -> str:
    """
    Upload a file and return its public URL.
    """
    if not filename:
        raise StorageError("File is required for upload.")
    if not bucket:
        raise StorageError("Bucket name is required for upload.")

    key = build_object_key(filename, path)
    extra = {"ContentType": content_type} if content_type else None
    try:
        get_s3_client().upload_fileobj(fileobj, bucket, key, ExtraArgs=extra)
    except ClientError as e:
        logger.error(f"Upload of {key} to bucket {bucket} failed: {e}")
        raise

    logger.info(f"Uploaded {key} to bucket {bucket}")
    return public_url(bucket, key)


def delete_file_by_path(bucket: str, file_path: str) -> None:
    if not bucket or not file_path:
        logger.warning("Bucket name and file path are required for deletion.")
        return

    try:
        get_s3_client().delete_object(Bucket=bucket, Key=file_path)
    except ClientError as e:
        code = str(e.response.get("Error", {}).get("Code", ""))
        if code in _NOT_FOUND_CODES:
            logger.warning(f"File not found for deletion: {file_path} in bucket {bucket}")
            return
        logger.error(f"Error deleting file {file_path} from bucket {bucket}: {e}")
        raise


def delete_file_by_url(file_url: str) -> None:
    if not file_url:
        logger.warning("No file URL provided for deletion.")
        return

    parsed = parse_public_url(file_url)
    if parsed is None:
        logger.warning(f"Invalid storage URL format for deletion: {file_url}")
        return

    bucket, key = parsed
    delete_file_by_path(bucket, key)
