# prep_admin/api/v1/endpoints/storage.py
from typing import Optional

from fastapi import APIRouter, File, Form, UploadFile, status

from prep_admin.core.config import settings
from prep_admin.services import storage_service

router = APIRouter(prefix="/storage", tags=["storage"])


@router.post("/", status_code=status.HTTP_201_CREATED)
def upload(
    file: UploadFile = File(...),
    bucket: Optional[str] = Form(None),
    path: Optional[str] = Form(None),
):
    url = storage_service.upload_file(
        file.file,
        file.filename,
        bucket=bucket or settings.DEFAULT_BUCKET,
        path=path,
        content_type=file.content_type,
    )
    return {"url": url}


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
def delete(url: str):
    storage_service.delete_file_by_url(url)
    return None
