from supabase import Client
from clubhub.config import settings
from clubhub.core.storage import StorageService
from typing import Dict
from fastapi import HTTPException, UploadFile
import os
import logging
import uuid

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = ["image/jpeg", "image/jpg", "image/png", "image/webp", "image/gif"]


class UploadService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        self.storage = StorageService(supabase, bucket=settings.images_bucket)

    async def upload_image(self, file: UploadFile, prefix: str) -> Dict[str, str]:
        """Validate an image upload and store it under a random name"""
        if file.content_type not in ALLOWED_IMAGE_TYPES:
            raise HTTPException(status_code=400, detail="Invalid file type. Only images are allowed.")
        content = await file.read()
        if len(content) > settings.max_upload_size:
            max_mb = settings.max_upload_size // (1024 * 1024)
            raise HTTPException(status_code=400, detail=f"File too large. Maximum size is {max_mb}MB.")

        file_extension = os.path.splitext(file.filename or "")[1] or ".png"
        file_name = f"{prefix}-{uuid.uuid4().hex}{file_extension.lower()}"
        try:
            url = self.storage.upload(content, file_name, file.content_type)
        except Exception as e:
            logger.error(f"Image upload failed: {str(e)}")
            raise HTTPException(status_code=500, detail=f"Failed to upload file: {str(e)}")
        logger.info(f"Uploaded image {file_name}")
        return {"success": True, "filename": file_name, "url": url}
