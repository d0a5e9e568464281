from pydantic import BaseModel


class UploadResponse(BaseModel):
    success: bool = True
    filename: str
    url: str
