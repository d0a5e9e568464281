from pydantic import BaseModel
from typing import Optional


class QRValidateRequest(BaseModel):
    qr_data: Optional[str] = None


class QRValidationResponse(BaseModel):
    success: bool
    message: str
    type: str
    data: dict
