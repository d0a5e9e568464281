from pydantic import BaseModel
from typing import Optional
import datetime as dt


class EmailTemplateCreate(BaseModel):
    name: str
    subject: str
    body_html: str


class EmailTemplateUpdate(BaseModel):
    name: Optional[str] = None
    subject: Optional[str] = None
    body_html: Optional[str] = None


class EmailTemplateResponse(BaseModel):
    id: str
    name: str
    subject: str
    body_html: str
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True
