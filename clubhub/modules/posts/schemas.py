from pydantic import BaseModel
from typing import Optional, List
import datetime as dt


class PostCreate(BaseModel):
    id: Optional[str] = None
    title: str
    content: str
    url: str
    published_date: Optional[dt.datetime] = None
    image_url: Optional[str] = None
    excerpt: Optional[str] = None
    source: Optional[str] = None
    category: Optional[str] = None


class PostUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    url: Optional[str] = None
    published_date: Optional[dt.datetime] = None
    image_url: Optional[str] = None
    excerpt: Optional[str] = None
    source: Optional[str] = None
    category: Optional[str] = None


class PostResponse(BaseModel):
    id: str
    title: str
    content: Optional[str] = None
    url: Optional[str] = None
    published_date: Optional[dt.datetime] = None
    image_url: Optional[str] = None
    excerpt: Optional[str] = None
    source: Optional[str] = None
    category: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class PostPagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class PostListResponse(BaseModel):
    posts: List[PostResponse]
    pagination: PostPagination
