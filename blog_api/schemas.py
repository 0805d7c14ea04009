"""Pydantic schemas for request and response validation."""

from typing import Optional, List
from pydantic import BaseModel, Field


# User Schemas
class UserSignup(BaseModel):
    """Schema for signup request."""

    username: str
    password: str
    name: Optional[str] = None


class UserSignin(BaseModel):
    """Schema for signin request."""

    username: str
    password: str


# Blog Schemas
class BlogCreate(BaseModel):
    """Schema for blog creation request."""

    title: str
    content: str


class BlogUpdate(BaseModel):
    """Schema for blog update request. ``id`` selects the record on the bodied route."""

    id: Optional[int] = None
    title: str
    content: str


class BlogId(BaseModel):
    id: int


class BlogOut(BaseModel):
    id: int
    title: str
    content: str
    author_id: int = Field(serialization_alias='authorId')

    class Config:
        from_attributes = True
        populate_by_name = True


class BlogResponse(BaseModel):
    """Schema for single blog response. ``blog`` is null when not found."""

    blog: Optional[BlogOut] = None


class BlogListResponse(BaseModel):
    blogs: List[BlogOut]
