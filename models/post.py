from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, field_validator


class Like(BaseModel):
    user: str


class Comment(BaseModel):
    id: str
    user: str
    authorName: str
    authorAvatar: Optional[str] = None
    text: str
    createdAt: datetime


class Post(BaseModel):
    id: str
    author: str
    authorName: str
    authorAvatar: Optional[str] = None
    text: str
    likes: List[Like] = []
    comments: List[Comment] = []
    createdAt: datetime


class TextRequest(BaseModel):
    text: str

    @field_validator("text")
    @classmethod
    def text_required(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("text is required")
        return value


class PostRequest(TextRequest):
    pass


class CommentRequest(TextRequest):
    pass


class MessageResponse(BaseModel):
    msg: str
