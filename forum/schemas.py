import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


# --- User ---

class UserCreate(BaseModel):
    username: str = Field(max_length=100)
    password: str
    is_moderator: bool = False


class UserResponse(BaseModel):
    # password_hash is deliberately absent.
    id: int
    username: str
    is_moderator: bool
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class PasswordBody(BaseModel):
    password: str


class UserIdResponse(BaseModel):
    id: int


# --- Comment ---

class CommentCreate(BaseModel):
    user_id: int
    content: str
    parent_id: uuid.UUID | None = None


class CommentUpdate(BaseModel):
    content: str


class CommentResponse(BaseModel):
    id: uuid.UUID
    post_id: uuid.UUID
    user_id: int
    content: str
    timestamp: datetime
    parent_id: uuid.UUID | None
    model_config = ConfigDict(from_attributes=True)


class CommentIdResponse(BaseModel):
    id: uuid.UUID


# --- Errors ---

class ErrorResponse(BaseModel):
    code: str
    message: str
    detail: dict | None = None


# --- Metrics ---

class MetricsResponse(BaseModel):
    total_users: int
    total_moderators: int
    total_comments: int
    cache_info: dict = {}
