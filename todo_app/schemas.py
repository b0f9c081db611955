import uuid
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


def _strip_required(value: str, field_name: str) -> str:
    stripped = value.strip()
    if not stripped:
        raise ValueError(f"{field_name} cannot be blank")
    return stripped


# --- Users ---
class UserRegister(BaseModel):
    username: str = Field(
        ..., min_length=3, max_length=50, description="Username for the new account"
    )
    email: EmailStr = Field(..., description="E-mail address for the new account")
    password: str = Field(
        ..., min_length=6, max_length=100, description="Password for the new account"
    )

    @field_validator("username")
    @classmethod
    def username_not_blank(cls, v: str) -> str:
        return _strip_required(v, "Username")


class UserUpdate(BaseModel):
    # Only fields the caller sends are written; username selects the record
    username: str = Field(..., min_length=1, max_length=50, description="Username")
    email: EmailStr | None = Field(None, description="New e-mail address")
    password: str | None = Field(
        None, min_length=6, max_length=100, description="New password"
    )
    roles: str | None = Field(
        None, max_length=255, description="Comma-separated role tags"
    )


class UserResponse(BaseModel):
    id: uuid.UUID = Field(..., description="User unique identifier")
    username: str = Field(..., description="Username")
    email: str = Field(..., description="E-mail address")
    roles: str = Field(..., description="Comma-separated role tags")
    created_at: datetime = Field(..., description="Account creation timestamp")
    updated_at: datetime = Field(..., description="Last modification timestamp")

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str = Field(..., description="Response message")


# --- Tasks ---
class TaskBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255, description="Unique title")
    description: str | None = Field(None, description="Optional details")
    completed: bool = Field(default=False, description="Whether the task is done")
    due_date: date | None = Field(None, description="Calendar day the task is due")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        return _strip_required(v, "Title")


class TaskCreate(TaskBase):
    pass


class TaskUpdate(TaskBase):
    # Matched by title; description, completed and due_date are overwritten
    pass


class TaskResponse(BaseModel):
    id: uuid.UUID
    title: str
    description: str | None = None
    completed: bool
    due_date: date | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
