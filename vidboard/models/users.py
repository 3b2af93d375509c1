from datetime import datetime

from pydantic import EmailStr, Field, HttpUrl

from vidboard.models.common import CamelModel


class User(CamelModel):
    id: str
    name: str
    email: str
    image_url: str | None = None
    created_at: datetime


class CreateUserRequest(CamelModel):
    id: str = Field(min_length=1, max_length=128)
    name: str = Field(min_length=3, max_length=100)
    email: EmailStr
    image_url: HttpUrl | None = None


class UpdateUserRequest(CamelModel):
    name: str | None = Field(default=None, min_length=3, max_length=100)
    email: EmailStr | None = None
    image_url: HttpUrl | None = None
