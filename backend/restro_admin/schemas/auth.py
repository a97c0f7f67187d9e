from __future__ import annotations

from pydantic import BaseModel, Field

from restro_admin.schemas.common import ApiModel


class LoginRequest(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=6, max_length=200)


class AdminOut(ApiModel):
    id: int
    name: str
    email: str
