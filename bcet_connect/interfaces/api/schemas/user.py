"""Schemas describing users and social graph changes."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str
    is_active: bool
    created_at: datetime | None = None
    following: list[int] = Field(default_factory=list)
    communities: list[int] = Field(default_factory=list)


class UserCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=80)
    email: str = Field(..., min_length=3, max_length=120)
    password: str = Field(..., min_length=8, max_length=128)
    role: Literal["student", "alumni", "faculty", "admin"] = "student"


class FollowResponse(BaseModel):
    following: bool
    changed: bool


class CommunityCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)


class CommunityRead(BaseModel):
    id: int
    name: str


class MembershipResponse(BaseModel):
    member: bool
    changed: bool
