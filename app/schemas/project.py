"""Request/response schemas for projects and patterns."""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ProjectStatus = Literal["planning", "in-progress", "completed", "on-hold"]
PatternCategory = Literal[
    "dresses", "tops", "bottoms", "outerwear", "accessories", "home-decor", "bags"
]
PatternDifficulty = Literal["beginner", "intermediate", "advanced", "expert"]


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    status: ProjectStatus = "planning"
    image_url: str | None = Field(default=None, max_length=2048)
    target_date: date | None = None
    notes: str | None = None


class ProjectUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    status: ProjectStatus | None = None
    image_url: str | None = Field(default=None, max_length=2048)
    target_date: date | None = None
    notes: str | None = None


class ProjectOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    name: str
    description: str | None = None
    status: str
    image_url: str | None = None
    target_date: date | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProjectResponse(BaseModel):
    project: ProjectOut


class ProjectSavedResponse(BaseModel):
    message: str
    project: ProjectOut


class ProjectsListResponse(BaseModel):
    projects: list[ProjectOut]


class PatternCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    designer: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    pattern_number: str | None = Field(default=None, max_length=64)
    category: PatternCategory
    difficulty: PatternDifficulty
    size_range: str = Field(default="", max_length=255)
    fabric_requirements: str | None = None
    notions: str | None = None
    instructions: str | None = None
    pdf_url: str | None = Field(default=None, max_length=2048)
    thumbnail_url: str | None = Field(default=None, max_length=2048)
    is_pinned: bool = False
    notes: str | None = None


class PatternUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    designer: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    pattern_number: str | None = Field(default=None, max_length=64)
    category: PatternCategory | None = None
    difficulty: PatternDifficulty | None = None
    size_range: str | None = Field(default=None, max_length=255)
    fabric_requirements: str | None = None
    notions: str | None = None
    instructions: str | None = None
    pdf_url: str | None = Field(default=None, max_length=2048)
    thumbnail_url: str | None = Field(default=None, max_length=2048)
    is_pinned: bool | None = None
    notes: str | None = None


class PatternOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    name: str
    designer: str
    description: str | None = None
    pattern_number: str | None = None
    category: str
    difficulty: str
    size_range: str
    fabric_requirements: str | None = None
    notions: str | None = None
    instructions: str | None = None
    pdf_url: str | None = None
    thumbnail_url: str | None = None
    is_pinned: bool
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PatternResponse(BaseModel):
    pattern: PatternOut


class PatternSavedResponse(BaseModel):
    message: str
    pattern: PatternOut


class PatternsListResponse(BaseModel):
    patterns: list[PatternOut]
