"""Request/response schemas for fabrics and fabric usage."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class FabricBase(BaseModel):
    """Optional descriptive fields shared by create/update/read."""

    type: str | None = Field(default=None, max_length=255)
    fiber_content: str | None = Field(default=None, max_length=255)
    weight: str | None = Field(default=None, max_length=64)
    color: str | None = Field(default=None, max_length=255)
    pattern: str | None = Field(default=None, max_length=255)
    width: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    cost_per_yard: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    total_cost: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    source: str | None = Field(default=None, max_length=255)
    notes: str | None = None
    image_url: str | None = Field(default=None, max_length=2048)


class FabricCreate(FabricBase):
    name: str = Field(..., min_length=1, max_length=255)
    total_yards: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Yardage on hand"
    )
    is_pinned: bool = False


class FabricUpdate(FabricBase):
    """Partial update: only fields present in the request body are applied."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    total_yards: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    is_pinned: bool | None = None


class FabricOut(FabricBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    name: str
    total_yards: float
    is_pinned: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class FabricResponse(BaseModel):
    fabric: FabricOut


class FabricSavedResponse(BaseModel):
    message: str
    fabric: FabricOut


class FabricsListResponse(BaseModel):
    fabrics: list[FabricOut]


class PinResponse(BaseModel):
    message: str
    is_pinned: bool


class UsageCreate(BaseModel):
    """Yardage taken from a fabric for a project."""

    yards_used: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Yards requested; stored as given"
    )
    project_name: str = Field(..., min_length=1, max_length=255)
    notes: str | None = None
    project_id: str | None = Field(default=None, max_length=36)


class UsageRecordedResponse(BaseModel):
    message: str = "Usage recorded successfully"
    yards_left: float = Field(..., ge=0)


class UsageEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    fabric_id: str
    user_id: str
    project_id: str | None = None
    yards_used: float
    project_name: str
    notes: str | None = None
    usage_date: datetime | None = None
    fabric_name: str | None = None


class UsageHistoryResponse(BaseModel):
    usage_history: list[UsageEntryOut]
