"""Recurring rule schemas."""
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class RecurringRuleCreate(BaseModel):
    """Schema for creating (or previewing) a recurring rule."""
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=1000)
    task_text: str = Field(..., min_length=1, max_length=200)  # Text of every generated task
    importance: int = Field(default=3, ge=1, le=5)
    category_id: Optional[str] = Field(None, max_length=100)
    time_of_day: Optional[str] = Field(None)  # "HH:MM", 09:00 when absent
    start_date: str = Field(...)  # YYYY-MM-DD
    end_date: Optional[str] = Field(None)  # YYYY-MM-DD, start + 1 year when absent
    recurring_type: str = Field(..., pattern=r"^(daily|weekly|monthly)$")
    interval: int = Field(default=1, ge=1)
    days_of_week: Optional[List[int]] = Field(None, max_length=7)  # 0=Sunday .. 6=Saturday
    day_of_month: Optional[int] = Field(None, ge=1, le=31)
    is_active: bool = True
    max_instances: int = Field(default=100, ge=1)


class RecurringRuleActive(BaseModel):
    """Schema for toggling a rule on or off."""
    is_active: bool


class RecurringRuleResponse(BaseModel):
    """Schema for recurring rule API responses."""
    id: int
    user_id: str
    name: str
    description: Optional[str] = None
    task_text: str
    importance: int
    category_id: Optional[str] = None
    time_of_day: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    recurring_type: str
    interval: int
    days_of_week: Optional[List[int]] = None
    day_of_month: Optional[int] = None
    is_active: bool
    max_instances: int
    last_generated: Optional[datetime] = None
    parent_task_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime
    recurrence_description: Optional[str] = None  # e.g. "every week on Mon, Wed at 08:30"

    class Config:
        from_attributes = True


class TaskInstanceResponse(BaseModel):
    """One generated occurrence."""
    task_id: Optional[int] = None  # None for previews
    due: datetime
    text: str
    importance: int
    category_id: Optional[str] = None


class RecurringRuleCreated(BaseModel):
    rule: RecurringRuleResponse
    instance_count: int
    instances: List[TaskInstanceResponse] = []


class RecurringRulePreview(BaseModel):
    recurrence_description: str
    instance_count: int
    instances: List[TaskInstanceResponse] = []
    warnings: List[str] = []


class NextOccurrenceResponse(BaseModel):
    rule_id: int
    next_occurrence: Optional[datetime] = None  # None when inactive, ended or not found


class RuleDeletionResponse(BaseModel):
    rule_id: int
    mode: str  # Mode actually applied (cascade may degrade to rule_only)
    requested_mode: str
    deleted_instances: int
    warnings: List[str] = []
