"""Recurring rule models for SQLModel."""
from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlmodel import Field, SQLModel

from simplytodo.recurrence import (
    RuleSpec,
    TaskTemplate,
    format_time_of_day,
    parse_time_of_day,
    recurrence_from_fields,
)
from simplytodo.recurrence.kinds import Monthly, Weekly


class RecurringRule(SQLModel, table=True):
    """Recurring rule entity: recurrence shape plus the template of its tasks."""

    __tablename__ = "recurring_rule"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(sa_column=Column(String, index=True, nullable=False))
    name: str = Field(max_length=200, min_length=1)
    description: Optional[str] = Field(default=None, max_length=1000)

    # Task template
    task_text: str = Field(max_length=200, min_length=1)
    importance: int = Field(default=3, ge=1, le=5)
    category_id: Optional[str] = Field(default=None, max_length=100)
    time_of_day: Optional[str] = Field(default=None, max_length=8)  # "HH:MM"

    # Bounds
    start_date: date
    end_date: Optional[date] = Field(default=None)

    # Recurrence shape, flattened for storage
    recurring_type: str = Field(max_length=20)  # daily, weekly, monthly
    interval: int = Field(default=1, ge=1)
    days_of_week: Optional[List[int]] = Field(default=None, sa_column=Column(JSON, nullable=True))  # 0-6 for Sunday-Saturday
    day_of_month: Optional[int] = Field(default=None)  # 1-31

    is_active: bool = Field(default=True)
    max_instances: int = Field(default=100, ge=1)
    last_generated: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime(timezone=False), nullable=True)
    )
    parent_task_id: Optional[int] = Field(
        default=None,
        sa_column=Column(Integer, ForeignKey("task.id", ondelete="SET NULL"), nullable=True),
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow, sa_column=Column(DateTime(timezone=False), nullable=False)
    )
    updated_at: datetime = Field(
        default_factory=datetime.utcnow, sa_column=Column(DateTime(timezone=False), nullable=False)
    )

    def to_spec(self) -> RuleSpec:
        """Convert the stored row into the engine's immutable rule."""
        return RuleSpec(
            id=self.id,
            owner_id=self.user_id,
            name=self.name,
            description=self.description,
            template=TaskTemplate(
                text=self.task_text,
                importance=self.importance,
                category_id=self.category_id,
                time_of_day=parse_time_of_day(self.time_of_day),
            ),
            start_date=self.start_date,
            end_date=self.end_date,
            recurrence=recurrence_from_fields(
                self.recurring_type,
                interval=self.interval,
                days_of_week=self.days_of_week,
                day_of_month=self.day_of_month,
            ),
            is_active=self.is_active,
            max_instances=self.max_instances,
            last_generated=self.last_generated,
        )

    @classmethod
    def from_spec(cls, spec: RuleSpec) -> "RecurringRule":
        recurrence = spec.recurrence
        return cls(
            id=spec.id,
            user_id=spec.owner_id,
            name=spec.name,
            description=spec.description,
            task_text=spec.template.text,
            importance=spec.template.importance,
            category_id=spec.template.category_id,
            time_of_day=format_time_of_day(spec.template.time_of_day),
            start_date=spec.start_date,
            end_date=spec.end_date,
            recurring_type=recurrence.kind,
            interval=recurrence.interval,
            days_of_week=sorted(recurrence.days_of_week) if isinstance(recurrence, Weekly) else None,
            day_of_month=recurrence.day_of_month if isinstance(recurrence, Monthly) else None,
            is_active=spec.is_active,
            max_instances=spec.max_instances,
            last_generated=spec.last_generated,
        )


class RecurringRuleInstance(SQLModel, table=True):
    """Association between a rule and the tasks it materialized."""

    __tablename__ = "recurring_rule_instance"
    __table_args__ = (UniqueConstraint("rule_id", "task_id"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    rule_id: int = Field(
        sa_column=Column(Integer, ForeignKey("recurring_rule.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    task_id: int = Field(
        sa_column=Column(Integer, ForeignKey("task.id", ondelete="CASCADE"), nullable=False, index=True)
    )
    created_at: datetime = Field(
        default_factory=datetime.utcnow, sa_column=Column(DateTime(timezone=False), nullable=False)
    )
