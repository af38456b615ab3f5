"""Recurring rule router."""
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session

from simplytodo.db.config import get_session
from simplytodo.middleware.auth import verify_user_access
from simplytodo.models.recurring_rule import RecurringRule
from simplytodo.recurrence import DeletionMode, RecurrenceError, describe
from simplytodo.schemas.recurring_rule import (
    NextOccurrenceResponse,
    RecurringRuleActive,
    RecurringRuleCreate,
    RecurringRuleCreated,
    RecurringRulePreview,
    RecurringRuleResponse,
    RuleDeletionResponse,
    TaskInstanceResponse,
)
from simplytodo.services.recurrence_validator import RecurrenceValidator
from simplytodo.services.recurring_rule_service import RecurringRuleService

router = APIRouter(tags=["Recurring rules"])  # No prefix since main.py adds /api prefix


def get_rule_service(session: Session = Depends(get_session)) -> RecurringRuleService:
    """Dependency for getting RecurringRuleService instance."""
    return RecurringRuleService(session)


def _invalid(error: RecurrenceError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=error.to_dict())


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recurring rule not found")


def _to_response(rule: RecurringRule) -> RecurringRuleResponse:
    response = RecurringRuleResponse.model_validate(rule)
    response.recurrence_description = describe(rule.to_spec())
    return response


@router.get("/{user_id}/recurring-rules", response_model=List[RecurringRuleResponse])
async def list_rules(
    user_id: str = Depends(verify_user_access),
    service: RecurringRuleService = Depends(get_rule_service),
):
    """List the user's recurring rules, newest first."""
    return [_to_response(rule) for rule in service.list_rules(user_id)]


@router.post("/{user_id}/recurring-rules", response_model=RecurringRuleCreated, status_code=status.HTTP_201_CREATED)
async def create_rule(
    rule_data: RecurringRuleCreate,
    user_id: str = Depends(verify_user_access),
    service: RecurringRuleService = Depends(get_rule_service),
):
    """Create a recurring rule and materialize its task instances."""
    try:
        rule, tasks = service.create_rule(user_id, rule_data.model_dump())
    except RecurrenceError as e:
        raise _invalid(e)

    return RecurringRuleCreated(
        rule=_to_response(rule),
        instance_count=len(tasks),
        instances=[
            TaskInstanceResponse(
                task_id=task.id,
                due=task.due_date,
                text=task.title,
                importance=task.importance,
                category_id=task.category_id,
            )
            for task in tasks
        ],
    )


@router.post("/{user_id}/recurring-rules/preview", response_model=RecurringRulePreview)
async def preview_rule(
    rule_data: RecurringRuleCreate,
    user_id: str = Depends(verify_user_access),
    service: RecurringRuleService = Depends(get_rule_service),
):
    """Show what a rule would generate without saving anything."""
    data = rule_data.model_dump()
    try:
        spec, instances = service.preview(user_id, data)
    except RecurrenceError as e:
        raise _invalid(e)

    return RecurringRulePreview(
        recurrence_description=describe(spec),
        instance_count=len(instances),
        instances=[
            TaskInstanceResponse(
                due=instance.due,
                text=instance.text,
                importance=instance.importance,
                category_id=instance.category_id,
            )
            for instance in instances
        ],
        warnings=RecurrenceValidator.collect_warnings(data),
    )


@router.get("/{user_id}/recurring-rules/{rule_id}", response_model=RecurringRuleResponse)
async def get_rule(
    rule_id: int,
    user_id: str = Depends(verify_user_access),
    service: RecurringRuleService = Depends(get_rule_service),
):
    """Get a specific recurring rule by ID."""
    rule = service.get_rule(rule_id, user_id)
    if not rule:
        raise _not_found()
    return _to_response(rule)


@router.get("/{user_id}/recurring-rules/{rule_id}/next-occurrence", response_model=NextOccurrenceResponse)
async def get_next_occurrence(
    rule_id: int,
    user_id: str = Depends(verify_user_access),
    service: RecurringRuleService = Depends(get_rule_service),
    now: Optional[datetime] = Query(None, description="Reference moment (ISO format), defaults to server local time"),
):
    """Resolve the next occurrence of a rule without touching stored tasks."""
    rule = service.get_rule(rule_id, user_id)
    if not rule:
        raise _not_found()
    return NextOccurrenceResponse(rule_id=rule_id, next_occurrence=service.next_occurrence(rule_id, user_id, now=now))


@router.patch("/{user_id}/recurring-rules/{rule_id}/active", response_model=RecurringRuleResponse)
async def set_rule_active(
    rule_id: int,
    active: RecurringRuleActive,
    user_id: str = Depends(verify_user_access),
    service: RecurringRuleService = Depends(get_rule_service),
):
    """Turn a rule on or off."""
    rule = service.set_active(rule_id, user_id, active.is_active)
    if not rule:
        raise _not_found()
    return _to_response(rule)


@router.delete("/{user_id}/recurring-rules/{rule_id}", response_model=RuleDeletionResponse)
async def delete_rule(
    rule_id: int,
    user_id: str = Depends(verify_user_access),
    service: RecurringRuleService = Depends(get_rule_service),
    mode: DeletionMode = Query(DeletionMode.RULE_ONLY, description="rule_only or rule_and_instances"),
):
    """Delete a rule, optionally with every task it generated."""
    result = service.delete_rule(rule_id, user_id, mode)
    if result is None:
        raise _not_found()
    return RuleDeletionResponse(
        rule_id=result.rule_id,
        mode=result.mode.value,
        requested_mode=result.requested_mode.value,
        deleted_instances=result.deleted_instances,
        warnings=result.warnings,
    )
