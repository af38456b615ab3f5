"""Recurring rule service: persistence side of rule creation and deletion."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from simplytodo.models.recurring_rule import RecurringRule, RecurringRuleInstance
from simplytodo.models.task import Task
from simplytodo.recurrence import (
    DeletionMode,
    RuleLifecycle,
    RuleSpec,
    TaskInstance,
    describe,
    generate,
    next_occurrence,
)
from simplytodo.services.recurrence_validator import RecurrenceValidator
from simplytodo.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class RuleDeletionResult:
    """Outcome of a rule deletion."""

    rule_id: int
    requested_mode: DeletionMode
    mode: DeletionMode  # what was actually applied
    deleted_instances: int = 0
    warnings: List[str] = field(default_factory=list)


class RecurringRuleService:
    """Service class for recurring rules and the tasks they materialize."""

    def __init__(self, session: Session):
        self.session = session

    def preview(self, user_id: str, data: Dict[str, Any]) -> Tuple[RuleSpec, List[TaskInstance]]:
        """Build the rule a payload describes and the instances it would produce, without writing anything."""
        spec = RecurrenceValidator.build_rule_spec(user_id, data)
        return spec, generate(spec)

    def create_rule(self, user_id: str, data: Dict[str, Any]) -> Tuple[RecurringRule, List[Task]]:
        """
        Create a rule, its representative task and every generated instance.

        Everything is written in a single commit; nothing is stored if the
        payload is invalid.

        Raises:
            DateParseError, InvalidRuleError: If the payload is invalid
        """
        spec = RecurrenceValidator.build_rule_spec(user_id, data)
        instances = generate(spec)
        now = datetime.utcnow()

        try:
            parent = Task(
                user_id=user_id,
                title=spec.template.text,
                description=spec.description,
                importance=spec.template.importance,
                category_id=spec.template.category_id,
                due_date=instances[0].due if instances else None,
                created_at=now,
                updated_at=now,
            )
            self.session.add(parent)
            self.session.flush()

            rule = RecurringRule.from_spec(spec)
            rule.parent_task_id = parent.id
            rule.last_generated = now
            rule.created_at = now
            rule.updated_at = now
            self.session.add(rule)
            self.session.flush()

            tasks = [
                Task(
                    user_id=user_id,
                    title=instance.text,
                    importance=instance.importance,
                    category_id=instance.category_id,
                    due_date=instance.due,
                    parent_id=parent.id,
                    created_at=now,
                    updated_at=now,
                )
                for instance in instances
            ]
            self.session.add_all(tasks)
            self.session.flush()

            self.session.add_all(
                [RecurringRuleInstance(rule_id=rule.id, task_id=task.id, created_at=now) for task in tasks]
            )
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise

        self.session.refresh(rule)
        logger.info("rule_created", rule_id=rule.id, user_id=user_id, instances=len(tasks), kind=spec.kind)
        return rule, tasks

    def list_rules(self, user_id: str) -> List[RecurringRule]:
        statement = (
            select(RecurringRule)
            .where(RecurringRule.user_id == user_id)
            .order_by(RecurringRule.created_at.desc(), RecurringRule.id.desc())
        )
        return list(self.session.exec(statement).all())

    def get_rule(self, rule_id: int, user_id: str) -> Optional[RecurringRule]:
        """Get a specific rule by ID, ensuring user ownership."""
        statement = (
            select(RecurringRule)
            .where(RecurringRule.id == rule_id)
            .where(RecurringRule.user_id == user_id)
        )
        return self.session.exec(statement).first()

    def set_active(self, rule_id: int, user_id: str, is_active: bool) -> Optional[RecurringRule]:
        rule = self.get_rule(rule_id, user_id)
        if not rule:
            return None

        rule.is_active = is_active
        rule.updated_at = datetime.utcnow()
        self.session.commit()
        self.session.refresh(rule)
        return rule

    def instance_task_ids(self, rule_id: int) -> List[int]:
        """Rule-to-instance lookup used for cascade deletion."""
        statement = select(RecurringRuleInstance.task_id).where(RecurringRuleInstance.rule_id == rule_id)
        return list(self.session.exec(statement).all())

    def delete_rule(
        self,
        rule_id: int,
        user_id: str,
        mode: DeletionMode = DeletionMode.RULE_ONLY,
    ) -> Optional[RuleDeletionResult]:
        """
        Delete a rule, optionally together with its generated tasks.

        A failing instance lookup never blocks the rule deletion: the
        cascade degrades to RULE_ONLY and the result carries a warning.

        Returns:
            RuleDeletionResult, or None if the rule does not exist
        """
        rule = self.get_rule(rule_id, user_id)
        if not rule:
            return None

        lifecycle = RuleLifecycle(rule_id)
        lifecycle.begin(mode)
        result = RuleDeletionResult(rule_id=rule_id, requested_mode=mode, mode=mode)

        degraded = False
        task_ids: List[int] = []
        if mode == DeletionMode.RULE_AND_INSTANCES:
            try:
                task_ids = self.instance_task_ids(rule_id)
            except SQLAlchemyError as e:
                self.session.rollback()
                logger.warning("cascade_degraded", rule_id=rule_id, error=str(e))
                result.warnings.append(f"Instance lookup failed, deleted rule {rule_id} only: {str(e)}")
                lifecycle.degrade_to_rule_only()
                result.mode = DeletionMode.RULE_ONLY
                degraded = True

        if result.mode == DeletionMode.RULE_AND_INSTANCES:
            parent_task_id = rule.parent_task_id
            self._delete_associations(rule_id)
            result.deleted_instances = self._delete_tasks(task_ids)
            if parent_task_id is not None:
                rule.parent_task_id = None
                self.session.flush()
                self._delete_tasks([parent_task_id])
        elif not degraded:
            self._delete_associations(rule_id)
        # a degraded deletion leaves link rows to the database's ON DELETE CASCADE

        self.session.delete(rule)
        self.session.commit()
        lifecycle.finish()

        logger.info(
            "rule_deleted",
            rule_id=rule_id,
            user_id=user_id,
            mode=result.mode.value,
            deleted_instances=result.deleted_instances,
        )
        return result

    def next_occurrence(self, rule_id: int, user_id: str, now: Optional[datetime] = None) -> Optional[datetime]:
        rule = self.get_rule(rule_id, user_id)
        if not rule:
            return None
        return next_occurrence(rule.to_spec(), now=now)

    def describe(self, rule_id: int, user_id: str) -> Optional[str]:
        rule = self.get_rule(rule_id, user_id)
        if not rule:
            return None
        return describe(rule.to_spec())

    def _delete_associations(self, rule_id: int) -> None:
        statement = select(RecurringRuleInstance).where(RecurringRuleInstance.rule_id == rule_id)
        for link in self.session.exec(statement).all():
            self.session.delete(link)
        self.session.flush()

    def _delete_tasks(self, task_ids: List[int]) -> int:
        if not task_ids:
            return 0
        tasks = self.session.exec(select(Task).where(Task.id.in_(task_ids))).all()
        for task in tasks:
            self.session.delete(task)
        self.session.flush()
        return len(tasks)
