"""Recurrence Validator."""
from typing import Any, Dict, Optional

from simplytodo.recurrence import (
    InvalidRuleError,
    RecurrenceError,
    RuleSpec,
    TaskTemplate,
    parse_date,
    parse_time_of_day,
    recurrence_from_fields,
)
from simplytodo.recurrence.constants import DEFAULT_IMPORTANCE, DEFAULT_MAX_INSTANCES, MONTHLY, WEEKLY


class RecurrenceValidator:
    """Validate recurring rule payloads before they reach the engine."""

    @staticmethod
    def build_rule_spec(user_id: str, data: Dict[str, Any], rule_id: Optional[int] = None) -> RuleSpec:
        """
        Convert a rule payload into an engine rule.

        Args:
            user_id: Owner of the rule
            data: Flat payload (same keys as RecurringRuleCreate)
            rule_id: Id of the persisted rule, if any

        Returns:
            RuleSpec

        Raises:
            DateParseError: If a date or time string cannot be parsed
            InvalidRuleError: If a field violates the rule contract
        """
        name = data.get("name") or ""
        task_text = data.get("task_text") or ""
        if not name.strip():
            raise InvalidRuleError("Rule name cannot be empty", details={"field": "name"})
        if not task_text.strip():
            raise InvalidRuleError("Task text cannot be empty", details={"field": "task_text"})

        # "" is not "no end date": only an absent end_date gets the one year default
        end_date = data.get("end_date")
        return RuleSpec(
            id=rule_id,
            owner_id=user_id,
            name=name,
            description=data.get("description"),
            template=TaskTemplate(
                text=task_text,
                importance=data.get("importance", DEFAULT_IMPORTANCE),
                category_id=data.get("category_id"),
                time_of_day=parse_time_of_day(data.get("time_of_day")),
            ),
            start_date=parse_date(data.get("start_date")),
            end_date=parse_date(end_date) if end_date is not None else None,
            recurrence=recurrence_from_fields(
                data.get("recurring_type"),
                interval=data.get("interval", 1),
                days_of_week=data.get("days_of_week"),
                day_of_month=data.get("day_of_month"),
            ),
            is_active=data.get("is_active", True),
            max_instances=data.get("max_instances", DEFAULT_MAX_INSTANCES),
        )

    @staticmethod
    def validate_rule_payload(data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate a rule payload without raising.

        Args:
            data: Flat payload (same keys as RecurringRuleCreate)

        Returns:
            Dict with validation result
        """
        result = {
            "valid": True,
            "errors": [],
            "warnings": []
        }

        if not (data.get("name") or "").strip():
            result["valid"] = False
            result["errors"].append("Rule name cannot be empty")
        if not (data.get("task_text") or "").strip():
            result["valid"] = False
            result["errors"].append("Task text cannot be empty")

        try:
            RecurrenceValidator.build_rule_spec("validation", data)
        except RecurrenceError as e:
            result["valid"] = False
            if e.message not in result["errors"]:
                result["errors"].append(e.message)
            return result

        result["warnings"].extend(RecurrenceValidator.collect_warnings(data))
        return result

    @staticmethod
    def collect_warnings(data: Dict[str, Any]) -> list:
        """
        Point out rule shapes that are accepted but probably not what the user meant.

        Args:
            data: Flat payload

        Returns:
            List of warning strings
        """
        warnings = []
        kind = (data.get("recurring_type") or "").lower()
        interval = data.get("interval", 1)
        days_of_week = data.get("days_of_week")
        day_of_month = data.get("day_of_month")

        if kind == WEEKLY and days_of_week and interval > 1:
            warnings.append(
                f"Weekly rules with selected weekdays repeat every week; interval {interval} is not applied"
            )
        if kind != WEEKLY and days_of_week:
            warnings.append(f"days_of_week is ignored for {kind} rules")
        if kind != MONTHLY and day_of_month is not None:
            warnings.append(f"day_of_month is ignored for {kind} rules")
        if kind == MONTHLY and day_of_month is not None and day_of_month > 28:
            warnings.append(f"Day {day_of_month} falls on the last day of shorter months")
        if not data.get("end_date"):
            warnings.append("No end date given; the rule ends one year after its start date")

        return warnings
