"""Rule deletion state machine: ACTIVE -> RULE_ONLY | RULE_AND_INSTANCES -> REMOVED."""
from enum import Enum
from typing import Optional

from simplytodo.recurrence.errors import InvalidTransitionError


class DeletionMode(str, Enum):
    """What goes away together with a rule."""

    RULE_ONLY = "rule_only"  # instances stay as standalone tasks
    RULE_AND_INSTANCES = "rule_and_instances"


class RuleState(str, Enum):
    ACTIVE = "active"
    RULE_ONLY = "rule_only"
    RULE_AND_INSTANCES = "rule_and_instances"
    REMOVED = "removed"


_TRANSITIONS = {
    RuleState.ACTIVE: {RuleState.RULE_ONLY, RuleState.RULE_AND_INSTANCES},
    RuleState.RULE_ONLY: {RuleState.REMOVED},
    RuleState.RULE_AND_INSTANCES: {RuleState.REMOVED},
    RuleState.REMOVED: set(),
}


class RuleLifecycle:
    """Tracks one rule through a deletion."""

    def __init__(self, rule_id: Optional[int] = None, state: RuleState = RuleState.ACTIVE):
        self.rule_id = rule_id
        self.state = state
        self.mode: Optional[DeletionMode] = None

    def transition(self, target: RuleState) -> RuleState:
        if target not in _TRANSITIONS[self.state]:
            raise InvalidTransitionError(
                f"Cannot move rule {self.rule_id} from {self.state.value} to {target.value}",
                details={"rule_id": self.rule_id, "from": self.state.value, "to": target.value},
            )
        self.state = target
        return self.state

    def begin(self, mode: DeletionMode) -> RuleState:
        """Enter the deletion branch for mode."""
        self.mode = mode
        return self.transition(RuleState(mode.value))

    def degrade_to_rule_only(self) -> RuleState:
        """Fall back from a cascade to a plain rule deletion."""
        if self.state != RuleState.RULE_AND_INSTANCES:
            raise InvalidTransitionError(
                f"Rule {self.rule_id} is not in a cascade deletion",
                details={"rule_id": self.rule_id, "from": self.state.value},
            )
        self.state = RuleState.RULE_ONLY
        self.mode = DeletionMode.RULE_ONLY
        return self.state

    def finish(self) -> RuleState:
        return self.transition(RuleState.REMOVED)

    @property
    def is_removed(self) -> bool:
        return self.state == RuleState.REMOVED
