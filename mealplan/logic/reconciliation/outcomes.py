"""Result values returned by the reconciliation engine."""
from __future__ import annotations
from enum import Enum
from typing import Optional

from mealplan.domain.Meal import Meal
from mealplan.domain.MealPlan import MealPlan


class SyncState(Enum):
    BOTH_MISSING = "both_missing"
    MARKDOWN_ONLY = "markdown_only"
    JSON_ONLY = "json_only"
    BOTH_PRESENT_IN_SYNC = "both_present_in_sync"
    BOTH_PRESENT_CONFLICTING = "both_present_conflicting"


class Applied:
    """A mutation succeeded; plan is the new plan (the input plan is left untouched)."""

    def __init__(self, plan: MealPlan, meal: Meal, previous: Optional[Meal] = None):
        self.plan = plan
        self.meal = meal
        self.previous = previous

    def __repr__(self) -> str:
        return f"Applied({self.meal!r})"


class NeedsConfirmation:
    """Not an error: the caller must confirm and retry with confirmed=True."""

    def __init__(self, message: str, conflict: Meal):
        self.message = message
        self.conflict = conflict

    def __repr__(self) -> str:
        return f"NeedsConfirmation({self.message!r})"


class SyncResult:
    def __init__(self, state: SyncState, plan: Optional[MealPlan] = None,
                 source: Optional[str] = None, target: Optional[str] = None):
        self.state = state
        self.plan = plan
        self.source = source
        self.target = target

    @property
    def regenerated(self) -> bool:
        return self.target is not None

    def __repr__(self) -> str:
        return f"SyncResult({self.state.value}, source={self.source}, target={self.target})"
