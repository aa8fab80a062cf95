"""Add / edit / remove semantics on an in-memory MealPlan.

These functions never touch files and never prompt. Where a user decision is
needed they return NeedsConfirmation; the caller asks and retries with
confirmed=True.
"""
from datetime import date
from typing import Optional

from mealplan.domain.Meal import Meal, MealType
from mealplan.domain.MealPlan import MealPlan, day_name
from mealplan.domain.errors import InvalidDay, MealNotFound
from mealplan.logic.reconciliation.outcomes import Applied, NeedsConfirmation
from mealplan.utilities.constants import DATE_FORMAT

__all__ = ["add_meal", "edit_meal", "remove_meal"]


def _when(day: date) -> str:
    return f"{day_name(day)} {day.strftime(DATE_FORMAT)}"


def _check_day(plan: MealPlan, day: date, today: Optional[date] = None, reject_past_dates: bool = False):
    if not plan.contains_day(day):
        raise InvalidDay(
            f"{day.strftime(DATE_FORMAT)} is outside the week of "
            f"{plan.week_start_date.strftime(DATE_FORMAT)} - {plan.week_end_date.strftime(DATE_FORMAT)}."
        )
    if reject_past_dates and today is not None and day < today:
        raise InvalidDay(f"{day.strftime(DATE_FORMAT)} is in the past.")


def add_meal(plan: MealPlan, meal: Meal, confirmed: bool = False, replace: bool = False,
             today: Optional[date] = None, reject_past_dates: bool = False):
    """Add meal to plan.

    A meal sharing (meal_type, day) with an existing entry yields
    NeedsConfirmation carrying that entry. Once confirmed the new meal is
    inserted next to it, or takes its place when replace=True.
    """
    _check_day(plan, meal.day, today, reject_past_dates)
    existing = plan.find_meal(meal.meal_type, meal.day)
    if existing is not None and not confirmed:
        action = "Replace it?" if replace else "Add another one anyway?"
        return NeedsConfirmation(
            f"A {meal.meal_type} meal already exists for {_when(meal.day)} "
            f"({existing.description}, cooked by {existing.cook}). {action}",
            existing,
        )
    updated = plan.copy()
    if existing is not None and replace:
        updated.replace_meal(existing, meal)
        return Applied(updated, meal, previous=existing)
    updated.add_meal(meal)
    return Applied(updated, meal)


def edit_meal(plan: MealPlan, meal_type: MealType, day: date,
              cook: Optional[str] = None, description: Optional[str] = None) -> Applied:
    """Change cook and/or description of the meal at (meal_type, day).

    Only supplied fields change. Raises MealNotFound when there is no such
    meal (edit never creates one) and EmptyField for blank supplied values.
    """
    existing = plan.find_meal(meal_type, day)
    if existing is None:
        raise MealNotFound(f"No {meal_type} meal found for {_when(day)}.")
    changed = existing.with_changes(cook=cook, description=description)
    updated = plan.copy()
    updated.replace_meal(existing, changed)
    return Applied(updated, changed, previous=existing)


def remove_meal(plan: MealPlan, meal_type: MealType, day: date, confirmed: bool = False):
    """Remove the meal at (meal_type, day).

    Raises MealNotFound when absent. Removing the last meal of the plan yields
    NeedsConfirmation unless confirmed.
    """
    existing = plan.find_meal(meal_type, day)
    if existing is None:
        raise MealNotFound(f"No {meal_type} meal found for {_when(day)}.")
    if len(plan) == 1 and not confirmed:
        return NeedsConfirmation(
            "This is the last meal in your plan. Are you sure you want to remove it?",
            existing,
        )
    updated = plan.copy()
    updated.remove_meal(meal_type, day)
    return Applied(updated, existing)
