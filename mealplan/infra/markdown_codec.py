"""Markdown rendering and parsing of a MealPlan.

Document layout:

    # Meal Plan for Week of 2024-01-07

    ## Sunday (2024-01-07)

    ## Monday (2024-01-08)

    ### Breakfast
    - Cook: Erik
    - Description: Bacon and Eggs

Seven day sections are always written, in week order, with meals ordered
Breakfast, Lunch, Dinner, Snack inside each day.
"""
import re
from datetime import date, datetime
from typing import List, Optional

from mealplan.domain.Meal import MealType, new_meal, validate_meal_type
from mealplan.domain.MealPlan import MealPlan, day_name, resolve_day
from mealplan.domain.errors import EmptyField, InvalidDay, InvalidMealType, MalformedDocument
from mealplan.utilities.constants import DATE_FORMAT

TITLE_PREFIX = "# Meal Plan for Week of "

_TITLE_RE = re.compile(r'^#\s+Meal Plan for Week of\s+(\S+)\s*$', re.IGNORECASE)
_DAY_RE = re.compile(r'^##\s+([A-Za-z]+)(?:\s+\(([^)]*)\))?\s*$')
_MEAL_RE = re.compile(r'^###\s+(.+?)\s*$')
_FIELD_RE = re.compile(r'^[-*]\s+(Cook|Description)\s*:\s*(.*)$', re.IGNORECASE)


def render(plan: MealPlan) -> str:
    lines = [f"{TITLE_PREFIX}{plan.week_start_date.strftime(DATE_FORMAT)}", ""]
    for day in plan.days():
        lines.append(f"## {day_name(day)} ({day.strftime(DATE_FORMAT)})")
        lines.append("")
        for meal in plan.meals_on(day):
            lines.append(f"### {meal.meal_type.value}")
            lines.append(f"- Cook: {meal.cook}")
            lines.append(f"- Description: {meal.description}")
            lines.append("")
    while lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines) + "\n"


class _PendingMeal:
    def __init__(self, meal_type: MealType, day: date, line_no: int):
        self.meal_type = meal_type
        self.day = day
        self.line_no = line_no
        self.fields = {}


def _fail(line_no: int, message: str):
    raise MalformedDocument(f"Markdown line {line_no}: {message}")


def _parse_day_header(line_no: int, name: str, raw_date: Optional[str], week_start: date) -> date:
    try:
        by_name = resolve_day(name, week_start)
    except InvalidDay:
        _fail(line_no, f"unknown day name '{name}'")
    if raw_date is None:
        return by_name
    try:
        day = datetime.strptime(raw_date.strip(), DATE_FORMAT).date()
    except ValueError:
        _fail(line_no, f"invalid date '{raw_date}' in day header")
    if day != by_name:
        _fail(line_no, f"day header '{name} ({raw_date})' does not match the week of "
                       f"{week_start.strftime(DATE_FORMAT)}")
    return day


def parse(text) -> MealPlan:
    """Parse a document produced by render (or edited by hand in the same layout).

    Raises MalformedDocument when a section marker is missing or a meal entry
    cannot be split into cook and description.
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedDocument(f"Markdown document is not valid UTF-8: {e}") from e

    plan: Optional[MealPlan] = None
    current_day: Optional[date] = None
    pending: Optional[_PendingMeal] = None
    seen_days: List[date] = []

    def finish_pending():
        nonlocal pending
        if pending is None:
            return
        for key in ("cook", "description"):
            if key not in pending.fields:
                _fail(pending.line_no, f"{pending.meal_type.value} entry is missing its {key.capitalize()} line")
        try:
            meal = new_meal(pending.meal_type, pending.day, pending.fields["cook"], pending.fields["description"])
        except EmptyField as e:
            _fail(pending.line_no, str(e))
        plan.add_meal(meal)
        pending = None

    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue

        if plan is None:
            match = _TITLE_RE.match(line)
            if not match:
                _fail(line_no, f"expected '{TITLE_PREFIX}YYYY-MM-DD' title")
            try:
                week_start = datetime.strptime(match.group(1), DATE_FORMAT).date()
            except ValueError:
                _fail(line_no, f"invalid week start date '{match.group(1)}'")
            plan = MealPlan(week_start)
            continue

        match = _DAY_RE.match(line)
        if match:
            finish_pending()
            current_day = _parse_day_header(line_no, match.group(1), match.group(2), plan.week_start_date)
            if current_day in seen_days:
                _fail(line_no, f"duplicate section for {current_day.strftime(DATE_FORMAT)}")
            seen_days.append(current_day)
            continue

        match = _MEAL_RE.match(line)
        if match and not line.startswith("####"):
            finish_pending()
            if current_day is None:
                _fail(line_no, "meal section appears before any day section")
            try:
                meal_type = validate_meal_type(match.group(1))
            except InvalidMealType as e:
                _fail(line_no, str(e))
            pending = _PendingMeal(meal_type, current_day, line_no)
            continue

        match = _FIELD_RE.match(line)
        if match:
            if pending is None:
                _fail(line_no, "field line outside of a meal section")
            key = match.group(1).lower()
            if key in pending.fields:
                _fail(line_no, f"duplicate {match.group(1)} line")
            pending.fields[key] = match.group(2).strip()
            continue

        _fail(line_no, f"unexpected line '{line}'")

    if plan is None:
        raise MalformedDocument("Markdown document is empty or missing its title line")
    finish_pending()
    missing = [d for d in plan.days() if d not in seen_days]
    if missing:
        names = ", ".join(day_name(d) for d in missing)
        raise MalformedDocument(f"Markdown document is missing day sections: {names}")
    return plan
