"""MealPlan domain entity: the meals of one week, keyed by its week_start_date."""
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from mealplan.domain.Meal import Meal, MealType
from mealplan.domain.errors import InvalidDay
from mealplan.utilities.constants import DATE_FORMAT, DAY_NAMES


def day_name(day: date) -> str:
    '''English weekday name, independent of the process locale.'''
    return DAY_NAMES[(day.weekday() + 1) % 7]


def week_start_for(day: date) -> date:
    '''Returns the Sunday on or before day.'''
    # date.weekday(): Monday=0 .. Sunday=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def _weekday_index(text: str) -> Optional[int]:
    """Index into DAY_NAMES for a full or three-letter day name, else None."""
    wanted = text.strip().lower()
    if len(wanted) < 3:
        return None
    for index, name in enumerate(DAY_NAMES):
        lowered = name.lower()
        if wanted == lowered or wanted == lowered[:3]:
            return index
    return None


def resolve_day(text, week_start_date: date) -> date:
    """Resolve a day name or an explicit YYYY-MM-DD date to a concrete date.

    Day names map into the week beginning at week_start_date, whatever weekday
    that happens to be. Explicit dates are returned unchanged; whether they fall
    inside the week is checked by the caller.
    """
    if isinstance(text, date):
        return text
    if not isinstance(text, str) or not text.strip():
        raise InvalidDay("Invalid day format. Use YYYY-MM-DD or a day name.")
    try:
        return datetime.strptime(text.strip(), DATE_FORMAT).date()
    except ValueError:
        pass
    index = _weekday_index(text)
    if index is None:
        raise InvalidDay(f"Invalid day '{text}'. Use YYYY-MM-DD or a day name.")
    # DAY_NAMES is Sunday-first; convert week_start weekday to the same scale
    start_index = (week_start_date.weekday() + 1) % 7
    return week_start_date + timedelta(days=(index - start_index) % 7)


class MealPlan:
    def __init__(self, week_start_date: date, meals: Optional[Iterable[Meal]] = None):
        self.week_start_date = week_start_date
        self.meals: List[Meal] = list(meals) if meals else []

    # --- Week helpers ------------------------------------------------------
    @property
    def week_end_date(self) -> date:
        return self.week_start_date + timedelta(days=6)

    def days(self) -> List[date]:
        '''The seven dates of the week in order.'''
        return [self.week_start_date + timedelta(days=i) for i in range(7)]

    def contains_day(self, day: date) -> bool:
        return self.week_start_date <= day <= self.week_end_date

    # --- Queries -------------------------------------------------------------
    def find_meals(self, meal_type: MealType, day: date) -> List[Meal]:
        return [m for m in self.meals if m.meal_type == meal_type and m.day == day]

    def find_meal(self, meal_type: MealType, day: date) -> Optional[Meal]:
        matches = self.find_meals(meal_type, day)
        return matches[0] if matches else None

    def meals_on(self, day: date) -> List[Meal]:
        return [m for m in self.sorted_meals() if m.day == day]

    def sorted_meals(self) -> List[Meal]:
        '''Canonical order: by day, then meal type; ties keep insertion order.'''
        return sorted(self.meals, key=lambda m: m.sort_key)

    def is_empty(self) -> bool:
        return not self.meals

    def __len__(self) -> int:
        return len(self.meals)

    # --- Mutations (in place; the engine works on copies) --------------------
    def add_meal(self, meal: Meal):
        self.meals.append(meal)

    def remove_meal(self, meal_type: MealType, day: date) -> Optional[Meal]:
        for index, meal in enumerate(self.meals):
            if meal.meal_type == meal_type and meal.day == day:
                return self.meals.pop(index)
        return None

    def replace_meal(self, old: Meal, new: Meal):
        index = self.meals.index(old)
        self.meals[index] = new

    def copy(self) -> "MealPlan":
        return MealPlan(self.week_start_date, self.meals)

    # --- Equality / display --------------------------------------------------
    def __eq__(self, other) -> bool:
        if not isinstance(other, MealPlan):
            return NotImplemented
        return self.week_start_date == other.week_start_date and \
            self.sorted_meals() == other.sorted_meals()

    def __str__(self) -> str:
        return f"MealPlan(week of {self.week_start_date.strftime(DATE_FORMAT)}, {len(self.meals)} meals)"

    __repr__ = __str__

    def to_dict(self):
        return {
            "week_start_date": self.week_start_date.strftime(DATE_FORMAT),
            "meals": [meal.to_dict() for meal in self.sorted_meals()],
        }

    @staticmethod
    def from_dict(data):
        week_start = data["week_start_date"]
        if not isinstance(week_start, date):
            week_start = datetime.strptime(week_start, DATE_FORMAT).date()
        return MealPlan(week_start, [Meal.from_dict(m) for m in data.get("meals", [])])
