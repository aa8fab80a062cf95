"""Meal domain entity: meal type, concrete day, cook and description."""
from datetime import date, datetime
from enum import Enum
from typing import Optional

from mealplan.domain.errors import EmptyField, InvalidMealType
from mealplan.utilities.constants import DATE_FORMAT, DAY_NAMES, MEAL_TYPE_ORDER


class MealType(Enum):
    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"

    @property
    def order(self) -> int:
        return MEAL_TYPE_ORDER.index(self.value)

    def __str__(self) -> str:
        return self.value


def validate_meal_type(text) -> MealType:
    '''Returns the canonical MealType for text (case-insensitive).'''
    if isinstance(text, MealType):
        return text
    if isinstance(text, str):
        wanted = text.strip().lower()
        for meal_type in MealType:
            if meal_type.value.lower() == wanted:
                return meal_type
    raise InvalidMealType(
        f"Invalid meal type '{text}'. Must be breakfast, lunch, dinner, or snack."
    )


def _require_text(field_name: str, value) -> str:
    # Stored values are single-line so every document format can hold them
    cleaned = " ".join(value.splitlines()).strip() if isinstance(value, str) else ""
    if not cleaned:
        raise EmptyField(f"The {field_name} cannot be empty.")
    return cleaned


class Meal:
    def __init__(self, meal_type: MealType, day: date, cook: str, description: str):
        self.meal_type = meal_type
        self.day = day
        self.cook = cook
        self.description = description

    @property
    def key(self):
        '''The (meal_type, day) pair used for duplicate detection.'''
        return self.meal_type, self.day

    @property
    def sort_key(self):
        return self.day, self.meal_type.order

    def with_changes(self, cook: Optional[str] = None, description: Optional[str] = None) -> "Meal":
        '''Returns a copy with the supplied fields replaced; unspecified fields are kept.'''
        return new_meal(
            self.meal_type,
            self.day,
            self.cook if cook is None else cook,
            self.description if description is None else description,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Meal):
            return NotImplemented
        return (self.meal_type, self.day, self.cook, self.description) == \
            (other.meal_type, other.day, other.cook, other.description)

    def __hash__(self) -> int:
        return hash((self.meal_type, self.day, self.cook, self.description))

    def __str__(self) -> str:
        weekday = DAY_NAMES[(self.day.weekday() + 1) % 7]
        return f"{self.meal_type} on {weekday} {self.day.strftime(DATE_FORMAT)}: {self.description} (Cook: {self.cook})"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a Meal from a dictionary with canonical string values.'''
        day = data["day"]
        if not isinstance(day, date):
            day = datetime.strptime(day, DATE_FORMAT).date()
        return new_meal(validate_meal_type(data["meal_type"]), day, data["cook"], data["description"])

    def to_dict(self):
        '''Converts the Meal to a dictionary for JSON persistence.'''
        return {
            "meal_type": self.meal_type.value,
            "day": self.day.strftime(DATE_FORMAT),
            "cook": self.cook,
            "description": self.description,
        }


def new_meal(meal_type: MealType, day: date, cook: str, description: str) -> Meal:
    """Build a Meal, trimming text fields.

    Raises EmptyField when cook or description is blank.
    """
    return Meal(
        validate_meal_type(meal_type),
        day,
        _require_text("cook", cook),
        _require_text("description", description),
    )
