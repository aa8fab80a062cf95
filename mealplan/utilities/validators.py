"""
Input validation schemas using Pydantic for the JSON plan document and the config file.
"""
from datetime import date, datetime, timedelta
from typing import List

from pydantic import BaseModel, Field, field_validator, model_validator

from mealplan.utilities.constants import DATE_FORMAT, MEAL_TYPE_ORDER


def _strict_date(v):
    """Accept date objects or YYYY-MM-DD strings only (no timestamps, no datetimes)."""
    if isinstance(v, datetime):
        raise ValueError('expected a date, got a datetime')
    if isinstance(v, date):
        return v
    if not isinstance(v, str):
        raise ValueError(f'expected a date string in {DATE_FORMAT} format')
    try:
        return datetime.strptime(v.strip(), DATE_FORMAT).date()
    except ValueError:
        raise ValueError(f"invalid date '{v}', expected YYYY-MM-DD")


class MealRecord(BaseModel):
    """Schema for one meal entry of the JSON document."""
    meal_type: str
    day: date
    cook: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)

    @field_validator('meal_type')
    @classmethod
    def validate_meal_type(cls, v):
        """Must be one of the canonical names exactly."""
        if v not in MEAL_TYPE_ORDER:
            raise ValueError(f"meal_type must be one of {', '.join(MEAL_TYPE_ORDER)}")
        return v

    @field_validator('day', mode='before')
    @classmethod
    def validate_day(cls, v):
        return _strict_date(v)

    @field_validator('cook', 'description')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace; blank values are rejected."""
        v = v.strip()
        if not v:
            raise ValueError('must not be empty')
        return v


class MealPlanDocument(BaseModel):
    """Schema for the JSON serialization of a week's plan."""
    week_start_date: date
    meals: List[MealRecord] = Field(default_factory=list)

    @field_validator('week_start_date', mode='before')
    @classmethod
    def validate_week_start(cls, v):
        return _strict_date(v)

    @model_validator(mode='after')
    def validate_meals_in_week(self):
        """Every meal must fall on one of the seven days of the week."""
        week_end = self.week_start_date + timedelta(days=6)
        for meal in self.meals:
            if not (self.week_start_date <= meal.day <= week_end):
                raise ValueError(
                    f"meal on {meal.day.strftime(DATE_FORMAT)} is outside the week starting "
                    f"{self.week_start_date.strftime(DATE_FORMAT)}"
                )
        return self


class ConfigDocument(BaseModel):
    """Schema for the configuration file."""
    meal_plan_storage_path: str = Field(..., min_length=1)
    current_week_start_date: date

    @field_validator('meal_plan_storage_path')
    @classmethod
    def strip_path(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('meal_plan_storage_path cannot be empty')
        return v

    @field_validator('current_week_start_date', mode='before')
    @classmethod
    def validate_week_start(cls, v):
        return _strict_date(v)
