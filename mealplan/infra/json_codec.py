"""JSON serialization of a MealPlan.

Pure translation: no file access. Meals are written in canonical order so the
output is deterministic for a given plan.
"""
import json
import logging

from pydantic import ValidationError

from mealplan.domain.Meal import new_meal, validate_meal_type
from mealplan.domain.MealPlan import MealPlan
from mealplan.domain.errors import MalformedJson
from mealplan.utilities.validators import MealPlanDocument

logger = logging.getLogger(__name__)


def render(plan: MealPlan) -> bytes:
    text = json.dumps(plan.to_dict(), indent=2, ensure_ascii=False)
    return (text + "\n").encode("utf-8")


def _describe(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        location = ".".join(str(p) for p in err.get("loc", ())) or "document"
        parts.append(f"{location}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


def parse(data) -> MealPlan:
    """Parse JSON bytes (or text) into a MealPlan.

    Raises MalformedJson on invalid JSON, missing fields, unknown meal types,
    bad dates, blank text fields or meals outside the week.
    """
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedJson(f"Meal plan JSON is not valid UTF-8: {e}") from e
    try:
        document = MealPlanDocument.model_validate_json(data)
    except ValidationError as e:
        logger.debug(f"JSON validation failed: {e}")
        raise MalformedJson(f"Invalid meal plan JSON: {_describe(e)}") from e

    meals = [
        new_meal(validate_meal_type(record.meal_type), record.day, record.cook, record.description)
        for record in document.meals
    ]
    return MealPlan(document.week_start_date, meals)
