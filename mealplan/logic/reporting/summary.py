"""Plan summary shown when the CLI runs without a command."""
from collections import Counter
from typing import Any, Dict, List

from mealplan.domain.MealPlan import MealPlan, day_name
from mealplan.utilities.constants import DATE_FORMAT

__all__ = ["compute_plan_summary", "format_plan_summary"]


def compute_plan_summary(plan: MealPlan) -> Dict[str, Any]:
    """Aggregate the plan for display.

    Returns structure:
    {
      'week_start': 'YYYY-MM-DD',
      'total_meals': int,
      'days': [ { 'day': 'Monday', 'date': 'YYYY-MM-DD',
                  'meals': [ { 'meal_type': str, 'description': str, 'cook': str }, ... ] }, ... ],
      'meals_per_cook': [ (cook, count), ... ]   # most frequent first
    }
    Only days that have meals are listed.
    """
    days: List[Dict[str, Any]] = []
    for day in plan.days():
        meals = plan.meals_on(day)
        if not meals:
            continue
        days.append({
            'day': day_name(day),
            'date': day.strftime(DATE_FORMAT),
            'meals': [
                {'meal_type': m.meal_type.value, 'description': m.description, 'cook': m.cook}
                for m in meals
            ],
        })
    cooks = Counter(m.cook for m in plan.meals)
    return {
        'week_start': plan.week_start_date.strftime(DATE_FORMAT),
        'total_meals': len(plan),
        'days': days,
        'meals_per_cook': sorted(cooks.items(), key=lambda item: (-item[1], item[0])),
    }


def format_plan_summary(plan: MealPlan) -> str:
    summary = compute_plan_summary(plan)
    lines = [
        "Current Meal Plan Summary:",
        f"Week starting: {summary['week_start']}",
        f"Total meals: {summary['total_meals']}",
    ]
    for day in summary['days']:
        lines.append("")
        lines.append(f"{day['day']} ({day['date']}):")
        for meal in day['meals']:
            lines.append(f"  {meal['meal_type']}: {meal['description']} (Cook: {meal['cook']})")
    if summary['meals_per_cook']:
        lines.append("")
        lines.append("Meals per cook: " + ", ".join(f"{cook} {count}" for cook, count in summary['meals_per_cook']))
    return "\n".join(lines)
