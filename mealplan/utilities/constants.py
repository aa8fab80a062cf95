from typing import Final

DATE_FORMAT: Final[str] = "%Y-%m-%d"
EXPORT_TIMESTAMP_FORMAT: Final[str] = "%Y%m%d_%H%M%S"

# Sunday-first, matching the week_start_date convention
DAY_NAMES: Final[tuple[str, ...]] = (
    "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"
)
MEAL_TYPE_ORDER: Final[tuple[str, ...]] = ("Breakfast", "Lunch", "Dinner", "Snack")

MARKDOWN_FILE_NAME: Final[str] = "meal_plan.md"
JSON_FILE_NAME: Final[str] = "meal_plan.json"
ICAL_FILE_NAME: Final[str] = "meal_plan.ics"
CONFIG_FILE_NAME: Final[str] = "config.json"

# Default time-of-day slot per meal type (hour, minute); events last one hour
DEFAULT_MEAL_TIMES: Final[dict[str, tuple[int, int]]] = {
    "Breakfast": (8, 0),
    "Lunch": (12, 0),
    "Snack": (15, 0),
    "Dinner": (18, 0),
}
MEAL_EVENT_DURATION_MINUTES: Final[int] = 60

ICAL_PRODID: Final[str] = "-//mealplan//Meal Plan Export//EN"
ICAL_UID_DOMAIN: Final[str] = "mealplan"
