from datetime import datetime, time, timedelta, timezone
from typing import Dict, Optional, Tuple

from icalendar import Calendar, Event

from mealplan.domain.MealPlan import MealPlan
from mealplan.domain.errors import MalformedDocument
from mealplan.utilities.constants import (
    DATE_FORMAT, DEFAULT_MEAL_TIMES, ICAL_PRODID, ICAL_UID_DOMAIN, MEAL_EVENT_DURATION_MINUTES
)

REQUIRED_EVENT_PROPERTIES = ("UID", "DTSTAMP", "DTSTART", "SUMMARY")


def _check_events(calendar: Calendar):
    for event in calendar.walk("VEVENT"):
        missing = [name for name in REQUIRED_EVENT_PROPERTIES if name not in event]
        if missing:
            raise MalformedDocument(f"Calendar event is missing {', '.join(missing)}")


def render(plan: MealPlan, meal_times: Optional[Dict[str, Tuple[int, int]]] = None,
           stamp: Optional[datetime] = None) -> bytes:
    """Generate an iCalendar document with one event per meal of the plan.

    Events start at the meal type's slot on the meal's day (floating local time)
    and last MEAL_EVENT_DURATION_MINUTES. UIDs are derived from meal type and day
    so re-exports of the same plan update events instead of duplicating them.
    """
    times = dict(DEFAULT_MEAL_TIMES)
    if meal_times:
        times.update(meal_times)
    stamp = stamp or datetime.now(timezone.utc)

    calendar = Calendar()
    calendar.add("prodid", ICAL_PRODID)
    calendar.add("version", "2.0")
    calendar.add("x-wr-calname", f"Meal Plan {plan.week_start_date.strftime(DATE_FORMAT)}")

    seen: Dict[tuple, int] = {}
    for meal in plan.sorted_meals():
        hour, minute = times[meal.meal_type.value]
        start = datetime.combine(meal.day, time(hour, minute))
        # duplicates of the same (type, day) get distinct UIDs
        index = seen.get(meal.key, 0)
        seen[meal.key] = index + 1

        event = Event()
        event.add("uid", f"{meal.meal_type.value.lower()}-{meal.day.strftime('%Y%m%d')}-{index}@{ICAL_UID_DOMAIN}")
        event.add("dtstamp", stamp)
        event.add("dtstart", start)
        event.add("dtend", start + timedelta(minutes=MEAL_EVENT_DURATION_MINUTES))
        event.add("summary", meal.description)
        event.add("description", f"Cook: {meal.cook}")
        event.add("categories", [meal.meal_type.value])
        calendar.add_component(event)

    _check_events(calendar)
    return calendar.to_ical()
