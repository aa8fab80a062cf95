"""Config value: storage root, the week used to resolve day names, and policy flags."""
from datetime import date, datetime
from pathlib import Path

from mealplan.utilities.constants import DATE_FORMAT


class Config:
    def __init__(self, meal_plan_storage_path: Path, current_week_start_date: date,
                 reject_past_dates: bool = False):
        self.meal_plan_storage_path = Path(meal_plan_storage_path)
        self.current_week_start_date = current_week_start_date
        self.reject_past_dates = reject_past_dates

    def with_storage_path(self, path: Path) -> "Config":
        '''Returns a copy pointing at another storage root (the --path override).'''
        return Config(path, self.current_week_start_date, self.reject_past_dates)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Config):
            return NotImplemented
        return (self.meal_plan_storage_path, self.current_week_start_date, self.reject_past_dates) == \
            (other.meal_plan_storage_path, other.current_week_start_date, other.reject_past_dates)

    def __str__(self) -> str:
        return (f"Storage path: {self.meal_plan_storage_path} - "
                f"Week start: {self.current_week_start_date.strftime(DATE_FORMAT)}")

    __repr__ = __str__

    def to_dict(self):
        '''Only the persisted keys; policy flags come from the environment.'''
        return {
            "meal_plan_storage_path": str(self.meal_plan_storage_path),
            "current_week_start_date": self.current_week_start_date.strftime(DATE_FORMAT),
        }

    @staticmethod
    def from_dict(data, reject_past_dates: bool = False):
        week_start = data["current_week_start_date"]
        if not isinstance(week_start, date):
            week_start = datetime.strptime(week_start, DATE_FORMAT).date()
        return Config(Path(data["meal_plan_storage_path"]).expanduser(), week_start, reject_past_dates)
