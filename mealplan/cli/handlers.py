"""Command handlers: translate parsed commands into engine calls, prompts and messages.

The engine decides when a confirmation is needed; the handlers own the prompt
and retry the operation with confirmed=True.
"""
import logging
from datetime import date
from pathlib import Path
from typing import Callable, Optional

from mealplan.domain.Config import Config
from mealplan.domain.Meal import new_meal, validate_meal_type
from mealplan.domain.MealPlan import resolve_day
from mealplan.domain.errors import MealNotFound, MealPlanError
from mealplan.infra.Config_Repository import ConfigRepository
from mealplan.infra.File_Store import FileStore
from mealplan.infra.Plan_Repository import PlanRepository
from mealplan.infra.paths import ical_path
from mealplan.logic.reconciliation import AUTO, NeedsConfirmation, ReconciliationEngine
from mealplan.logic.reporting.summary import format_plan_summary
from mealplan.utilities.config import MEAL_TIMES
from mealplan.utilities.export_import import PlanExporter

logger = logging.getLogger(__name__)


class OperationCancelled(MealPlanError):
    """The user declined a confirmation prompt."""


def ask(message: str) -> bool:
    '''Interactive y/n prompt; end of input counts as "no".'''
    try:
        answer = input(f"{message} (y/n) ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def prompt_text(message: str) -> str:
    try:
        return input(f"{message} ").strip()
    except EOFError:
        return ""


class CommandHandlers:
    def __init__(self, config: Config, config_repository: ConfigRepository,
                 store: Optional[FileStore] = None,
                 ask: Callable[[str], bool] = ask,
                 prompt_text: Callable[[str], str] = prompt_text,
                 out: Callable[[str], None] = print,
                 clock: Callable[[], date] = date.today,
                 assume_yes: bool = False):
        self.config = config
        self.config_repository = config_repository
        self.store = store or FileStore()
        self.repository = PlanRepository(config.meal_plan_storage_path, self.store)
        self.engine = ReconciliationEngine(self.repository, config, clock=clock)
        self.exporter = PlanExporter(self.store, meal_times=MEAL_TIMES)
        self.ask = ask
        self.prompt_text = prompt_text
        self.out = out
        self.clock = clock
        self.assume_yes = assume_yes

    # --- helpers -------------------------------------------------------------
    def _confirmed(self, message: str) -> bool:
        if self.assume_yes:
            logger.debug(f"Auto-confirmed: {message}")
            return True
        return self.ask(message)

    def _run_confirmable(self, operation: Callable[..., object], cancel_message: str):
        outcome = operation(confirmed=False)
        if isinstance(outcome, NeedsConfirmation):
            if not self._confirmed(outcome.message):
                raise OperationCancelled(cancel_message)
            outcome = operation(confirmed=True)
        return outcome

    def _key(self, meal_type: str, day: str):
        return validate_meal_type(meal_type), resolve_day(day, self.config.current_week_start_date)

    # --- commands --------------------------------------------------------------
    def add(self, description: str, meal_type: str, day: str, cook: str, replace: bool = False):
        meal_type, day = self._key(meal_type, day)
        meal = new_meal(meal_type, day, cook, description)
        outcome = self._run_confirmable(
            lambda confirmed: self.engine.add(meal, confirmed=confirmed, replace=replace),
            "Meal not added due to user cancellation.",
        )
        self.out("Meal replaced successfully." if outcome.previous else "Meal added successfully.")
        return outcome

    def edit(self, meal_type: str, day: str, description: Optional[str] = None, cook: Optional[str] = None):
        meal_type, day = self._key(meal_type, day)
        if description is None and cook is None:
            current = self.engine.load().find_meal(meal_type, day)
            if current is None:
                raise MealNotFound(f"No {meal_type} meal found for {day}.")
            self.out("Current meal details:")
            self.out(f"  Type: {current.meal_type}")
            self.out(f"  Day: {current.day}")
            self.out(f"  Cook: {current.cook}")
            self.out(f"  Description: {current.description}")
            cook = self.prompt_text("Enter new cook (leave empty to keep current value):") or None
            description = self.prompt_text("Enter new description (leave empty to keep current value):") or None
        outcome = self.engine.edit(meal_type, day, cook=cook, description=description)
        self.out("Meal updated successfully.")
        return outcome

    def remove(self, meal_type: str, day: str):
        meal_type, day = self._key(meal_type, day)
        outcome = self._run_confirmable(
            lambda confirmed: self.engine.remove(meal_type, day, confirmed=confirmed),
            "Meal removal cancelled by user.",
        )
        self.out("Meal removed successfully.")
        return outcome

    def export_ical(self, output: Optional[Path] = None) -> Path:
        plan = self.engine.synced_plan()
        if output is None:
            output = ical_path(self.config.meal_plan_storage_path, plan.week_start_date)
        path = self.exporter.export_ical(plan, output)
        self.out(f"Meal plan exported to iCal successfully: {path}")
        return path

    def export_json(self, output: Optional[Path] = None) -> Path:
        path = self.exporter.export_json(self.engine.synced_plan(), output)
        self.out(f"Meal plan exported to JSON successfully: {path}")
        return path

    def sync(self, source: str = AUTO):
        result = self.engine.sync(source)
        if result.regenerated:
            self.out("Meal plan synchronized successfully.")
        elif result.plan is None:
            self.out("No meal plan files found to sync.")
        else:
            self.out("Meal plan files are already in sync.")
        return result

    def config_init(self, storage_path: Optional[Path] = None) -> Config:
        path = self.config_repository.config_file
        if self.config_repository.exists() and not self._confirmed(
                f"Configuration file already exists at {path}. Overwrite?"):
            raise OperationCancelled("Configuration initialization cancelled by user.")
        config = self.config_repository.init(self.clock(), storage_path=storage_path)
        self.out(f"Configuration saved to {path}")
        self.out(f"Meal plan storage path: {config.meal_plan_storage_path}")
        self.out(f"Current week start date: {config.current_week_start_date}")
        self.out("Configuration initialized successfully.")
        return config

    def welcome(self):
        self.out("Welcome to the Meal Plan CLI Tool!")
        self.out("This tool helps you organize and manage your weekly meal plans.")
        self.out("Use --help to see available commands.")
        plan = self.engine.load()
        if not plan.is_empty():
            self.out("")
            self.out(format_plan_summary(plan))
