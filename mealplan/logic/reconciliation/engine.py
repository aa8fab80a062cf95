"""Reconciliation engine: keeps the Markdown and JSON documents of a week in step.

State of a week's file pair is evaluated fresh on every call from the files
themselves. When both files exist the more recently modified one is
authoritative (unless the caller names a source) and the other is fully
regenerated from it. Identical timestamps mean the pair is already in sync.

Mutations run sync-then-mutate-then-write-both against the authoritative plan.
"""
from __future__ import annotations
import logging
from datetime import date
from typing import Callable, Optional

from mealplan.domain.Config import Config
from mealplan.domain.Meal import Meal, MealType
from mealplan.domain.MealPlan import MealPlan
from mealplan.domain.errors import InvalidDay, NotFound
from mealplan.events.Event_Bus import EventBus, GLOBAL_EVENT_BUS
from mealplan.events.event_helpers import publish_sync_skipped, publish_synced, publish_written
from mealplan.infra.Plan_Repository import JSON, MARKDOWN, PlanRepository, render
from mealplan.logic.reconciliation import mutations
from mealplan.logic.reconciliation.outcomes import Applied, SyncResult, SyncState
from mealplan.utilities.constants import DATE_FORMAT

logger = logging.getLogger(__name__)

AUTO = "auto"
SOURCE_ALIASES = {
    "auto": AUTO,
    "json": JSON,
    "markdown": MARKDOWN,
    "md": MARKDOWN,
}


def parse_source(text: Optional[str]) -> str:
    '''Normalizes a sync source name: auto, json, markdown (or md).'''
    if text is None:
        return AUTO
    try:
        return SOURCE_ALIASES[text.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown sync source '{text}'. Use auto, json or markdown.") from None


def _other(fmt: str) -> str:
    return JSON if fmt == MARKDOWN else MARKDOWN


class ReconciliationEngine:
    def __init__(self, repository: PlanRepository, config: Config,
                 clock: Callable[[], date] = date.today, event_bus: Optional[EventBus] = None):
        self.repository = repository
        self.config = config
        self.clock = clock
        self._event_bus = event_bus or GLOBAL_EVENT_BUS

    def _week(self, week_start_date: Optional[date]) -> date:
        return week_start_date or self.config.current_week_start_date

    # --- State detection ---------------------------------------------------
    def detect_state(self, week_start_date: Optional[date] = None) -> SyncState:
        week = self._week(week_start_date)
        md_ts = self.repository.last_modified(week, MARKDOWN)
        json_ts = self.repository.last_modified(week, JSON)
        if md_ts is None and json_ts is None:
            return SyncState.BOTH_MISSING
        if json_ts is None:
            return SyncState.MARKDOWN_ONLY
        if md_ts is None:
            return SyncState.JSON_ONLY
        if md_ts == json_ts:
            return SyncState.BOTH_PRESENT_IN_SYNC
        return SyncState.BOTH_PRESENT_CONFLICTING

    def choose_source(self, state: SyncState, source: str = AUTO,
                      week_start_date: Optional[date] = None) -> Optional[str]:
        """The authoritative format for this state, or None when there is nothing to do."""
        week = self._week(week_start_date)
        source = parse_source(source)
        if source != AUTO:
            if not self.repository.exists(week, source):
                raise NotFound(f"No {source} meal plan file found at {self.repository.path(week, source)}.")
            return source
        if state == SyncState.BOTH_MISSING or state == SyncState.BOTH_PRESENT_IN_SYNC:
            return None
        if state == SyncState.MARKDOWN_ONLY:
            return MARKDOWN
        if state == SyncState.JSON_ONLY:
            return JSON
        md_ts = self.repository.last_modified(week, MARKDOWN)
        json_ts = self.repository.last_modified(week, JSON)
        return MARKDOWN if md_ts > json_ts else JSON

    # --- Sync ----------------------------------------------------------------
    def sync(self, source: str = AUTO, week_start_date: Optional[date] = None) -> SyncResult:
        """Regenerate the stale side of the week's file pair from the authoritative one.

        The authoritative document is parsed completely before anything is
        written; a parse failure propagates and leaves both files untouched.
        The regenerated file takes the authoritative file's timestamp, so an
        immediate second sync finds the pair in sync and writes nothing.
        """
        week = self._week(week_start_date)
        state = self.detect_state(week)
        authority = self.choose_source(state, source, week)

        if authority is None:
            plan = self.repository.read(week, JSON) if state == SyncState.BOTH_PRESENT_IN_SYNC else None
            logger.info(f"Week {week.strftime(DATE_FORMAT)}: {state.value}, nothing to sync")
            publish_sync_skipped(week, state.value, self._event_bus)
            return SyncResult(state, plan)

        plan = self.repository.read(week, authority)
        target = _other(authority)
        source_ts = self.repository.last_modified(week, authority)
        target_path = self.repository.path(week, target)
        store = self.repository.store
        if store.exists(target_path) and store.read(target_path) == render(plan, target):
            store.set_last_modified(target_path, source_ts)
            logger.info(f"{target_path} already matches {authority}; timestamps aligned")
        else:
            self.repository.write(plan, formats=(target,), timestamp=source_ts)
            logger.info(f"Regenerated {target} from {authority} for week {week.strftime(DATE_FORMAT)}")
        publish_synced(week, authority, target, state.value, self._event_bus)
        return SyncResult(state, plan, authority, target)

    # --- Loading -------------------------------------------------------------
    def load(self, source: str = AUTO, week_start_date: Optional[date] = None) -> MealPlan:
        """The authoritative plan for the week without writing anything.

        A week with no files yields an empty plan. Used for read-only views;
        exports go through synced_plan.
        """
        week = self._week(week_start_date)
        state = self.detect_state(week)
        authority = self.choose_source(state, source, week)
        if authority is None:
            if state == SyncState.BOTH_MISSING:
                return MealPlan(week)
            authority = JSON
        return self.repository.read(week, authority)

    def synced_plan(self, source: str = AUTO, week_start_date: Optional[date] = None) -> MealPlan:
        """Sync the week's file pair, then return its plan (empty when no files exist)."""
        week = self._week(week_start_date)
        result = self.sync(source, week)
        return result.plan if result.plan is not None else MealPlan(week)

    def _commit(self, outcome, week: date):
        if isinstance(outcome, Applied):
            paths = self.repository.write(outcome.plan)
            publish_written(week, paths, self._event_bus)
        return outcome

    # --- Mutations -------------------------------------------------------------
    def add(self, meal: Meal, confirmed: bool = False, replace: bool = False, source: str = AUTO):
        """Add a meal to the configured week; writes both files when applied."""
        week = self.config.current_week_start_date
        plan = self.load(source, week)
        outcome = mutations.add_meal(
            plan, meal, confirmed=confirmed, replace=replace,
            today=self.clock(), reject_past_dates=self.config.reject_past_dates,
        )
        return self._commit(outcome, week)

    def edit(self, meal_type: MealType, day: date, cook: Optional[str] = None,
             description: Optional[str] = None, source: str = AUTO) -> Applied:
        week = self.config.current_week_start_date
        plan = self.load(source, week)
        self._require_in_week(plan, day)
        outcome = mutations.edit_meal(plan, meal_type, day, cook=cook, description=description)
        return self._commit(outcome, week)

    def remove(self, meal_type: MealType, day: date, confirmed: bool = False, source: str = AUTO):
        week = self.config.current_week_start_date
        plan = self.load(source, week)
        self._require_in_week(plan, day)
        outcome = mutations.remove_meal(plan, meal_type, day, confirmed=confirmed)
        return self._commit(outcome, week)

    @staticmethod
    def _require_in_week(plan: MealPlan, day: date):
        if not plan.contains_day(day):
            raise InvalidDay(
                f"{day.strftime(DATE_FORMAT)} is outside the week of "
                f"{plan.week_start_date.strftime(DATE_FORMAT)}."
            )
