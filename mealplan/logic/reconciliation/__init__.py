"""Reconciliation of a week's Markdown and JSON documents."""
from mealplan.logic.reconciliation.engine import AUTO, ReconciliationEngine, parse_source
from mealplan.logic.reconciliation.mutations import add_meal, edit_meal, remove_meal
from mealplan.logic.reconciliation.outcomes import Applied, NeedsConfirmation, SyncResult, SyncState

__all__ = [
    "AUTO", "ReconciliationEngine", "parse_source",
    "add_meal", "edit_meal", "remove_meal",
    "Applied", "NeedsConfirmation", "SyncResult", "SyncState",
]
