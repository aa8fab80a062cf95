"""Console observers for plan events.

Subscribes to the GLOBAL_EVENT_BUS for:
  - plan.synced
  - plan.written

and prints one line per event so the user sees which file was regenerated.
"""
from __future__ import annotations
from typing import Any, Callable, Dict

from mealplan.events.Event_Bus import EventBus, GLOBAL_EVENT_BUS, PLAN_SYNCED, PLAN_WRITTEN

_LABELS = {"json": "JSON", "markdown": "Markdown"}


def console_listener(out: Callable[[str], None] = print) -> Callable[[str, Dict[str, Any]], None]:
    def _listener(event_name: str, payload: Dict[str, Any]):
        if event_name == PLAN_SYNCED:
            source = _LABELS.get(payload["source"], payload["source"])
            target = _LABELS.get(payload["target"], payload["target"])
            out(f"Syncing from {source} to {target}...")
        elif event_name == PLAN_WRITTEN:
            for path in payload["paths"].values():
                out(f"Updated {path}")
    return _listener


def start(out: Callable[[str], None] = print, bus: EventBus = GLOBAL_EVENT_BUS):
    """Subscribe a console listener; returns it so callers can unsubscribe."""
    listener = console_listener(out)
    bus.subscribe(PLAN_SYNCED, listener)
    bus.subscribe(PLAN_WRITTEN, listener)
    return listener


def stop(listener, bus: EventBus = GLOBAL_EVENT_BUS):
    bus.unsubscribe(PLAN_SYNCED, listener)
    bus.unsubscribe(PLAN_WRITTEN, listener)
