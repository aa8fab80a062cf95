"""Event helper utilities.

Helpers for publishing plan-file events on an event bus (the global one by
default).

Quick import:
    from mealplan.events.event_helpers import (
        publish_synced, publish_sync_skipped, publish_written,
        PLAN_SYNCED, PLAN_SYNC_SKIPPED, PLAN_WRITTEN
    )
"""
from __future__ import annotations
from datetime import date
from pathlib import Path
from typing import Dict, Optional

from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS,
    PLAN_SYNCED, PLAN_SYNC_SKIPPED, PLAN_WRITTEN
)

__all__ = [
    'publish_synced', 'publish_sync_skipped', 'publish_written',
    'PLAN_SYNCED', 'PLAN_SYNC_SKIPPED', 'PLAN_WRITTEN'
]


def publish_synced(week: date, source: str, target: str, state: str, bus: Optional[EventBus] = None):
    """Publish a plan.synced event (target regenerated from source)."""
    (bus or GLOBAL_EVENT_BUS).publish(PLAN_SYNCED, {
        'week': week,
        'source': source,
        'target': target,
        'state': state
    })


def publish_sync_skipped(week: date, state: str, bus: Optional[EventBus] = None):
    """Publish a plan.sync_skipped event (nothing to regenerate)."""
    (bus or GLOBAL_EVENT_BUS).publish(PLAN_SYNC_SKIPPED, {
        'week': week,
        'state': state
    })


def publish_written(week: date, paths: Dict[str, Path], bus: Optional[EventBus] = None):
    """Publish a plan.written event after a mutation wrote the file pair."""
    (bus or GLOBAL_EVENT_BUS).publish(PLAN_WRITTEN, {
        'week': week,
        'paths': dict(paths)
    })
