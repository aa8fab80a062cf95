"""Simple Event Bus / Observer implementation for plan file notifications.

Event names used so far:
  plan.synced -> payload {"week": date, "source": str, "target": str, "state": str}
  plan.sync_skipped -> payload {"week": date, "state": str}
  plan.written -> payload {"week": date, "paths": dict[str, Path]}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
PLAN_SYNCED = "plan.synced"
PLAN_SYNC_SKIPPED = "plan.sync_skipped"
PLAN_WRITTEN = "plan.written"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		try:
			self._subscribers[event_name].remove(callback)
		except (ValueError, KeyError):
			pass

	def publish(self, event_name: str, payload: Any):
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				# observer errors are logged, never raised to the publisher
				logger.exception(f"[EventBus] Error delivering {event_name} to {cb}")


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'PLAN_SYNCED', 'PLAN_SYNC_SKIPPED', 'PLAN_WRITTEN'
]
