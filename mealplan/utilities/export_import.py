"""
Export functionality for meal plans (iCalendar and JSON).
"""
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Tuple
import logging

from mealplan.domain.MealPlan import MealPlan
from mealplan.infra import ical_utils, json_codec
from mealplan.infra.File_Store import FileStore
from mealplan.utilities.constants import EXPORT_TIMESTAMP_FORMAT

logger = logging.getLogger(__name__)


class PlanExporter:
    """Export a week's plan to standalone files. Exports are never read back."""

    def __init__(self, store: Optional[FileStore] = None,
                 meal_times: Optional[Dict[str, Tuple[int, int]]] = None):
        self.store = store or FileStore()
        self.meal_times = meal_times

    def export_ical(self, plan: MealPlan, output_path: Path) -> Path:
        """Export the plan as an .ics calendar, one event per meal."""
        output_path = Path(output_path)
        data = ical_utils.render(plan, meal_times=self.meal_times)
        self.store.write(output_path, data)
        logger.info(f"Exported {len(plan)} meals to iCal: {output_path}")
        return output_path

    def export_json(self, plan: MealPlan, output_path: Optional[Path] = None) -> Path:
        """Export the plan to a JSON file (same layout as the stored document)."""
        if output_path is None:
            timestamp = datetime.now().strftime(EXPORT_TIMESTAMP_FORMAT)
            output_path = Path(f"meal_plan_export_{timestamp}.json")
        output_path = Path(output_path)
        self.store.write(output_path, json_codec.render(plan))
        logger.info(f"Exported {len(plan)} meals to JSON: {output_path}")
        return output_path
