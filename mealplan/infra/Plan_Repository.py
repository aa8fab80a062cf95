import logging
from datetime import date
from pathlib import Path
from typing import Dict, Optional, Tuple

from mealplan.domain.MealPlan import MealPlan
from mealplan.domain.errors import IoError, MalformedDocument, MalformedJson
from mealplan.infra import json_codec, markdown_codec
from mealplan.infra.File_Store import FileStore
from mealplan.infra.paths import json_path, markdown_path
from mealplan.utilities.constants import DATE_FORMAT

logger = logging.getLogger(__name__)

MARKDOWN = "markdown"
JSON = "json"
FORMATS = (MARKDOWN, JSON)


def render(plan: MealPlan, fmt: str) -> bytes:
    if fmt == MARKDOWN:
        return markdown_codec.render(plan).encode("utf-8")
    return json_codec.render(plan)


class PlanRepository:
    """Access to the Markdown/JSON file pair of each week under one storage root."""

    def __init__(self, storage_root: Path, store: Optional[FileStore] = None):
        self.storage_root = Path(storage_root)
        self.store = store or FileStore()

    def path(self, week_start_date: date, fmt: str) -> Path:
        if fmt == MARKDOWN:
            return markdown_path(self.storage_root, week_start_date)
        return json_path(self.storage_root, week_start_date)

    def exists(self, week_start_date: date, fmt: str) -> bool:
        return self.store.exists(self.path(week_start_date, fmt))

    def last_modified(self, week_start_date: date, fmt: str) -> Optional[int]:
        path = self.path(week_start_date, fmt)
        if not self.store.exists(path):
            return None
        return self.store.last_modified(path)

    def read(self, week_start_date: date, fmt: str) -> MealPlan:
        """Read and fully parse one side of the pair.

        Raises NotFound, IoError, MalformedDocument or MalformedJson.
        """
        path = self.path(week_start_date, fmt)
        data = self.store.read(path)
        if fmt == MARKDOWN:
            plan = markdown_codec.parse(data)
            error = MalformedDocument
        else:
            plan = json_codec.parse(data)
            error = MalformedJson
        if plan.week_start_date != week_start_date:
            raise error(
                f"{path} describes the week of {plan.week_start_date.strftime(DATE_FORMAT)}, "
                f"expected {week_start_date.strftime(DATE_FORMAT)}"
            )
        logger.debug(f"Read {len(plan)} meals from {path}")
        return plan

    def write(self, plan: MealPlan, formats=FORMATS, timestamp: Optional[int] = None) -> Dict[str, Path]:
        """Write the plan to the given formats, all or none.

        Every document is rendered before the first write. If a later write
        fails, files already written are restored to their previous content and
        timestamp (or removed when they did not exist) and the IoError is re-raised.
        All written files end up with the same last-modified timestamp: the
        given one, or the timestamp of the last file written.
        """
        week = plan.week_start_date
        rendered = {fmt: render(plan, fmt) for fmt in formats}
        previous: Dict[str, Optional[Tuple[bytes, int]]] = {}
        written = []
        try:
            for fmt, data in rendered.items():
                path = self.path(week, fmt)
                previous[fmt] = (self.store.read(path), self.store.last_modified(path)) \
                    if self.store.exists(path) else None
                self.store.write(path, data)
                written.append(fmt)
        except IoError:
            self._rollback(week, written, previous)
            raise

        paths = {fmt: self.path(week, fmt) for fmt in written}
        if timestamp is None and written:
            timestamp = self.store.last_modified(paths[written[-1]])
        for path in paths.values():
            self.store.set_last_modified(path, timestamp)
        logger.info(f"Wrote week {week.strftime(DATE_FORMAT)} to {', '.join(str(p) for p in paths.values())}")
        return paths

    def _rollback(self, week_start_date: date, written, previous):
        for fmt in written:
            path = self.path(week_start_date, fmt)
            try:
                if previous.get(fmt) is None:
                    self.store.delete(path)
                else:
                    data, timestamp = previous[fmt]
                    # the restored file keeps its previous timestamp
                    self.store.write(path, data)
                    self.store.set_last_modified(path, timestamp)
                logger.warning(f"Rolled back {path} after a failed write")
            except IoError as e:
                logger.error(f"Rollback failed for {path}: {e}")
