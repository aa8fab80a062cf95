from datetime import date
from pathlib import Path

from mealplan.utilities.config import CONFIG_DIR
from mealplan.utilities.constants import (
    CONFIG_FILE_NAME, DATE_FORMAT, ICAL_FILE_NAME, JSON_FILE_NAME, MARKDOWN_FILE_NAME
)

# Centralized paths for the config file and per-week plan files (single source of truth)
CONFIG_FILE = CONFIG_DIR / CONFIG_FILE_NAME


def week_dir(storage_root: Path, week_start_date: date) -> Path:
    return Path(storage_root) / week_start_date.strftime(DATE_FORMAT)


def markdown_path(storage_root: Path, week_start_date: date) -> Path:
    return week_dir(storage_root, week_start_date) / MARKDOWN_FILE_NAME


def json_path(storage_root: Path, week_start_date: date) -> Path:
    return week_dir(storage_root, week_start_date) / JSON_FILE_NAME


def ical_path(storage_root: Path, week_start_date: date) -> Path:
    return week_dir(storage_root, week_start_date) / ICAL_FILE_NAME


__all__ = ['CONFIG_DIR', 'CONFIG_FILE', 'week_dir', 'markdown_path', 'json_path', 'ical_path']
