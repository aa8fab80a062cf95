"""Process settings for the mealplan CLI.

Values come from the environment (optionally a `.env` file). They only provide
defaults: the per-run `Config` value is built once in
`mealplan.infra.Config_Repository` and threaded through explicitly.
"""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

from mealplan.utilities.constants import DEFAULT_MEAL_TIMES

# Load environment variables from a .env file in the working directory, if any
load_dotenv(Path.cwd() / '.env')


def _env_flag(name: str, default: str = 'False') -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


def _env_time(name: str, default: tuple[int, int]) -> tuple[int, int]:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        hour, minute = (int(part) for part in raw.strip().split(':', 1))
    except ValueError:
        return default
    if not (0 <= hour < 24 and 0 <= minute < 60):
        return default
    return hour, minute


# Application Settings
DEBUG: Final[bool] = _env_flag('DEBUG')
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'WARNING').upper()

# File Paths
CONFIG_DIR: Final[Path] = Path(
    os.getenv('MEALPLAN_CONFIG_DIR', str(Path.home() / '.config' / 'mealplan'))
).expanduser()

# Policy
REJECT_PAST_DATES: Final[bool] = _env_flag('MEALPLAN_REJECT_PAST_DATES')

# Calendar export slots
MEAL_TIMES: Final[dict[str, tuple[int, int]]] = {
    meal_type: _env_time(f'MEALPLAN_{meal_type.upper()}_TIME', slot)
    for meal_type, slot in DEFAULT_MEAL_TIMES.items()
}
