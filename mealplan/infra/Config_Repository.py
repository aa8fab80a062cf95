"""Config file persistence: load with defaults, and the `config init` write."""
import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from mealplan.domain.Config import Config
from mealplan.domain.MealPlan import week_start_for
from mealplan.domain.errors import MealPlanError
from mealplan.infra.File_Store import FileStore
from mealplan.infra.paths import CONFIG_FILE
from mealplan.utilities.config import REJECT_PAST_DATES
from mealplan.utilities.validators import ConfigDocument

logger = logging.getLogger(__name__)


class ConfigRepository:
    def __init__(self, config_file: Path = CONFIG_FILE, store: Optional[FileStore] = None,
                 reject_past_dates: bool = REJECT_PAST_DATES):
        self.config_file = Path(config_file)
        self.store = store or FileStore()
        self.reject_past_dates = reject_past_dates

    def exists(self) -> bool:
        return self.store.exists(self.config_file)

    def default(self, today: date) -> Config:
        '''Storage next to the config file; week starting the Sunday on or before today.'''
        return Config(self.config_file.parent, week_start_for(today), self.reject_past_dates)

    def load(self, today: date) -> Config:
        """Read the config file, falling back to defaults when it is missing or invalid."""
        if not self.exists():
            logger.info(f"No configuration file at {self.config_file}; using defaults")
            return self.default(today)
        try:
            document = ConfigDocument.model_validate_json(self.store.read(self.config_file))
        except ValidationError as e:
            logger.warning(f"Failed to load configuration from {self.config_file}: {e}")
            return self.default(today)
        except MealPlanError as e:
            logger.warning(f"Failed to read configuration file: {e}")
            return self.default(today)
        return Config.from_dict(document.model_dump(), self.reject_past_dates)

    def save(self, config: Config) -> Path:
        data = json.dumps(config.to_dict(), indent=2, ensure_ascii=False) + "\n"
        self.store.write(self.config_file, data.encode("utf-8"))
        logger.info(f"Configuration saved to {self.config_file}")
        return self.config_file

    def init(self, today: date, storage_path: Optional[Path] = None) -> Config:
        '''Write a fresh default configuration (optionally with another storage root) and return it.'''
        config = self.default(today)
        if storage_path is not None:
            config = config.with_storage_path(Path(storage_path).expanduser())
        self.save(config)
        return config
