import json
from datetime import date

from mealplan.domain.Config import Config
from mealplan.infra.Config_Repository import ConfigRepository

TODAY = date(2024, 1, 10)  # a Wednesday


def test_defaults_when_missing(tmp_path):
    repo = ConfigRepository(tmp_path / "config.json")
    assert not repo.exists()
    config = repo.load(TODAY)
    assert config.meal_plan_storage_path == tmp_path
    assert config.current_week_start_date == date(2024, 1, 7)


def test_init_and_load(tmp_path):
    repo = ConfigRepository(tmp_path / "cfg" / "config.json")
    saved = repo.init(TODAY, storage_path=tmp_path / "plans")
    data = json.loads((tmp_path / "cfg" / "config.json").read_text())
    assert data == {
        "meal_plan_storage_path": str(tmp_path / "plans"),
        "current_week_start_date": "2024-01-07",
    }
    assert repo.load(date(2030, 1, 1)) == saved


def test_invalid_file_falls_back(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"meal_plan_storage_path": "/x", "current_week_start_date": "soon"}')
    config = ConfigRepository(path).load(TODAY)
    assert config.meal_plan_storage_path == tmp_path
    assert config.current_week_start_date == date(2024, 1, 7)


def test_reject_past_dates_flag_is_carried(tmp_path):
    repo = ConfigRepository(tmp_path / "config.json", reject_past_dates=True)
    assert repo.load(TODAY).reject_past_dates
    repo.save(Config(tmp_path, date(2024, 1, 7)))
    assert repo.load(TODAY).reject_past_dates
