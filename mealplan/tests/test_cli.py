import json
from datetime import date

import pytest

from mealplan.cli import cli_run
from mealplan.cli.handlers import CommandHandlers, OperationCancelled
from mealplan.domain.Config import Config
from mealplan.infra.Config_Repository import ConfigRepository

TODAY = date(2024, 1, 8)  # Monday of the week starting 2024-01-07


@pytest.fixture
def config_repository(tmp_path):
    repo = ConfigRepository(tmp_path / "config" / "config.json")
    repo.init(TODAY, storage_path=tmp_path / "plans")
    return repo


def run(config_repository, *argv):
    return cli_run.main(list(argv), config_repository=config_repository, today=TODAY)


def _stored(tmp_path):
    return json.loads((tmp_path / "plans" / "2024-01-07" / "meal_plan.json").read_text())


def test_add_creates_plan(tmp_path, config_repository, capsys):
    assert run(config_repository, "add", "Bacon and Eggs", "-t", "breakfast", "-d", "Monday", "-c", "Erik") == 0
    out = capsys.readouterr().out
    assert "Meal added successfully." in out
    assert "Storage path:" in out
    assert _stored(tmp_path)["meals"] == [
        {"meal_type": "Breakfast", "day": "2024-01-08", "cook": "Erik", "description": "Bacon and Eggs"},
    ]
    assert (tmp_path / "plans" / "2024-01-07" / "meal_plan.md").exists()


def test_duplicate_add_declined(tmp_path, config_repository, capsys, monkeypatch):
    run(config_repository, "add", "Bacon and Eggs", "-t", "Breakfast", "-d", "Mon", "-c", "Erik")
    monkeypatch.setattr("builtins.input", lambda prompt: "n")
    assert run(config_repository, "add", "Eggs Benedict", "-t", "Breakfast", "-d", "Monday", "-c", "Erik") == 1
    assert "Meal not added" in capsys.readouterr().err
    assert len(_stored(tmp_path)["meals"]) == 1


def test_duplicate_add_with_yes(tmp_path, config_repository):
    run(config_repository, "add", "Bacon and Eggs", "-t", "Breakfast", "-d", "Monday", "-c", "Erik")
    assert run(config_repository, "--yes", "add", "Eggs Benedict", "-t", "Breakfast", "-d", "Monday", "-c", "Erik") == 0
    assert [m["description"] for m in _stored(tmp_path)["meals"]] == ["Bacon and Eggs", "Eggs Benedict"]


def test_duplicate_add_replace(tmp_path, config_repository, capsys):
    run(config_repository, "add", "Bacon and Eggs", "-t", "Breakfast", "-d", "Monday", "-c", "Erik")
    assert run(config_repository, "-y", "add", "Eggs Benedict", "-t", "Breakfast", "-d", "Monday", "-c", "Erik",
               "--replace") == 0
    assert "Meal replaced successfully." in capsys.readouterr().out
    assert [m["description"] for m in _stored(tmp_path)["meals"]] == ["Eggs Benedict"]


def test_edit_missing_meal_reports_error(config_repository, capsys):
    run(config_repository, "add", "Bacon and Eggs", "-t", "Breakfast", "-d", "Monday", "-c", "Erik")
    assert run(config_repository, "edit", "Tacos", "-t", "Dinner", "-d", "Monday") == 1
    assert "Error:" in capsys.readouterr().err


def test_edit_and_remove(tmp_path, config_repository):
    run(config_repository, "add", "Bacon and Eggs", "-t", "Breakfast", "-d", "Monday", "-c", "Erik")
    run(config_repository, "add", "Tacos", "-t", "Dinner", "-d", "Monday", "-c", "Anna")
    assert run(config_repository, "edit", "Eggs Benedict", "-t", "breakfast", "-d", "2024-01-08") == 0
    assert run(config_repository, "remove", "-t", "Dinner", "-d", "Monday") == 0
    assert _stored(tmp_path)["meals"] == [
        {"meal_type": "Breakfast", "day": "2024-01-08", "cook": "Erik", "description": "Eggs Benedict"},
    ]


def test_invalid_meal_type(config_repository, capsys):
    assert run(config_repository, "add", "Brunch", "-t", "Brunch", "-d", "Monday", "-c", "Erik") == 1
    assert "Brunch" in capsys.readouterr().err


def test_sync_without_files(config_repository, capsys):
    assert run(config_repository, "sync") == 0
    assert "No meal plan files found to sync." in capsys.readouterr().out


def test_sync_reports_regeneration(tmp_path, config_repository, capsys):
    run(config_repository, "add", "Tacos", "-t", "Dinner", "-d", "Monday", "-c", "Anna")
    (tmp_path / "plans" / "2024-01-07" / "meal_plan.json").unlink()
    capsys.readouterr()
    assert run(config_repository, "sync", "--source", "Markdown") == 0
    out = capsys.readouterr().out
    assert "Syncing from Markdown to JSON..." in out
    assert "Meal plan synchronized successfully." in out


def test_exports(tmp_path, config_repository):
    run(config_repository, "add", "Tacos", "-t", "Dinner", "-d", "Monday", "-c", "Anna")
    ics = tmp_path / "out.ics"
    exported = tmp_path / "out.json"
    assert run(config_repository, "export-ical", "-o", str(ics)) == 0
    assert run(config_repository, "export-json", "-o", str(exported)) == 0
    assert b"SUMMARY:Tacos" in ics.read_bytes()
    assert json.loads(exported.read_text())["meals"][0]["cook"] == "Anna"


def test_week_override(tmp_path, config_repository):
    assert run(config_repository, "--week", "2024-01-14", "add", "Soup", "-t", "Lunch", "-d", "Monday", "-c", "Bob") == 0
    data = json.loads((tmp_path / "plans" / "2024-01-14" / "meal_plan.json").read_text())
    assert data["meals"][0]["day"] == "2024-01-15"


def test_missing_config_warns(tmp_path, capsys):
    repo = ConfigRepository(tmp_path / "config.json")
    assert cli_run.main([], config_repository=repo, today=TODAY) == 0
    captured = capsys.readouterr()
    assert "No configuration file found" in captured.err
    assert "Welcome to the Meal Plan CLI Tool!" in captured.out


def test_config_init(tmp_path, capsys):
    repo = ConfigRepository(tmp_path / "config.json")
    assert cli_run.main(["--path", str(tmp_path / "store"), "config", "init"],
                        config_repository=repo, today=TODAY) == 0
    assert "Configuration initialized successfully." in capsys.readouterr().out
    assert repo.load(TODAY).meal_plan_storage_path == tmp_path / "store"


def test_welcome_shows_summary(config_repository, capsys):
    run(config_repository, "add", "Tacos", "-t", "Dinner", "-d", "Monday", "-c", "Anna")
    capsys.readouterr()
    assert run(config_repository) == 0
    out = capsys.readouterr().out
    assert "Current Meal Plan Summary:" in out
    assert "Dinner: Tacos (Cook: Anna)" in out


class TestHandlers:

    def _handlers(self, tmp_path, answer=False, prompts=()):
        lines = []
        replies = iter(prompts)
        config = Config(tmp_path / "plans", date(2024, 1, 7))
        handlers = CommandHandlers(
            config, ConfigRepository(tmp_path / "config.json"),
            ask=lambda message: answer, prompt_text=lambda message: next(replies),
            out=lines.append, clock=lambda: TODAY,
        )
        return handlers, lines

    def test_remove_last_meal_cancelled(self, tmp_path):
        handlers, lines = self._handlers(tmp_path, answer=False)
        handlers.add("Tacos", "Dinner", "Monday", "Anna")
        with pytest.raises(OperationCancelled):
            handlers.remove("Dinner", "Monday")
        assert len(handlers.engine.load()) == 1

    def test_remove_last_meal_confirmed(self, tmp_path):
        handlers, lines = self._handlers(tmp_path, answer=True)
        handlers.add("Tacos", "Dinner", "Monday", "Anna")
        handlers.remove("Dinner", "Monday")
        assert handlers.engine.load().is_empty()
        assert lines[-1] == "Meal removed successfully."

    def test_interactive_edit_keeps_empty_answers(self, tmp_path):
        handlers, lines = self._handlers(tmp_path, prompts=("", "Burritos"))
        handlers.add("Tacos", "Dinner", "Monday", "Anna")
        handlers.edit("Dinner", "Monday")
        meal = handlers.engine.load().find_meal(*handlers._key("Dinner", "Monday"))
        assert (meal.cook, meal.description) == ("Anna", "Burritos")
        assert "Current meal details:" in lines

    def test_config_init_overwrite_declined(self, tmp_path):
        handlers, lines = self._handlers(tmp_path, answer=False)
        handlers.config_repository.init(TODAY)
        with pytest.raises(OperationCancelled):
            handlers.config_init(tmp_path / "elsewhere")


def test_export_recreates_missing_markdown(tmp_path, config_repository):
    run(config_repository, "add", "Tacos", "-t", "Dinner", "-d", "Monday", "-c", "Anna")
    md = tmp_path / "plans" / "2024-01-07" / "meal_plan.md"
    md.unlink()
    assert run(config_repository, "export-json", "-o", str(tmp_path / "out.json")) == 0
    assert "- Description: Tacos" in md.read_text()
