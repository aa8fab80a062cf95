import argparse
import logging
import sys
from datetime import date, datetime
from pathlib import Path
from typing import List, Optional

from mealplan import __version__
from mealplan.cli import observers
from mealplan.cli.handlers import CommandHandlers
from mealplan.domain.Config import Config
from mealplan.domain.errors import MealPlanError
from mealplan.infra.Config_Repository import ConfigRepository
from mealplan.utilities.config import LOG_LEVEL
from mealplan.utilities.constants import DATE_FORMAT

# Logging
logger = logging.getLogger("mealplan")

SYNC_SOURCES = ("auto", "json", "markdown", "md")


def _iso_date(value: str) -> date:
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mealplan",
        description="Organize a weekly meal plan kept in Markdown and JSON.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-p", "--path", type=Path, help="Custom storage path for meal plan files")
    parser.add_argument("-w", "--week", type=_iso_date,
                        help="Week start date (YYYY-MM-DD) instead of the configured one")
    parser.add_argument("-y", "--yes", action="store_true", help="Answer yes to every confirmation")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    commands = parser.add_subparsers(dest="command")

    add = commands.add_parser("add", help="Add a new meal to the plan")
    add.add_argument("description", help="Description of the meal")
    add.add_argument("-t", "--meal-type", required=True)
    add.add_argument("-d", "--day", required=True, help="Day name or YYYY-MM-DD")
    add.add_argument("-c", "--cook", required=True)
    add.add_argument("--replace", action="store_true",
                     help="Replace an existing meal of the same type and day instead of adding another")

    edit = commands.add_parser("edit", help="Edit an existing meal in the plan")
    edit.add_argument("description", nargs="?", help="New description for the meal")
    edit.add_argument("-t", "--meal-type", required=True)
    edit.add_argument("-d", "--day", required=True)
    edit.add_argument("-c", "--cook")

    remove = commands.add_parser("remove", help="Remove a meal from the plan")
    remove.add_argument("-t", "--meal-type", required=True)
    remove.add_argument("-d", "--day", required=True)

    ical = commands.add_parser("export-ical", help="Export the meal plan to iCal format")
    ical.add_argument("-o", "--output", type=Path)

    as_json = commands.add_parser("export-json", help="Export the meal plan to JSON format")
    as_json.add_argument("-o", "--output", type=Path)

    sync = commands.add_parser("sync", help="Sync the meal plan between JSON and Markdown formats")
    sync.add_argument("-s", "--source", default="auto", choices=SYNC_SOURCES, type=str.lower,
                      help="Source format to sync from (json, markdown, or auto)")

    config = commands.add_parser("config", help="Initialize or update the configuration")
    config_actions = config.add_subparsers(dest="action", required=True)
    config_actions.add_parser("init", help="Initialize the configuration")

    return parser


def _configure_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, LOG_LEVEL, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def _dispatch(args, handlers: CommandHandlers):
    if args.command == "add":
        handlers.add(args.description, args.meal_type, args.day, args.cook, replace=args.replace)
    elif args.command == "edit":
        handlers.edit(args.meal_type, args.day, description=args.description, cook=args.cook)
    elif args.command == "remove":
        handlers.remove(args.meal_type, args.day)
    elif args.command == "export-ical":
        handlers.export_ical(args.output)
    elif args.command == "export-json":
        handlers.export_json(args.output)
    elif args.command == "sync":
        handlers.sync(args.source)
    elif args.command == "config":
        handlers.config_init(args.path)
    else:
        handlers.welcome()


def main(argv: Optional[List[str]] = None, config_repository: Optional[ConfigRepository] = None,
         today: Optional[date] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    config_repository = config_repository or ConfigRepository()
    today = today or date.today()
    if not config_repository.exists() and args.command != "config":
        print(f"Warning: No configuration file found at {config_repository.config_file}", file=sys.stderr)
        print("Using default configuration. Run 'mealplan config init' to create a configuration file.",
              file=sys.stderr)
    config = config_repository.load(today)
    if args.path is not None:
        config = config.with_storage_path(args.path.expanduser())
    if args.week is not None:
        config = Config(config.meal_plan_storage_path, args.week, config.reject_past_dates)

    handlers = CommandHandlers(config, config_repository, clock=lambda: today, assume_yes=args.yes)
    listener = observers.start()
    try:
        _dispatch(args, handlers)
    except MealPlanError as e:
        logger.debug(f"Command {args.command or 'summary'} failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        observers.stop(listener)

    print(f"Storage path: {config.meal_plan_storage_path}")
    return 0


def run():
    """Console-script entry point."""
    sys.exit(main())
