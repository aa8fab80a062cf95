import sys

from mealplan.cli.cli_run import main

sys.exit(main())
