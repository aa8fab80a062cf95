"""mealplan: weekly meal plans kept in sync between Markdown and JSON."""
__version__ = "0.1.0"
