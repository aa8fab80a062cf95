"""Core business logic layer.

Subpackages:
- reconciliation: Markdown/JSON sync and add/edit/remove semantics
- reporting: plan summaries for the console
"""
__all__ = ["reconciliation", "reporting"]
