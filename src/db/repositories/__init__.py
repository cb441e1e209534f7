"""DB repositories: sync functions taking a Database as first argument."""

from src.db.repositories import submission_repo, template_repo
from src.db.repositories.template_repo import (
    TemplateNotFoundError,
    TemplateProtectedError,
    extract_variables,
)

__all__ = [
    "submission_repo",
    "template_repo",
    "TemplateNotFoundError",
    "TemplateProtectedError",
    "extract_variables",
]
