"""Email templating: branded static templates and database-backed dynamic templates."""

from src.templating.renderer import TemplateRenderer, substitute

__all__ = ["TemplateRenderer", "substitute"]
